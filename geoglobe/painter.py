import logging
from contextlib import contextmanager

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QImage,
    QLinearGradient,
    QPainter,
    QPainterPath,
    QPen,
    QRadialGradient,
)

from geoglobe.draw_commands import (
    Clear,
    Color,
    DrawText,
    FillCircle,
    FillRoundRect,
    LinearGradient,
    RadialGradient,
    StrokeCircle,
    StrokePolyline,
    StrokeQuadCurve,
)

logger = logging.getLogger(__name__)


@contextmanager
def painter_state_guard(painter: QPainter) -> None:
    """Context manager to save/restore QPainter state around one command"""
    painter.save()
    try:
        yield
    finally:
        painter.restore()


#------------------------------------------------
# Paint conversion
#------------------------------------------------
def to_qcolor(color: Color) -> QColor:
    return QColor(color.r, color.g, color.b, round(color.a * 255))


def to_brush(paint) -> QBrush:
    '''Convert a Color or gradient into a QBrush

    Parameters
    ----------
    paint : Color | RadialGradient | LinearGradient

    Returns
    -------
    brush : QBrush
    '''
    if isinstance(paint, Color):
        return QBrush(to_qcolor(paint))
    if isinstance(paint, RadialGradient):
        # Qt names the outer circle the center and the inner one the focal circle
        gradient = QRadialGradient(QPointF(paint.x1, paint.y1), paint.r1,
                                   QPointF(paint.x0, paint.y0), paint.r0)
    elif isinstance(paint, LinearGradient):
        gradient = QLinearGradient(QPointF(paint.x0, paint.y0), QPointF(paint.x1, paint.y1))
    else:
        raise TypeError(f"Unsupported paint {paint!r}")
    for stop in paint.stops:
        gradient.setColorAt(stop.offset, to_qcolor(stop.color))
    return QBrush(gradient)


def _polyline_path(points) -> QPainterPath:
    path = QPainterPath()
    (x0, y0), rest = points[0], points[1:]
    path.moveTo(x0, y0)
    for x, y in rest:
        path.lineTo(x, y)
    return path


#------------------------------------------------
# Command handlers
#------------------------------------------------
def _paint_clear(painter: QPainter, cmd: Clear) -> None:
    painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
    painter.fillRect(QRectF(0, 0, cmd.width, cmd.height), Qt.GlobalColor.transparent)


def _paint_fill_circle(painter: QPainter, cmd: FillCircle) -> None:
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(to_brush(cmd.fill))
    painter.drawEllipse(QPointF(cmd.cx, cmd.cy), cmd.radius, cmd.radius)


def _paint_stroke_circle(painter: QPainter, cmd: StrokeCircle) -> None:
    painter.setBrush(Qt.BrushStyle.NoBrush)
    painter.setPen(QPen(to_brush(cmd.stroke), cmd.width))
    painter.drawEllipse(QPointF(cmd.cx, cmd.cy), cmd.radius, cmd.radius)


def _paint_polyline(painter: QPainter, cmd: StrokePolyline) -> None:
    if len(cmd.points) < 2:
        return
    path = _polyline_path(cmd.points)
    painter.setBrush(Qt.BrushStyle.NoBrush)
    cap = Qt.PenCapStyle.RoundCap if cmd.round_caps else Qt.PenCapStyle.FlatCap
    join = Qt.PenJoinStyle.RoundJoin if cmd.round_caps else Qt.PenJoinStyle.MiterJoin

    # QPainter has no shadow blur, so the glow is stacked wide translucent strokes
    if cmd.glow_blur > 0 and cmd.glow_color is not None:
        passes = 3
        for i in range(passes):
            spread = cmd.glow_blur * (passes - i) / passes
            glow = cmd.glow_color.with_alpha(cmd.glow_color.a / (passes + 1))
            pen = QPen(to_brush(glow), cmd.width + spread, Qt.PenStyle.SolidLine, cap, join)
            painter.setPen(pen)
            painter.drawPath(path)

    painter.setPen(QPen(to_brush(cmd.stroke), cmd.width, Qt.PenStyle.SolidLine, cap, join))
    painter.drawPath(path)


def _paint_quad_curve(painter: QPainter, cmd: StrokeQuadCurve) -> None:
    path = QPainterPath()
    path.moveTo(*cmd.start)
    path.quadTo(QPointF(*cmd.control), QPointF(*cmd.end))
    painter.setBrush(Qt.BrushStyle.NoBrush)
    painter.setPen(QPen(to_brush(cmd.stroke), cmd.width))
    painter.drawPath(path)


def _paint_round_rect(painter: QPainter, cmd: FillRoundRect) -> None:
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(to_brush(cmd.fill))
    painter.drawRoundedRect(QRectF(cmd.x, cmd.y, cmd.width, cmd.height), cmd.radius, cmd.radius)


def _paint_text(painter: QPainter, cmd: DrawText) -> None:
    font = QFont()
    font.setStyleHint(QFont.StyleHint.SansSerif)
    font.setPixelSize(cmd.pixel_size)
    painter.setFont(font)
    painter.setPen(to_qcolor(cmd.color))
    box = QRectF(cmd.x - 5 * cmd.pixel_size, cmd.y - cmd.pixel_size,
                 10 * cmd.pixel_size, 2 * cmd.pixel_size)
    painter.drawText(box, Qt.AlignmentFlag.AlignCenter, cmd.text)


_HANDLERS = {
    Clear: _paint_clear,
    FillCircle: _paint_fill_circle,
    StrokeCircle: _paint_stroke_circle,
    StrokePolyline: _paint_polyline,
    StrokeQuadCurve: _paint_quad_curve,
    FillRoundRect: _paint_round_rect,
    DrawText: _paint_text,
}


def paint_commands(painter: QPainter, commands) -> None:
    """Execute draw commands in order on an active painter

    Raises
    ------
    TypeError
        For an object that is not a draw command
    """
    for cmd in commands:
        handler = _HANDLERS.get(type(cmd))
        if handler is None:
            raise TypeError(f"Unsupported draw command {cmd!r}")
        with painter_state_guard(painter):
            handler(painter, cmd)


#------------------------------------------------
# Surfaces
#------------------------------------------------
def create_surface(width: float, height: float, dpr: float = 1.0) -> QImage | None:
    '''Create a transparent image to draw on, sized in device pixels

    Parameters
    ----------
    width, height : float
        Logical size
    dpr : float
        Device pixel ratio, painting on the surface uses logical coordinates

    Returns
    -------
    surface : QImage | None
        None when no usable surface can be made (empty size, allocation failure)
    '''
    pixel_w = int(round(width * dpr))
    pixel_h = int(round(height * dpr))
    if pixel_w <= 0 or pixel_h <= 0:
        return None
    image = QImage(pixel_w, pixel_h, QImage.Format.Format_ARGB32_Premultiplied)
    if image.isNull():
        return None
    image.setDevicePixelRatio(dpr)
    image.fill(Qt.GlobalColor.transparent)
    return image


def paint_onto(surface: QImage, commands) -> bool:
    """Paint a frame onto a surface. Returns False if the surface cannot be painted"""
    painter = QPainter(surface)
    if not painter.isActive():
        logger.warning("Drawing surface rejected the painter, frame skipped")
        return False
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        paint_commands(painter, commands)
    finally:
        painter.end()
    return True


def render_to_image(commands, width: float, height: float, dpr: float = 1.0) -> QImage | None:
    """Paint commands onto a fresh surface, e.g. for snapshots"""
    surface = create_surface(width, height, dpr)
    if surface is None:
        return None
    if not paint_onto(surface, commands):
        return None
    return surface
