# STDLIB Imports
import logging
from pathlib import Path

import numpy as np

# Pyside Imports
from PySide6.QtWidgets import QLabel, QWidget
from PySide6.QtCore import QPointF, Qt, QTimer, Signal
from PySide6.QtGui import QPainter

# This Project Imports
from geoglobe.animation import AnimationLoop, QtFrameScheduler
from geoglobe.config import GlobeConfig
from geoglobe.datasets import CITIES, CONTINENT_OUTLINES
from geoglobe.interaction import InteractionController
from geoglobe.models import GlobeState
from geoglobe.painter import create_surface, paint_onto, render_to_image
from geoglobe.renderer import render_frame, visible_cities
from geoglobe.scene import build_scene, sample_connections

logger = logging.getLogger(__name__)

HINT_STYLE = (
    "QLabel { background: rgba(0, 0, 0, 153); color: #d8b4fe;"
    " border: 1px solid rgba(168, 85, 247, 77); border-radius: 14px;"
    " padding: 6px 14px; font-size: 11px; }"
)


class GlobeWidget(QWidget):
    '''PySide6 widget displaying an interactive, slowly spinning globe

    The globe is mounted when the widget is shown and unmounted when it is
    hidden or closed by the application. Window system hides (minimize) leave
    it mounted. Each mount starts from a fresh view state, samples a new
    connection network and runs its own animation loop.
    '''

    infoSig = Signal(dict)

    def __init__(self, parent=None, cities=CITIES, outlines=CONTINENT_OUTLINES,
                 config: GlobeConfig | None = None, rng: np.random.Generator | None = None,
                 scheduler=None):
        '''
        Parameters
        ----------
        parent : QWidget
        cities : tuple[City]
            City markers to draw
        outlines : tuple[ContinentOutline]
            Border polylines to draw
        config : GlobeConfig
        rng : np.random.Generator
            Random source for the connection network, seed for reproducible output
        scheduler : FrameScheduler
            Frame callback source, defaults to a QTimer at the configured interval
        '''
        super().__init__(parent)
        self.setMinimumSize(300, 300)
        self.config = GlobeConfig() if config is None else config
        self.cities = tuple(cities)
        self.outlines = tuple(outlines)
        self.rng = np.random.default_rng() if rng is None else rng
        if scheduler is None:
            scheduler = QtFrameScheduler(self.config.frame_interval_ms, self)
        self.scheduler = scheduler

        self.state = GlobeState()
        self.controller = InteractionController(self.state, self.config.drag_sensitivity)
        self.connections = ()
        self.scene = None
        self.surface = None
        self.loop = None
        self.mounted = False
        self.dpr = 1.0

        # Hover hint
        self.hint = QLabel(self)
        self.hint.setStyleSheet(HINT_STYLE)
        self.hint.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.hint.hide()

        self.setCursor(Qt.CursorShape.OpenHandCursor)

        # Publish info to display on a timer
        self.info_timer = QTimer(self)
        self.info_timer.timeout.connect(self.publish_display_info)

    #------------------------------------------------
    # Lifecycle
    #------------------------------------------------
    def mount(self) -> None:
        '''Reset view state, build geometry and start the animation loop

        If no drawing surface can be created the widget stays blank: nothing is
        scheduled and setup is not retried until the next mount.
        '''
        if self.mounted:
            return
        self.mounted = True

        self.state = GlobeState()
        self.controller = InteractionController(self.state, self.config.drag_sensitivity)
        self.connections = sample_connections(
            len(self.cities), self.config.connection_probability, self.rng
        )
        innovators = int(self.rng.integers(450, 500))
        self.hint.setText(f"Drag to explore • {innovators}+ global innovators")
        self.hint.adjustSize()

        self.dpr = self.devicePixelRatioF()
        if not self._setup_surface():
            logger.warning(f"No drawing surface for {self.width()}x{self.height()}, globe left blank")
            return

        logger.debug(f"Mounted globe: radius {self.scene.radius:.1f}, "
                     f"{len(self.connections)} connections, dpr {self.dpr}")
        self.loop = AnimationLoop(self.state, self.on_frame, self.scheduler, self.config)
        self.loop.start()
        self.info_timer.start(1000)

    def unmount(self) -> None:
        '''Stop the animation loop and release the drawing surface'''
        if not self.mounted:
            return
        self.mounted = False
        if self.loop is not None:
            self.loop.stop()
            self.loop = None
        self.info_timer.stop()
        self.surface = None
        self.scene = None
        logger.debug("Unmounted globe")

    def _setup_surface(self) -> bool:
        width, height = self.width(), self.height()
        surface = create_surface(width, height, self.dpr)
        if surface is None:
            self.surface = None
            self.scene = None
            return False
        self.scene = build_scene(width, height, self.cities, self.outlines,
                                 self.connections, self.config)
        self.surface = surface
        return True

    #------------------------------------------------
    # Drawing
    #------------------------------------------------
    def on_frame(self, state: GlobeState) -> None:
        '''Animation loop callback: draw the frame onto the surface'''
        if self.surface is None or self.scene is None:
            return
        commands = render_frame(state, self.scene, self.config)
        paint_onto(self.surface, commands)
        self.update()

    def paintEvent(self, event):
        if self.surface is None:
            return
        painter = QPainter(self)
        painter.drawImage(QPointF(0, 0), self.surface)
        painter.end()

    def _place_hint(self) -> None:
        x = (self.width() - self.hint.width()) // 2
        y = self.height() - self.hint.height() - 16
        self.hint.move(max(0, x), max(0, y))

    #-------------------------------------------------------
    # EVENT HANDLERS
    #-------------------------------------------------------
    def publish_display_info(self) -> None:
        '''Emit view info'''
        if self.scene is None:
            return
        pitch, yaw = self.state.view_angles()
        self.infoSig.emit({'pitch': pitch,
                           'yaw': yaw,
                           'auto_rotation': self.state.phase.auto_rotation_angle,
                           'visible_cities': visible_cities(self.state, self.scene, self.config),
                           'connections': len(self.connections),
                           'frames': self.loop.frames if self.loop is not None else 0})

    def showEvent(self, event):
        super().showEvent(event)
        # Restoring a minimized window is spontaneous, the globe stayed mounted
        if not event.spontaneous():
            self.mount()

    def hideEvent(self, event):
        # Minimizing only hides spontaneously, keep view state and network
        if not event.spontaneous():
            self.unmount()
        super().hideEvent(event)

    def closeEvent(self, event):
        self.unmount()
        super().closeEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._place_hint()
        # Rebuild geometry for the new size; rotation and network persist
        if self.mounted and self.loop is not None:
            if not self._setup_surface():
                logger.warning("Drawing surface lost on resize, stopping animation")
                self.loop.stop()
                self.loop = None

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.controller.pointer_down(pos.x(), pos.y())
            self.setCursor(Qt.CursorShape.ClosedHandCursor)

    def mouseMoveEvent(self, event):
        pos = event.position()
        self.controller.pointer_move(pos.x(), pos.y())

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.controller.pointer_up()
            self.setCursor(Qt.CursorShape.OpenHandCursor)

    def enterEvent(self, event):
        self.controller.pointer_enter()
        self._place_hint()
        self.hint.show()
        super().enterEvent(event)

    def leaveEvent(self, event):
        self.controller.pointer_leave()
        self.hint.hide()
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        super().leaveEvent(event)

# end class GlobeWidget


def save_snapshot(path, width: int = 800, height: int = 800, state: GlobeState | None = None,
                  cities=CITIES, outlines=CONTINENT_OUTLINES, config: GlobeConfig | None = None,
                  rng: np.random.Generator | None = None, dpr: float = 1.0) -> Path:
    """Render a single frame of the globe to an image file

    Needs a QGuiApplication for text rendering.

    Parameters
    ----------
    path : str | Path
        Destination, the format follows the suffix
    width, height : int
        Logical size
    state : GlobeState
        View to render, a freshly mounted view if None

    Returns
    -------
    path : Path

    Raises
    ------
    OSError
        If the image cannot be created or written
    """
    if width <= 0 or height <= 0:
        raise OSError(f"Cannot create a {width}x{height} drawing surface")
    config = GlobeConfig() if config is None else config
    state = GlobeState() if state is None else state
    rng = np.random.default_rng() if rng is None else rng
    connections = sample_connections(len(cities), config.connection_probability, rng)
    scene = build_scene(width, height, cities, outlines, connections, config)

    image = render_to_image(render_frame(state, scene, config), width, height, dpr)
    path = Path(path)
    if image is None:
        raise OSError(f"Cannot create a {width}x{height} drawing surface")
    path.parent.mkdir(parents=True, exist_ok=True)
    if not image.save(str(path)):
        raise OSError(f"Failed to write {path}")
    logger.info(f"Saved snapshot {path}")
    return path
