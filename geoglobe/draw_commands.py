"""Immediate-mode draw primitives produced by the renderer.

Every command is a frozen value built from floats and tuples, so a frame can be
compared command by command.
"""

from dataclasses import dataclass
from typing import NamedTuple, Union


class Color(NamedTuple):
    """sRGB colour, channels 0..255 and alpha 0..1."""

    r: int
    g: int
    b: int
    a: float = 1.0

    @classmethod
    def from_hex(cls, token: str, alpha: float = 1.0) -> "Color":
        """Parse "#RRGGBB" or "#RRGGBBAA"."""
        s = token.lstrip('#')
        if len(s) not in (6, 8):
            raise ValueError(f"Not a hex colour: {token!r}")
        r, g, b = (int(s[i:i + 2], 16) for i in (0, 2, 4))
        if len(s) == 8:
            alpha = int(s[6:8], 16) / 255
        return cls(r, g, b, alpha)

    def with_alpha(self, alpha: float) -> "Color":
        return self._replace(a=min(1.0, max(0.0, float(alpha))))


class GradientStop(NamedTuple):
    offset: float
    color: Color


@dataclass(frozen=True)
class RadialGradient:
    """Gradient between a start circle (x0, y0, r0) and an end circle (x1, y1, r1)."""

    x0: float
    y0: float
    r0: float
    x1: float
    y1: float
    r1: float
    stops: tuple[GradientStop, ...]


@dataclass(frozen=True)
class LinearGradient:
    x0: float
    y0: float
    x1: float
    y1: float
    stops: tuple[GradientStop, ...]


Paint = Union[Color, RadialGradient, LinearGradient]


@dataclass(frozen=True)
class Clear:
    width: float
    height: float


@dataclass(frozen=True)
class FillCircle:
    cx: float
    cy: float
    radius: float
    fill: Paint


@dataclass(frozen=True)
class StrokeCircle:
    cx: float
    cy: float
    radius: float
    stroke: Paint
    width: float = 1.0


@dataclass(frozen=True)
class StrokePolyline:
    """Open polyline. glow_blur > 0 adds a soft halo in glow_color beneath it."""

    points: tuple[tuple[float, float], ...]
    stroke: Paint
    width: float = 1.0
    round_caps: bool = False
    glow_blur: float = 0.0
    glow_color: Color | None = None


@dataclass(frozen=True)
class StrokeQuadCurve:
    start: tuple[float, float]
    control: tuple[float, float]
    end: tuple[float, float]
    stroke: Paint
    width: float = 1.0


@dataclass(frozen=True)
class FillRoundRect:
    x: float
    y: float
    width: float
    height: float
    radius: float
    fill: Paint


@dataclass(frozen=True)
class DrawText:
    """Text centred on (x, y)."""

    x: float
    y: float
    text: str
    color: Color
    pixel_size: int = 10


DrawCommand = Union[Clear, FillCircle, StrokeCircle, StrokePolyline, StrokeQuadCurve,
                    FillRoundRect, DrawText]
