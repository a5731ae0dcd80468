"""
Minimal 2D value types used during layout

The y axis points downwards: a rectangle's ``top`` is its smallest y value
"""
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class PointF:
    x: float = 0.
    y: float = 0.

    def __add__(self, other: PointF) -> PointF:
        return PointF(self.x + other.x, self.y + other.y)

    def __sub__(self, other: PointF) -> PointF:
        return PointF(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> PointF:
        return PointF(self.x * factor, self.y * factor)

    def withX(self, x: float) -> PointF:
        return PointF(x, self.y)

    def withY(self, y: float) -> PointF:
        return PointF(self.x, y)


@dataclass(frozen=True)
class RectF:
    x: float = 0.
    y: float = 0.
    width: float = 0.
    height: float = 0.

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def bottomLeft(self) -> PointF:
        return PointF(self.x, self.bottom)

    @property
    def topRight(self) -> PointF:
        return PointF(self.right, self.y)

    def isEmpty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def translated(self, dx: float | PointF, dy: float = 0.) -> RectF:
        """
        A copy of this rect moved by (dx, dy)

        Args:
            dx: the horizontal displacement, or a PointF with both displacements
            dy: the vertical displacement, ignored if dx is a PointF
        """
        if isinstance(dx, PointF):
            dx, dy = dx.x, dx.y
        return RectF(self.x + dx, self.y + dy, self.width, self.height)

    def united(self, other: RectF) -> RectF:
        """The smallest rect containing both self and other"""
        if self.isEmpty():
            return other
        if other.isEmpty():
            return self
        x0 = min(self.left, other.left)
        y0 = min(self.top, other.top)
        x1 = max(self.right, other.right)
        y1 = max(self.bottom, other.bottom)
        return RectF(x0, y0, x1 - x0, y1 - y0)

    @staticmethod
    def fromCorners(sw: tuple[float, float], ne: tuple[float, float]) -> RectF:
        """
        Create a RectF from its south-west and north-east corners

        The corners follow the glyph metrics convention where y points
        upwards (as in SMuFL metadata). The resulting rect uses the layout
        convention (y points downwards)
        """
        x0, y0 = sw
        x1, y1 = ne
        return RectF(x0, -y1, x1 - x0, y1 - y0)
