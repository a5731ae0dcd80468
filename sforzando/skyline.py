"""
Skylines: the envelope of the engraved content of a staff

A :class:`Skyline` records the topmost (``north``) and bottommost (``south``)
extent of everything already placed on a staff. Elements which are
autoplaced query it to find how far they must move to clear their neighbours.

A skyline is shared by all the elements of a staff within a system. Elements
are placed one at a time, left to right; each element queries the skyline
and only afterwards is its own rect added (via :meth:`Skyline.add`) by
whoever drives the layout. An element never sees elements placed after it.
"""
from __future__ import annotations
from dataclasses import dataclass

from ._util import hasoverlap
from .geometry import RectF


__all__ = (
    'SkylineSegment',
    'SkylineLine',
    'Skyline',
)


@dataclass(frozen=True)
class SkylineSegment:
    x: float
    width: float
    y: float

    @property
    def end(self) -> float:
        return self.x + self.width


class SkylineLine:
    """
    One side of a skyline

    Args:
        north: if True, the line follows the top edge of the rects added to it,
            otherwise their bottom edge
    """
    def __init__(self, north: bool):
        self.north = north
        self.segments: list[SkylineSegment] = []

    def __repr__(self):
        side = 'north' if self.north else 'south'
        return f"SkylineLine({side}, segments={self.segments})"

    def __len__(self) -> int:
        return len(self.segments)

    def add(self, rect: RectF) -> None:
        """Add the corresponding edge of rect to this line"""
        if rect.width <= 0:
            return
        y = rect.top if self.north else rect.bottom
        self.segments.append(SkylineSegment(rect.x, rect.width, y))

    def clear(self) -> None:
        self.segments.clear()

    def minDistance(self, other: SkylineLine) -> float:
        """
        The signed distance between this line and other

        This is the max. of ``self.y - other.y`` over all horizontally
        overlapping parts of both lines. With self being a south line and other
        a north line, a positive value means that self reaches below the top
        of other, i.e. they collide.

        Returns:
            the distance, or ``-inf`` if both lines do not overlap horizontally
        """
        dist = float('-inf')
        for seg in self.segments:
            for otherseg in other.segments:
                if hasoverlap(seg.x, seg.end, otherseg.x, otherseg.end):
                    d = seg.y - otherseg.y
                    if d > dist:
                        dist = d
        return dist


class Skyline:
    """The north and south lines of a staff"""
    def __init__(self):
        self.north = SkylineLine(north=True)
        self.south = SkylineLine(north=False)

    def __repr__(self):
        return f"Skyline(north={len(self.north)} segments, south={len(self.south)} segments)"

    def add(self, rect: RectF) -> None:
        """
        Contribute a placed element to this skyline

        Must be called only after the element's position is final
        """
        self.north.add(rect)
        self.south.add(rect)

    def clear(self) -> None:
        self.north.clear()
        self.south.clear()
