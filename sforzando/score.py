"""
The score structure dynamics are attached to

This is the minimal context needed to lay out a :class:`~sforzando.dynamic.Dynamic`:
a :class:`Score` (style, tempo map, glyph metrics), its systems with one
:class:`Staff` (and its skyline) per staff, measures and segments. A
:class:`Segment` is a time position within a measure holding the elements
(chords, rests) of each track. There are :data:`VOICES` tracks per staff.
"""
from __future__ import annotations

from . import _util
from .common import F, F0, asF, logger, num_t
from .config import config
from .geometry import PointF, RectF
from .glyphs import GlyphMetrics
from .skyline import Skyline
from .tempo import TempoMap

from typing import Any


__all__ = (
    'VOICES',
    'Score',
    'System',
    'Staff',
    'Measure',
    'Segment',
    'Chord',
    'Rest',
)


VOICES = 4
"""Number of voices (tracks) per staff"""


class Score:
    """
    Holds the style, tempo map and glyph metrics shared by all elements

    Args:
        style: overrides for the default style (see :mod:`sforzando.config`)
        tempomap: the tempo map. If not given, a constant tempo of 120 is used
        glyphMetrics: the glyph metrics. If not given, the metrics at the
            configured path (or the bundled metrics) are used
    """
    def __init__(self,
                 style: dict[str, Any] | None = None,
                 tempomap: TempoMap | None = None,
                 glyphMetrics: GlyphMetrics | None = None):
        self._style: dict[str, Any] = {}
        if style:
            for key, value in style.items():
                self.setStyle(key, value)
        self.tempomap = tempomap if tempomap is not None else TempoMap()

        if glyphMetrics is None:
            path = self.style('glyphMetricsPath')
            glyphMetrics = GlyphMetrics.load(path) if path else GlyphMetrics.default()
        self.glyphMetrics = glyphMetrics

        self.layoutRequests: list[F] = []
        """Positions for which a relayout was requested"""

    def __repr__(self):
        return _util.reprObj(self, exclude=('glyphMetrics', 'layoutRequests'), hideFalsy=True)

    def style(self, key: str) -> Any:
        """The style value for key, either overridden for this score or the default"""
        value = self._style.get(key)
        return value if value is not None else config[key]

    def setStyle(self, key: str, value: Any) -> None:
        _util.checkChoice('style key', key, list(config.keys()))
        self._style[key] = value

    @property
    def spatium(self) -> float:
        return float(self.style('spatium'))

    def noteHeadWidth(self) -> float:
        """Width of a black notehead at SPATIUM20"""
        return self.glyphMetrics.noteheadWidth()

    def setLayout(self, tick: F) -> None:
        """Request a relayout around the given position"""
        logger.debug(f"Relayout requested at {tick}")
        self.layoutRequests.append(tick)

    @property
    def layoutInvalid(self) -> bool:
        return bool(self.layoutRequests)

    def clearLayoutRequests(self) -> None:
        self.layoutRequests.clear()


class Staff:
    """
    A staff within a system

    Args:
        index: the index of this staff within the system
        mag: the size of this staff relative to the score's spatium (1=normal,
            smaller for cue or ossia staves)
    """
    def __init__(self, index: int, mag=1.0):
        self.index = index
        self.mag = mag
        self.skyline = Skyline()

    def __repr__(self):
        return f"Staff(index={self.index}, mag={self.mag})"


class System:
    """A line of music, with one Staff per staff of the score"""
    def __init__(self, numStaves=1, mags: list[float] | None = None):
        if mags is not None and len(mags) != numStaves:
            raise ValueError(f"Expected {numStaves} staff magnifications, got {mags}")
        self.staves = [Staff(index=i, mag=mags[i] if mags else 1.0)
                       for i in range(numStaves)]

    def staff(self, idx: int) -> Staff:
        return self.staves[idx]


class Measure:
    """
    A measure within a system

    Args:
        system: the system this measure belongs to
        pos: position of the measure within the system
        tick: start of the measure, in quarter notes
    """
    def __init__(self, system: System, pos=PointF(), tick: num_t = F0):
        self.system = system
        self.pos = pos
        self.tick = asF(tick)
        self.segments: list[Segment] = []

    def __repr__(self):
        return f"Measure(tick={self.tick}, pos={self.pos})"

    def addSegment(self, tick: num_t, x: float) -> Segment:
        """
        Add a segment to this measure

        Args:
            tick: the position of the segment in the score, in quarter notes
            x: the horizontal position of the segment, relative to the measure
        """
        seg = Segment(self, tick=tick, x=x)
        self.segments.append(seg)
        return seg


class Element:
    """Base class for elements held by a segment"""
    isChord = False

    def __init__(self, width: float, track=0):
        self.width = width
        self.track = track
        self.segment: Segment | None = None

    def __repr__(self):
        return f"{type(self).__name__}(track={self.track}, width={self.width})"


class Chord(Element):
    """A chord (or single note). Only its width is relevant for layout"""
    isChord = True


class Rest(Element):
    pass


class Segment:
    """
    A time position within a measure

    Args:
        measure: the measure this segment belongs to
        tick: the position of this segment in the score, in quarter notes
        x: the horizontal position of this segment relative to its measure
    """
    def __init__(self, measure: Measure, tick: num_t = F0, x=0.):
        self.measure = measure
        self.tick = asF(tick)
        self.x = x
        self._elements: dict[int, Element] = {}

    def __repr__(self):
        return f"Segment(tick={self.tick}, x={self.x}, tracks={sorted(self._elements)})"

    @property
    def pos(self) -> PointF:
        return PointF(self.x, 0.)

    def add(self, element: Element, track: int | None = None) -> Element:
        """
        Add an element to this segment

        Args:
            element: the element to add
            track: the track to place it in. If not given, the element's own track is used
        """
        if track is not None:
            element.track = track
        element.segment = self
        self._elements[element.track] = element
        return element

    def element(self, track: int) -> Element | None:
        """The element at the given track, or None"""
        return self._elements.get(track)

    def system(self) -> System:
        return self.measure.system

    def canvasRect(self, rect: RectF) -> RectF:
        """Translate a rect relative to this segment to system coordinates"""
        return rect.translated(self.pos + self.measure.pos)
