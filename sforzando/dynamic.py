"""
Dynamic: a dynamic marking (p, f, mf, sfz, ...) attached to a segment

A :class:`Dynamic` combines a playback semantic (the midi velocity it implies,
an optional change in velocity and the time over which that change happens)
with the layout of the marking: horizontally it is centered under the
notehead it refers to, using the optical center of its glyph; vertically it
is moved away from the staff to clear any element already placed there.

Example
~~~~~~~

    >>> from sforzando.score import Score
    >>> from sforzando.dynamic import Dynamic
    >>> score = Score()
    >>> dyn = Dynamic(score)
    >>> dyn.resolveKind('sfz')
    >>> dyn.velocity(), dyn.changeInVelocity()
    (112, -18)
    >>> dyn.resolveKind('poco f')
    >>> dyn.kind, dyn.xmlText
    (<DynamicKind.OTHER: 'other'>, 'poco f')

"""
from __future__ import annotations

from . import _util
from . import catalog
from . import properties
from .catalog import DynamicKind, DynamicRange, DynamicSpeed
from .common import F, F0, SPATIUM20, asF, logger
from .geometry import PointF, RectF
from .properties import Pid
from .skyline import SkylineLine
from .textbase import TextElement, asMarkup

from typing import TYPE_CHECKING, Any
if TYPE_CHECKING:
    from .score import Score, Segment, Staff


__all__ = (
    'Dynamic',
    'speedMultipliers',
)


speedMultipliers = {
    DynamicSpeed.SLOW: 1.3,
    DynamicSpeed.NORMAL: 0.8,
    DynamicSpeed.FAST: 0.5,
}
"""Length of a velocity change, in quarter notes at the reference tempo"""


_defaultFontSize = 10.0
"""The font size at which dynamics glyphs have their nominal size"""


class Dynamic:
    """
    A dynamic marking

    Args:
        score: the score this dynamic belongs to
        segment: the segment this dynamic is attached to, if any
        track: the track of this dynamic. The staff is ``track // 4``
        kind: the kind of dynamic, or a text to be resolved via
            :meth:`resolveKind`
    """

    def __init__(self,
                 score: Score,
                 segment: Segment | None = None,
                 track=0,
                 kind: DynamicKind | str = DynamicKind.OTHER):
        self.score = score
        self.segment = segment
        self.track = track

        self.text = TextElement(score, textStyle='dynamics', spatium=self.spatium)
        """Text content and placement"""

        self.kind = DynamicKind.OTHER
        """The kind of this dynamic"""

        self.explicitVelocity: int | None = None
        """If given, overrides the velocity of the kind"""

        self.dynamicRange = DynamicRange.PART
        """The scope over which the velocity of this dynamic applies"""

        self.explicitVelocityChange: int | None = None
        """If given, overrides the change in velocity of the kind"""

        self.velocityChangeSpeed = DynamicSpeed.NORMAL
        """How fast the change in velocity happens"""

        self.layoutInvalid = False
        """Set when a property changes, cleared by :meth:`layout`"""

        if isinstance(kind, str):
            self.resolveKind(kind)
        elif kind is not DynamicKind.OTHER:
            self.setKind(kind)

    def __repr__(self):
        return _util.reprObj(self,
                             priorityargs=('kind',),
                             exclude=('score', 'segment', 'text'),
                             properties=('xmlText',),
                             hideFalsy=True,
                             quoteStrings=('xmlText',),
                             convert={'kind': lambda k: k.tag})

    def copy(self) -> Dynamic:
        out = Dynamic(self.score, segment=self.segment, track=self.track)
        out.text = self.text.copy(spatium=out.spatium)
        out.kind = self.kind
        out.explicitVelocity = self.explicitVelocity
        out.dynamicRange = self.dynamicRange
        out.explicitVelocityChange = self.explicitVelocityChange
        out.velocityChangeSpeed = self.velocityChangeSpeed
        return out

    # ------------------- text

    @property
    def xmlText(self) -> str:
        return self.text.xmlText

    def plainText(self) -> str:
        return self.text.plainText()

    def setKind(self, kind: DynamicKind) -> None:
        """Set the kind and the text corresponding to it"""
        self.kind = kind
        self.text.xmlText = catalog.glyphTextOf(kind)

    def resolveKind(self, tag: str) -> None:
        """
        Set the kind from a tag or a text

        If tag is the short tag of a kind ('sfz') or exactly its glyph text,
        that kind is set together with its glyph text. Otherwise the kind is
        OTHER and tag is used as text ("poco f"), escaped if it is not
        well formed markup

        Args:
            tag: the tag or text
        """
        kind = catalog.kindFromTag(tag) or catalog.kindFromGlyphText(tag)
        if kind is not None:
            self.setKind(kind)
            return
        logger.debug(f"Dynamic text not in catalog, using it as is: '{tag}'")
        self.kind = DynamicKind.OTHER
        self.text.xmlText = asMarkup(tag)

    def endEdit(self, text: str) -> None:
        """
        Finish a text edit

        If the text differs from the glyph text of the current kind, this
        dynamic becomes OTHER

        Args:
            text: the edited text
        """
        self.text.xmlText = asMarkup(text)
        if self.text.xmlText != catalog.glyphTextOf(self.kind):
            self.kind = DynamicKind.OTHER
        self.triggerLayout()

    def subtypeName(self) -> str:
        return self.kind.tag

    @staticmethod
    def dynamicText(kind: DynamicKind) -> str:
        return catalog.glyphTextOf(kind)

    def accessibleInfo(self) -> str:
        """A short description of this dynamic"""
        if self.kind is DynamicKind.OTHER:
            s = ' '.join(self.plainText().split())
            if len(s) > 20:
                s = s[:20] + '…'
        else:
            s = catalog.userName(self.kind)
        return f"Dynamic: {s}"

    def screenReaderInfo(self) -> str:
        if self.kind is DynamicKind.OTHER:
            s = ' '.join(self.plainText().split())
        else:
            s = catalog.userName(self.kind)
        return f"Dynamic: {s}"

    # ------------------- velocity

    def velocity(self) -> int | None:
        """
        The midi velocity of this dynamic

        Returns:
            the explicit velocity, if set, or the velocity of the kind.
            None if the kind is OTHER and no explicit velocity was set
        """
        if self.explicitVelocity is not None:
            return self.explicitVelocity
        return catalog.lookup(self.kind).baseVelocity

    def changeInVelocity(self) -> int:
        """The change in velocity implied by this dynamic"""
        if self.explicitVelocityChange is not None:
            return self.explicitVelocityChange
        return catalog.lookup(self.kind).velocityDelta

    def setChangeInVelocity(self, value: int | None) -> None:
        """
        Set the change in velocity

        A value equal to the change of the kind clears the override, so that
        the change follows the kind if it is modified later

        Args:
            value: the change in velocity, or None to clear any override
        """
        if value is None or value == catalog.lookup(self.kind).velocityDelta:
            self.explicitVelocityChange = None
        else:
            self.explicitVelocityChange = value

    def isVelocityChangeAvailable(self) -> bool:
        """Does the kind of this dynamic support a change in velocity?"""
        return catalog.isAccentStyle(self.kind)

    def tick(self) -> F:
        return self.segment.tick if self.segment is not None else F0

    def velocityChangeDuration(self) -> F:
        """
        The duration of the velocity change, in quarter notes

        The duration depends on the speed of the change and is scaled by the
        ratio between the tempo at this dynamic and the reference tempo.
        Fractional ticks are truncated

        Returns:
            the duration, 0 if there is no change in velocity
        """
        if self.changeInVelocity() == 0:
            return F0
        referenceTempo = asF(self.score.style('referenceTempo'))
        tempoRatio = float(self.score.tempomap.tempoAt(self.tick()) / referenceTempo)
        speedMult = speedMultipliers.get(self.velocityChangeSpeed, speedMultipliers[DynamicSpeed.NORMAL])
        division = int(self.score.style('division'))
        ticks = int(tempoRatio * (speedMult * division))
        return F(ticks, division)

    # ------------------- layout

    def staffIdx(self) -> int:
        return self.track // 4

    def staff(self) -> Staff | None:
        if self.segment is None:
            return None
        return self.segment.system().staff(self.staffIdx())

    def spatium(self) -> float:
        """The spatium of the staff this dynamic is placed on"""
        staff = self.staff()
        mag = staff.mag if staff is not None else 1.0
        return self.score.spatium * mag

    def placeAbove(self) -> bool:
        return self.text.placeAbove()

    def layout(self) -> None:
        """
        Horizontal layout

        Centers this dynamic under the first chord found at its segment. The
        chord's notehead is used as reference and the dynamic glyph is aligned
        to its optical center instead of the center of its bounding box
        """
        spatium = self.spatium()
        self.text.layout(spatium)
        self.layoutInvalid = False

        seg = self.segment
        if seg is None:
            self.text.pos = PointF()
            return

        firstTrack = self.track & ~0x3
        for voice in range(4):
            elem = seg.element(firstTrack + voice)
            if elem is None:
                continue
            x = self.text.pos.x
            if elem.isChord and self.text.align == 'hcenter':
                # Depends on the staff, not on the chord or the font size, so
                # that small staves and cue notes scale consistently
                mag = spatium / SPATIUM20
                x += self.score.noteHeadWidth() * mag * 0.5
                x -= self._opticalCenterCorrection(mag)
            else:
                x += elem.width * 0.5
            self.text.pos = self.text.pos.withX(x)
            break

    def _opticalCenterCorrection(self, mag: float) -> float:
        """
        Difference between the optical center of the glyph and the center of its bbox

        Returns 0 if the glyph of the kind has no optical center
        """
        symbol = catalog.lookup(self.kind).symbol
        if not symbol:
            return 0.
        metrics = self.score.glyphMetrics
        anchor = metrics.anchor(symbol, 'opticalCenter')
        if anchor is None or not anchor.x:
            return 0.
        fontScaling = self.text.fontsize / _defaultFontSize
        opticalCenter = anchor.x * mag * fontScaling
        # negative for glyphs extending to the left of their origin
        left = metrics.bbox(symbol).bottomLeft.x * mag * fontScaling
        return opticalCenter - left - self.text.bbox.width * 0.5

    def canvasBbox(self) -> RectF:
        """The bounding box in system coordinates"""
        rect = self.text.bbox.translated(self.text.canvasPos())
        if self.segment is not None:
            rect = self.segment.canvasRect(rect)
        return rect

    def autoplace(self) -> None:
        """
        Move this dynamic vertically to avoid collisions

        Measures this dynamic as if it had no manual vertical offset and moves
        it (in its placement direction) until it is at least
        ``dynamicsMinDistance`` away from the skyline of its staff. The
        manual offset is kept on top of the resulting position
        """
        seg = self.segment
        if seg is None or not self.text.autoplace:
            return
        spatium = self.spatium()
        minDistance = self.score.style('dynamicsMinDistance') * spatium
        yOff = self.text.offset.y - self.text.defaultOffset().y
        rect = self.canvasBbox().translated(0., -yOff)

        skyline = seg.system().staff(self.staffIdx()).skyline
        line = SkylineLine(north=not self.placeAbove())
        line.add(rect)

        if self.placeAbove():
            d = line.minDistance(skyline.north)
            if d > -minDistance:
                self.text.pos = self.text.pos.withY(self.text.pos.y - (d + minDistance))
        else:
            d = skyline.south.minDistance(line)
            if d > -minDistance:
                self.text.pos = self.text.pos.withY(self.text.pos.y + d + minDistance)

    # ------------------- properties

    def triggerLayout(self) -> None:
        self.layoutInvalid = True
        self.score.setLayout(self.tick())

    def getProperty(self, pid: Pid) -> Any:
        """
        Get the value of a property

        Returns:
            the value, or None if the property is not available
        """
        if pid == Pid.DYNAMIC_TYPE or pid == Pid.SUBTYPE:
            return self.kind
        elif pid == Pid.DYNAMIC_RANGE:
            return self.dynamicRange
        elif pid == Pid.VELOCITY:
            return self.velocity()
        elif pid == Pid.VELO_CHANGE:
            return self.changeInVelocity() if self.isVelocityChangeAvailable() else None
        elif pid == Pid.VELO_CHANGE_SPEED:
            return self.velocityChangeSpeed
        return self.text.getProperty(pid)

    def setProperty(self, pid: Pid, value: Any) -> bool:
        """
        Set the value of a property

        Any successful change invalidates the layout

        Returns:
            True if the property was set, False if it is not a property
            of this element
        """
        if pid == Pid.DYNAMIC_TYPE or pid == Pid.SUBTYPE:
            self.kind = properties.coerce(pid, value)
        elif pid == Pid.DYNAMIC_RANGE:
            self.dynamicRange = properties.coerce(pid, value)
        elif pid == Pid.VELOCITY:
            velocity = properties.coerce(pid, value)
            self.explicitVelocity = velocity if velocity is not None and velocity > 0 else None
        elif pid == Pid.VELO_CHANGE:
            if self.isVelocityChangeAvailable():
                change = properties.coerce(pid, value)
                self.setChangeInVelocity(change if change is None or change < 128 else None)
        elif pid == Pid.VELO_CHANGE_SPEED:
            self.velocityChangeSpeed = properties.coerce(pid, value)
        elif not self.text.setProperty(pid, value):
            return False
        self.triggerLayout()
        return True

    def propertyDefault(self, pid: Pid) -> Any:
        if pid == Pid.TEXT_STYLE:
            return 'dynamics'
        elif pid == Pid.DYNAMIC_RANGE:
            return DynamicRange.PART
        elif pid == Pid.VELOCITY:
            return None
        elif pid == Pid.VELO_CHANGE:
            if self.isVelocityChangeAvailable():
                return catalog.lookup(self.kind).velocityDelta
            return None
        elif pid == Pid.VELO_CHANGE_SPEED:
            return DynamicSpeed.NORMAL
        return self.text.propertyDefault(pid)

    def propertyId(self, name: str) -> Pid:
        """The property id for the given property name ('dynamicType', 'velocity', ...)"""
        return properties.propertyId(name)

    def setDynamicRange(self, dynamicRange: DynamicRange) -> None:
        self.setProperty(Pid.DYNAMIC_RANGE, dynamicRange)
