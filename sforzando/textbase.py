"""
TextElement: text content and placement of a text-like element

Text is stored as markup where music font glyphs are written as
``<sym>glyphName</sym>``, for example ``"poco <sym>dynamicForte</sym>"``.
Outside of glyphs the markup is xml character data, so a literal ``&`` is
stored as ``&amp;`` (see :func:`asMarkup`).

A :class:`TextElement` does not know anything about dynamics. An element
holds a TextElement and delegates to it any property, or xml tag, it does
not handle itself.
"""
from __future__ import annotations
import re
import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape, unescape

from . import catalog
from .common import SPATIUM20
from .geometry import PointF, RectF
from .properties import Pid, coerce

from typing import TYPE_CHECKING, Any
if TYPE_CHECKING:
    from typing import Callable
    from .score import Score


__all__ = (
    'TextElement',
    'splitMarkup',
    'innerXml',
    'setInnerXml',
    'asMarkup',
)


_symRegex = re.compile(r'<sym>([^<]*)</sym>')

# Approximations used for plain (non glyph) text, as factors of the font size
_charWidth = 0.5
_ascent = 0.7
_descent = 0.2


def splitMarkup(text: str) -> list[tuple[str, bool]]:
    """
    Split text markup into runs

    Entities in plain runs are unescaped

    Args:
        text: the markup

    Returns:
        a list of (content, isGlyph) pairs

    Example
    ~~~~~~~

        >>> splitMarkup("poco <sym>dynamicForte</sym>")
        [('poco ', False), ('dynamicForte', True)]
    """
    runs = []
    pos = 0
    for match in _symRegex.finditer(text):
        if match.start() > pos:
            runs.append((unescape(text[pos:match.start()]), False))
        runs.append((match.group(1), True))
        pos = match.end()
    if pos < len(text):
        runs.append((unescape(text[pos:]), False))
    return runs


class TextElement:
    """
    Text content, placement and layout state

    Args:
        score: the score this element belongs to, used for style and metrics
        textStyle: the name of the text style (for example 'dynamics')
        spatium: returns the spatium of the staff the element is placed on.
            Offsets are measured in this spatium. Defaults to the spatium
            of the score
    """
    def __init__(self, score: Score, textStyle='dynamics',
                 spatium: Callable[[], float] | None = None):
        self.score = score
        self.textStyle = textStyle
        self._spatium = spatium
        self.xmlText = ''
        self.placement: str = score.style('dynamicsPlacement')
        self.align: str = score.style('dynamicsAlign')
        self.fontsize: float = float(score.style('dynamicsFontSize'))
        self.autoplace: bool = bool(score.style('dynamicsAutoplace'))
        self.offset: PointF = self.defaultOffset()
        """Offset from the layout position, in points. Includes any manual adjustment"""

        self.pos = PointF()
        """Position computed by layout, relative to the segment"""

        self.bbox = RectF()
        """Bounding box relative to pos + offset"""

    def __repr__(self):
        return f"TextElement(xmlText={self.xmlText!r}, placement={self.placement}, pos={self.pos})"

    def copy(self, spatium: Callable[[], float] | None = None) -> TextElement:
        """
        A copy of this element

        Args:
            spatium: the spatium function of the copy, if it differs from this one
        """
        out = TextElement(self.score, textStyle=self.textStyle,
                          spatium=spatium or self._spatium)
        out.xmlText = self.xmlText
        out.placement = self.placement
        out.align = self.align
        out.fontsize = self.fontsize
        out.autoplace = self.autoplace
        out.offset = self.offset
        out.pos = self.pos
        out.bbox = self.bbox
        return out

    def placeAbove(self) -> bool:
        return self.placement == 'above'

    def spatium(self) -> float:
        return self._spatium() if self._spatium is not None else self.score.spatium

    def defaultOffset(self) -> PointF:
        """The style offset for the current placement, in points"""
        key = 'dynamicsPosAbove' if self.placeAbove() else 'dynamicsPosBelow'
        return PointF(0., self.score.style(key) * self.spatium())

    def plainText(self) -> str:
        """The text with glyphs replaced by the letters they represent"""
        return ''.join(catalog.glyphLetters.get(content, '') if isglyph else content
                       for content, isglyph in splitMarkup(self.xmlText))

    def canvasPos(self) -> PointF:
        return self.pos + self.offset

    # ------------------- layout

    def layout(self, spatium: float) -> None:
        """
        Compute the bounding box of the text and reset the layout position

        Args:
            spatium: the spatium of the staff this element is placed on
        """
        mag = spatium / SPATIUM20
        fontscale = self.fontsize / 10.0
        metrics = self.score.glyphMetrics
        width = 0.
        top = 0.
        bottom = 0.
        for content, isglyph in splitMarkup(self.xmlText):
            if isglyph and content in metrics:
                glyphbox = metrics.bbox(content)
                width += glyphbox.width * mag * fontscale
                top = min(top, glyphbox.top * mag * fontscale)
                bottom = max(bottom, glyphbox.bottom * mag * fontscale)
            else:
                numchars = 1 if isglyph else len(content)
                width += numchars * _charWidth * self.fontsize * mag
                top = min(top, -_ascent * self.fontsize * mag)
                bottom = max(bottom, _descent * self.fontsize * mag)
        if self.align == 'hcenter':
            x = -width * 0.5
        elif self.align == 'right':
            x = -width
        else:
            x = 0.
        self.bbox = RectF(x, top, width, bottom - top)
        self.pos = PointF()

    # ------------------- properties

    def getProperty(self, pid: Pid) -> Any:
        if pid == Pid.TEXT:
            return self.xmlText
        elif pid == Pid.PLACEMENT:
            return self.placement
        elif pid == Pid.ALIGN:
            return self.align
        elif pid == Pid.OFFSET:
            return self.offset
        elif pid == Pid.FONT_SIZE:
            return self.fontsize
        elif pid == Pid.AUTOPLACE:
            return self.autoplace
        elif pid == Pid.TEXT_STYLE:
            return self.textStyle
        return None

    def setProperty(self, pid: Pid, value: Any) -> bool:
        """
        Set a property handled by this element

        Returns:
            False if the property is not handled here
        """
        if pid not in _textProperties:
            return False
        value = coerce(pid, value)
        if pid == Pid.TEXT:
            self.xmlText = asMarkup(value)
        elif pid == Pid.PLACEMENT:
            # keep any manual adjustment when the placement flips
            manual = self.offset - self.defaultOffset()
            self.placement = value
            self.offset = self.defaultOffset() + manual
        elif pid == Pid.ALIGN:
            self.align = value
        elif pid == Pid.OFFSET:
            self.offset = value
        elif pid == Pid.FONT_SIZE:
            self.fontsize = value
        elif pid == Pid.AUTOPLACE:
            self.autoplace = value
        elif pid == Pid.TEXT_STYLE:
            self.textStyle = value
        return True

    def propertyDefault(self, pid: Pid) -> Any:
        if pid == Pid.TEXT:
            return ''
        elif pid == Pid.PLACEMENT:
            return self.score.style('dynamicsPlacement')
        elif pid == Pid.ALIGN:
            return self.score.style('dynamicsAlign')
        elif pid == Pid.OFFSET:
            return self.defaultOffset()
        elif pid == Pid.FONT_SIZE:
            return float(self.score.style('dynamicsFontSize'))
        elif pid == Pid.AUTOPLACE:
            return bool(self.score.style('dynamicsAutoplace'))
        elif pid == Pid.TEXT_STYLE:
            return 'dynamics'
        return None

    # ------------------- persistence

    def readProperty(self, elem: ET.Element) -> bool:
        """
        Read a property from an xml element

        Returns:
            True if the tag was handled here
        """
        tag = elem.tag
        if tag == 'text':
            self.xmlText = innerXml(elem)
        elif tag == 'placement':
            self.setProperty(Pid.PLACEMENT, (elem.text or '').strip())
        elif tag == 'align':
            self.align = coerce(Pid.ALIGN, (elem.text or '').strip())
        elif tag == 'offset':
            spatium = self.spatium()
            self.offset = PointF(float(elem.get('x', 0)) * spatium,
                                 float(elem.get('y', 0)) * spatium)
        elif tag == 'size':
            self.fontsize = float(elem.text)
        elif tag == 'autoplace':
            self.autoplace = int(elem.text) != 0
        elif tag == 'style':
            self.textStyle = (elem.text or '').strip()
        else:
            return False
        return True

    def writeProperties(self, parent: ET.Element, writeText: bool) -> None:
        """
        Write the properties which differ from their default

        Args:
            parent: the xml element to write to
            writeText: if True, the text itself is written
        """
        if self.placement != self.propertyDefault(Pid.PLACEMENT):
            ET.SubElement(parent, 'placement').text = self.placement
        if self.align != self.propertyDefault(Pid.ALIGN):
            ET.SubElement(parent, 'align').text = self.align
        if self.offset != self.defaultOffset():
            spatium = self.spatium()
            ET.SubElement(parent, 'offset', x=_fmt(self.offset.x / spatium),
                          y=_fmt(self.offset.y / spatium))
        if self.fontsize != self.propertyDefault(Pid.FONT_SIZE):
            ET.SubElement(parent, 'size').text = _fmt(self.fontsize)
        if self.autoplace != self.propertyDefault(Pid.AUTOPLACE):
            ET.SubElement(parent, 'autoplace').text = str(int(self.autoplace))
        if writeText:
            setInnerXml(ET.SubElement(parent, 'text'), self.xmlText)


_textProperties = {
    Pid.TEXT, Pid.PLACEMENT, Pid.ALIGN, Pid.OFFSET, Pid.FONT_SIZE,
    Pid.AUTOPLACE, Pid.TEXT_STYLE
}


def _fmt(x: float) -> str:
    return f"{x:.6g}"


def innerXml(elem: ET.Element) -> str:
    """The content of elem as markup, with character data escaped"""
    parts = [escape(elem.text or '')]
    parts.extend(ET.tostring(child, encoding='unicode') for child in elem)
    return ''.join(parts)


def setInnerXml(elem: ET.Element, markup: str) -> None:
    try:
        wrapper = ET.fromstring(f'<text>{markup}</text>')
    except ET.ParseError:
        # not valid markup, written as character data
        elem.text = markup
        return
    elem.text = wrapper.text
    elem.extend(list(wrapper))


def asMarkup(text: str) -> str:
    """
    Normalize a text to markup

    Well formed markup is returned in the form :func:`innerXml` reads it back,
    anything else is taken as literal text and escaped

    Example
    ~~~~~~~

        >>> asMarkup("f & p")
        'f &amp; p'
        >>> asMarkup("R&amp;B <sym>dynamicForte</sym>")
        'R&amp;B <sym>dynamicForte</sym>'
    """
    try:
        wrapper = ET.fromstring(f'<text>{text}</text>')
    except ET.ParseError:
        return escape(text)
    return innerXml(wrapper)
