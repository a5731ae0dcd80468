"""
Reading and writing dynamics as xml

A dynamic is persisted as a ``<Dynamic>`` element::

    <Dynamic>
      <subtype>sfz</subtype>
      <velocity>112</velocity>
      <dynType>part</dynType>
      <veloChange>-18</veloChange>
      <veloChangeSpeed>normal</veloChangeSpeed>
    </Dynamic>

Tags handled by the dynamic itself are decoded through :data:`dynamicSchema`.
Any other tag is passed to the dynamic's text element and, if not handled
there either, reported to the :class:`XmlReader` as unknown.
"""
from __future__ import annotations
import xml.etree.ElementTree as ET

from . import catalog
from .catalog import DynamicKind, DynamicRange, DynamicSpeed
from .common import logger
from .dynamic import Dynamic
from .textbase import innerXml

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Callable
    from .score import Score, Segment


__all__ = (
    'XmlReader',
    'dynamicSchema',
    'readDynamic',
    'writeDynamic',
    'dumps',
    'loads',
)


class XmlReader:
    """
    Keeps track of tags which could not be read

    Args:
        strict: if True, an unknown tag raises ValueError instead of being
            logged and skipped
    """
    def __init__(self, strict=False):
        self.strict = strict
        self.unknownTags: list[str] = []

    def unknown(self, elem: ET.Element) -> None:
        if self.strict:
            raise ValueError(f"Unknown tag <{elem.tag}>")
        logger.warning(f"Unknown tag <{elem.tag}>, skipping")
        self.unknownTags.append(elem.tag)


def _readInt(elem: ET.Element) -> int:
    return int((elem.text or '').strip())


def _readSubtype(dyn: Dynamic, elem: ET.Element) -> None:
    dyn.resolveKind(innerXml(elem).strip())


def _readVelocity(dyn: Dynamic, elem: ET.Element) -> None:
    velocity = _readInt(elem)
    dyn.explicitVelocity = velocity if velocity > 0 else None


def _readDynType(dyn: Dynamic, elem: ET.Element) -> None:
    dyn.dynamicRange = catalog.rangeFromToken(elem.text or '', default=DynamicRange.STAFF)


def _readVeloChange(dyn: Dynamic, elem: ET.Element) -> None:
    change = _readInt(elem)
    dyn.setChangeInVelocity(change if change < 128 else None)


def _readVeloChangeSpeed(dyn: Dynamic, elem: ET.Element) -> None:
    dyn.velocityChangeSpeed = catalog.speedFromToken(elem.text or '', default=DynamicSpeed.NORMAL)


dynamicSchema: dict[str, Callable[[Dynamic, ET.Element], None]] = {
    'subtype': _readSubtype,
    'velocity': _readVelocity,
    'dynType': _readDynType,
    'veloChange': _readVeloChange,
    'veloChangeSpeed': _readVeloChangeSpeed,
}


def read(dyn: Dynamic, elem: ET.Element, reader: XmlReader | None = None) -> None:
    """
    Read the properties of a dynamic from a ``<Dynamic>`` element

    Args:
        dyn: the dynamic to read into
        elem: the xml element
        reader: collects unknown tags. If not given, a default reader is used

    Raises:
        ValueError: if a numeric value is malformed
    """
    if reader is None:
        reader = XmlReader()
    for child in elem:
        decoder = dynamicSchema.get(child.tag)
        if decoder is not None:
            decoder(dyn, child)
        elif not dyn.text.readProperty(child):
            reader.unknown(child)


def readDynamic(elem: ET.Element,
                score: Score,
                segment: Segment | None = None,
                track=0,
                reader: XmlReader | None = None
                ) -> Dynamic:
    """
    Create a dynamic from a ``<Dynamic>`` element

    Args:
        elem: the xml element
        score: the score the dynamic belongs to
        segment: the segment to attach the dynamic to, if any
        track: the track of the dynamic
        reader: collects unknown tags

    Returns:
        the new Dynamic
    """
    dyn = Dynamic(score, segment=segment, track=track)
    read(dyn, elem, reader=reader)
    return dyn


def writeDynamic(dyn: Dynamic, parent: ET.Element | None = None) -> ET.Element:
    """
    Write a dynamic as a ``<Dynamic>`` element

    The text is only written for dynamics of kind OTHER, for any other kind
    it is implied by the kind itself. The velocity change and its speed are
    only written if the kind supports a velocity change

    Args:
        dyn: the dynamic to write
        parent: if given, the element is appended to it

    Returns:
        the ``<Dynamic>`` element
    """
    elem = ET.Element('Dynamic') if parent is None else ET.SubElement(parent, 'Dynamic')
    ET.SubElement(elem, 'subtype').text = dyn.kind.tag
    velocity = dyn.velocity()
    if velocity is not None:
        ET.SubElement(elem, 'velocity').text = str(velocity)
    ET.SubElement(elem, 'dynType').text = dyn.dynamicRange.value
    if dyn.isVelocityChangeAvailable():
        ET.SubElement(elem, 'veloChange').text = str(dyn.changeInVelocity())
        ET.SubElement(elem, 'veloChangeSpeed').text = dyn.velocityChangeSpeed.value
    dyn.text.writeProperties(elem, writeText=dyn.kind is DynamicKind.OTHER)
    return elem


def dumps(dyn: Dynamic) -> str:
    """Serialize a dynamic as an xml string"""
    return ET.tostring(writeDynamic(dyn), encoding='unicode')


def loads(s: str,
          score: Score,
          segment: Segment | None = None,
          track=0,
          reader: XmlReader | None = None
          ) -> Dynamic:
    """
    Create a dynamic from an xml string, as produced by :func:`dumps`
    """
    elem = ET.fromstring(s)
    if elem.tag != 'Dynamic':
        raise ValueError(f"Expected a <Dynamic> element, got <{elem.tag}>")
    return readDynamic(elem, score=score, segment=segment, track=track, reader=reader)
