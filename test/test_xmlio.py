import xml.etree.ElementTree as ET

import pytest

from sforzando import xmlio
from sforzando.catalog import DynamicKind, DynamicRange, DynamicSpeed
from sforzando.dynamic import Dynamic
from sforzando.geometry import PointF


def _tags(dyn: Dynamic) -> list[str]:
    return [child.tag for child in xmlio.writeDynamic(dyn)]


def test_write_catalog_kind(score):
    dyn = Dynamic(score, kind='mf')
    elem = xmlio.writeDynamic(dyn)
    assert [child.tag for child in elem] == ['subtype', 'velocity', 'dynType']
    assert elem.find('subtype').text == 'mf'
    assert elem.find('velocity').text == '80'
    assert elem.find('dynType').text == 'part'


def test_write_accent_kind(score):
    dyn = Dynamic(score, kind='sfz')
    assert _tags(dyn) == ['subtype', 'velocity', 'dynType', 'veloChange', 'veloChangeSpeed']


def test_write_other_forces_text(score):
    dyn = Dynamic(score, kind='poco f')
    elem = xmlio.writeDynamic(dyn)
    assert elem.find('subtype').text == 'other'
    assert elem.find('velocity') is None
    assert elem.find('text').text == 'poco f'


def test_roundtrip_accent_kind(score):
    dyn = Dynamic(score, kind='sfz')
    dyn.explicitVelocity = 100
    dyn.dynamicRange = DynamicRange.SYSTEM
    dyn.setChangeInVelocity(-30)
    dyn.velocityChangeSpeed = DynamicSpeed.FAST
    out = xmlio.loads(xmlio.dumps(dyn), score=score)
    assert out.kind is DynamicKind.SFZ
    assert out.velocity() == 100
    assert out.dynamicRange is DynamicRange.SYSTEM
    assert out.changeInVelocity() == -30
    assert out.velocityChangeSpeed is DynamicSpeed.FAST
    assert out.xmlText == dyn.xmlText


def test_roundtrip_default_change_stays_unset(score):
    dyn = Dynamic(score, kind='fp')
    out = xmlio.loads(xmlio.dumps(dyn), score=score)
    assert out.explicitVelocityChange is None
    assert out.changeInVelocity() == -47


@pytest.mark.parametrize('text, plain', [
    ('poco f', 'poco f'),
    ('poco <sym>dynamicForte</sym>', 'poco f'),
    ('f & p', 'f & p'),
    ('R&amp;B f', 'R&B f'),
    ('a > b', 'a > b'),
    ('', ''),
])
def test_roundtrip_other(score, text, plain):
    dyn = Dynamic(score)
    dyn.resolveKind(text)
    dyn.explicitVelocity = 70
    out = xmlio.loads(xmlio.dumps(dyn), score=score)
    assert out.kind is DynamicKind.OTHER
    assert out.xmlText == dyn.xmlText
    assert out.plainText() == plain
    assert out.velocity() == 70


def test_roundtrip_text_properties(score):
    dyn = Dynamic(score, kind='p')
    dyn.text.placement = 'above'
    dyn.text.offset = PointF(1.5, -4.)
    dyn.text.autoplace = False
    out = xmlio.loads(xmlio.dumps(dyn), score=score)
    assert out.text.placement == 'above'
    assert out.text.offset.x == pytest.approx(1.5)
    assert out.text.offset.y == pytest.approx(-4.)
    assert out.text.autoplace is False


def test_read_defaults(score):
    out = xmlio.loads('<Dynamic><subtype>ff</subtype></Dynamic>', score=score)
    assert out.kind is DynamicKind.FF
    assert out.dynamicRange is DynamicRange.PART
    assert out.explicitVelocity is None
    assert out.velocityChangeSpeed is DynamicSpeed.NORMAL


def test_read_unrecognized_tokens(score):
    s = ('<Dynamic><subtype>sf</subtype><dynType>galaxy</dynType>'
         '<veloChangeSpeed>ludicrous</veloChangeSpeed></Dynamic>')
    out = xmlio.loads(s, score=score)
    assert out.dynamicRange is DynamicRange.STAFF
    assert out.velocityChangeSpeed is DynamicSpeed.NORMAL


def test_read_sentinels(score):
    s = ('<Dynamic><subtype>sf</subtype><velocity>0</velocity>'
         '<veloChange>128</veloChange></Dynamic>')
    out = xmlio.loads(s, score=score)
    assert out.explicitVelocity is None
    assert out.explicitVelocityChange is None


def test_read_free_text_subtype(score):
    out = xmlio.loads('<Dynamic><subtype>subito p</subtype></Dynamic>', score=score)
    assert out.kind is DynamicKind.OTHER
    assert out.xmlText == 'subito p'


def test_unknown_tags_are_reported(score):
    reader = xmlio.XmlReader()
    s = '<Dynamic><subtype>p</subtype><color>red</color></Dynamic>'
    out = xmlio.loads(s, score=score, reader=reader)
    assert out.kind is DynamicKind.P
    assert reader.unknownTags == ['color']
    with pytest.raises(ValueError):
        xmlio.loads(s, score=score, reader=xmlio.XmlReader(strict=True))


def test_malformed_number_propagates(score):
    with pytest.raises(ValueError):
        xmlio.loads('<Dynamic><velocity>loud</velocity></Dynamic>', score=score)


def test_write_into_parent(score, measure):
    seg = measure.addSegment(tick=0, x=0.)
    root = ET.Element('Segment')
    xmlio.writeDynamic(Dynamic(score, segment=seg, kind='n'), parent=root)
    elem = root.find('Dynamic')
    out = xmlio.readDynamic(elem, score=score, segment=seg)
    assert out.kind is DynamicKind.N
    assert out.segment is seg
    with pytest.raises(ValueError):
        xmlio.loads('<Chord/>', score=score)
