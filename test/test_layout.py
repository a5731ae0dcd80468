import pytest

from sforzando import xmlio
from sforzando.dynamic import Dynamic
from sforzando.geometry import PointF
from sforzando.properties import Pid
from sforzando.score import Chord, Rest, System, Measure


def test_text_bbox(score):
    dyn = Dynamic(score, kind='f')
    dyn.layout()
    assert dyn.text.bbox.width == pytest.approx(10.)
    assert dyn.text.bbox.x == pytest.approx(-5.)
    assert dyn.text.bbox.top == pytest.approx(-7.5)
    assert dyn.text.bbox.bottom == pytest.approx(2.5)


def test_without_segment_position_is_reset(score):
    dyn = Dynamic(score, kind='f')
    dyn.text.pos = PointF(3., 4.)
    dyn.layout()
    assert dyn.text.pos == PointF(0., 0.)


def test_centered_under_chord_uses_optical_center(score, measure):
    seg = measure.addSegment(tick=0, x=20.)
    seg.add(Chord(width=6.), track=0)
    dyn = Dynamic(score, segment=seg, kind='f')
    dyn.layout()
    # half notehead (3) minus (optical center 4 - left -2 - half width 5)
    assert dyn.text.pos.x == pytest.approx(2.)


def test_glyph_without_optical_center(score, measure):
    seg = measure.addSegment(tick=0, x=20.)
    seg.add(Chord(width=6.), track=0)
    dyn = Dynamic(score, segment=seg, kind='p')
    dyn.layout()
    assert dyn.text.pos.x == pytest.approx(3.)


def test_free_text_is_centered_on_notehead(score, measure):
    seg = measure.addSegment(tick=0, x=20.)
    seg.add(Chord(width=6.), track=0)
    dyn = Dynamic(score, segment=seg, kind='poco f')
    dyn.layout()
    assert dyn.text.pos.x == pytest.approx(3.)


def test_small_staff_scales_layout(score):
    system = System(numStaves=1, mags=[0.5])
    seg = Measure(system).addSegment(tick=0, x=0.)
    seg.add(Chord(width=3.), track=0)
    dyn = Dynamic(score, segment=seg, kind='f')
    dyn.layout()
    assert dyn.text.bbox.width == pytest.approx(5.)
    assert dyn.text.pos.x == pytest.approx(1.)


def test_font_size_scales_optical_correction(score, measure):
    seg = measure.addSegment(tick=0, x=0.)
    seg.add(Chord(width=6.), track=0)
    dyn = Dynamic(score, segment=seg, kind='f')
    dyn.text.fontsize = 20.
    dyn.layout()
    # notehead shift 3, correction 8 - (-4) - 10
    assert dyn.text.pos.x == pytest.approx(1.)


def test_not_centered_uses_element_width(score, measure):
    seg = measure.addSegment(tick=0, x=0.)
    seg.add(Chord(width=8.), track=0)
    dyn = Dynamic(score, segment=seg, kind='f')
    dyn.text.align = 'left'
    dyn.layout()
    assert dyn.text.pos.x == pytest.approx(4.)


def test_rest_uses_half_its_width(score, measure):
    seg = measure.addSegment(tick=0, x=0.)
    seg.add(Rest(width=4.), track=0)
    dyn = Dynamic(score, segment=seg, kind='f')
    dyn.layout()
    assert dyn.text.pos.x == pytest.approx(2.)


def test_lowest_voice_wins(score, measure):
    seg = measure.addSegment(tick=0, x=0.)
    seg.add(Chord(width=6.), track=2)
    seg.add(Rest(width=10.), track=1)
    dyn = Dynamic(score, segment=seg, track=3, kind='f')
    dyn.layout()
    assert dyn.text.pos.x == pytest.approx(5.)


def test_only_own_staff_is_scanned(score, measure):
    seg = measure.addSegment(tick=0, x=0.)
    seg.add(Chord(width=6.), track=0)
    dyn = Dynamic(score, segment=seg, track=4, kind='f')
    dyn.layout()
    assert dyn.text.pos.x == pytest.approx(0.)
    seg.add(Rest(width=2.), track=5)
    dyn.layout()
    assert dyn.text.pos.x == pytest.approx(1.)


def test_layout_clears_invalid_flag(score):
    dyn = Dynamic(score, kind='f')
    dyn.triggerLayout()
    assert dyn.layoutInvalid
    dyn.layout()
    assert not dyn.layoutInvalid


def test_default_offset_follows_staff_size(score):
    system = System(numStaves=2, mags=[1.0, 0.5])
    seg = Measure(system).addSegment(tick=0, x=0.)
    normal = Dynamic(score, segment=seg, track=0, kind='f')
    small = Dynamic(score, segment=seg, track=4, kind='f')
    assert normal.text.offset == PointF(0., 12.5)
    assert small.text.offset == PointF(0., 6.25)
    small.setProperty(Pid.PLACEMENT, 'above')
    assert small.text.offset == PointF(0., -5.)
    assert small.copy().text.offset == PointF(0., -5.)


def test_offset_is_written_in_staff_spaces(score):
    system = System(numStaves=2, mags=[1.0, 0.5])
    seg = Measure(system).addSegment(tick=0, x=0.)
    dyn = Dynamic(score, segment=seg, track=4, kind='f')
    dyn.text.offset = PointF(1.25, 8.75)
    elem = xmlio.writeDynamic(dyn)
    assert elem.find('offset').get('x') == '0.5'
    assert elem.find('offset').get('y') == '3.5'
    out = xmlio.readDynamic(elem, score=score, segment=seg, track=4)
    assert out.text.offset.x == pytest.approx(1.25)
    assert out.text.offset.y == pytest.approx(8.75)
