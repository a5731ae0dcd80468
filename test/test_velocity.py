import pytest

from sforzando import catalog
from sforzando.catalog import DynamicKind, DynamicSpeed
from sforzando.common import F
from sforzando.dynamic import Dynamic
from sforzando.score import Score
from sforzando.tempo import TempoMap


@pytest.mark.parametrize('kind', list(DynamicKind))
def test_velocity_defaults_to_catalog(score, kind):
    dyn = Dynamic(score, kind=kind)
    assert dyn.velocity() == catalog.lookup(kind).baseVelocity
    assert dyn.changeInVelocity() == catalog.lookup(kind).velocityDelta


def test_explicit_velocity_overrides(score):
    dyn = Dynamic(score, kind='p')
    dyn.explicitVelocity = 70
    assert dyn.velocity() == 70
    dyn.explicitVelocity = None
    assert dyn.velocity() == 49


def test_other_has_no_velocity(score):
    dyn = Dynamic(score, kind='poco f')
    assert dyn.kind is DynamicKind.OTHER
    assert dyn.velocity() is None


@pytest.mark.parametrize('kind', [k for k in DynamicKind if catalog.isAccentStyle(k)])
def test_change_equal_to_default_clears_override(score, kind):
    dyn = Dynamic(score, kind=kind)
    delta = catalog.lookup(kind).velocityDelta
    dyn.setChangeInVelocity(delta + 5)
    assert dyn.explicitVelocityChange == delta + 5
    dyn.setChangeInVelocity(delta)
    assert dyn.explicitVelocityChange is None
    assert dyn.changeInVelocity() == delta


def test_cleared_override_follows_kind(score):
    dyn = Dynamic(score, kind='sfz')
    dyn.setChangeInVelocity(-18)
    dyn.setKind(DynamicKind.SFPP)
    assert dyn.changeInVelocity() == -79


def test_velocity_change_availability(score):
    for kind in DynamicKind:
        dyn = Dynamic(score, kind=kind)
        assert dyn.isVelocityChangeAvailable() == catalog.isAccentStyle(kind)


@pytest.mark.parametrize('speed, expected', [
    (DynamicSpeed.SLOW, F(624, 480)),
    (DynamicSpeed.NORMAL, F(384, 480)),
    (DynamicSpeed.FAST, F(240, 480)),
])
def test_change_duration_at_reference_tempo(score, speed, expected):
    dyn = Dynamic(score, kind='sfz')
    dyn.velocityChangeSpeed = speed
    assert dyn.velocityChangeDuration() == expected


def test_change_duration_is_zero_without_change(score):
    assert Dynamic(score, kind='mf').velocityChangeDuration() == 0
    dyn = Dynamic(score, kind='sfz')
    dyn.setChangeInVelocity(0)
    assert dyn.velocityChangeDuration() == 0


def test_change_duration_scales_with_tempo(metrics, measure):
    tempomap = TempoMap(120)
    tempomap.addTempo(4, 60)
    score = Score(tempomap=tempomap, glyphMetrics=metrics)
    seg = measure.addSegment(tick=6, x=0.)
    dyn = Dynamic(score, segment=seg, kind='sfz')
    # tempo ratio 0.5, normal speed
    assert dyn.velocityChangeDuration() == F(192, 480)
    dyn.velocityChangeSpeed = DynamicSpeed.SLOW
    assert dyn.velocityChangeDuration() == F(312, 480)


def test_change_duration_uses_reference_tempo_from_style(metrics):
    score = Score(style={'referenceTempo': 60.0}, glyphMetrics=metrics)
    dyn = Dynamic(score, kind='fp')
    assert dyn.velocityChangeDuration() == F(768, 480)


@pytest.mark.parametrize('tempo, expected', [
    (84, F(268, 480)),
    (100, F(320, 480)),
    (132, F(422, 480)),
])
def test_change_duration_truncates_fractional_ticks(metrics, tempo, expected):
    score = Score(tempomap=TempoMap(tempo), glyphMetrics=metrics)
    dyn = Dynamic(score, kind='sfz')
    assert dyn.velocityChangeDuration() == expected
