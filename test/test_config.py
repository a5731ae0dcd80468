import pytest

from sforzando.config import config
from sforzando.glyphs import GlyphMetrics
from sforzando.score import Score
from sforzando.tempo import TempoMap


def test_style_defaults(metrics):
    score = Score(glyphMetrics=metrics)
    assert score.style('dynamicsMinDistance') == config['dynamicsMinDistance']
    assert score.spatium == pytest.approx(5.)


def test_style_overrides(metrics):
    score = Score(style={'spatium': 10.0}, glyphMetrics=metrics)
    assert score.spatium == pytest.approx(10.)


def test_unknown_style_key(metrics):
    with pytest.raises(ValueError):
        Score(style={'dynamicMinDistance': 1.0}, glyphMetrics=metrics)


def test_bundled_metrics():
    metrics = GlyphMetrics.default()
    assert metrics.noteheadWidth() > 0
    assert metrics.anchor('dynamicSforzato', 'opticalCenter') is not None
    assert metrics.anchor('noteheadBlack', 'opticalCenter') is None
    with pytest.raises(KeyError):
        metrics.bbox('noSuchGlyph')


def test_metrics_from_file(tmp_path):
    path = tmp_path / 'metrics.yaml'
    path.write_text("glyphs:\n  noteheadBlack:\n    bBoxSW: [0, -0.5]\n    bBoxNE: [1, 0.5]\n")
    score = Score(style={'glyphMetricsPath': str(path)})
    assert score.noteHeadWidth() == pytest.approx(5.)


def test_tempo_map():
    tempomap = TempoMap(60)
    tempomap.addTempo(8, 90)
    tempomap.addTempo(4, 30, base=2)
    assert tempomap.tempoAt(0) == 60
    assert tempomap.tempoAt(5) == 60
    assert tempomap.tempoAt(8) == 90
    tempomap.addTempo(8, 100)
    assert tempomap.tempoAt(20) == 100
    assert len(tempomap) == 3
