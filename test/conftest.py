import pytest

from sforzando.glyphs import GlyphMetrics
from sforzando.score import Score, System, Measure


# Round numbers so that expected positions can be computed by hand.
# At SPATIUM20 and font size 10:
#   noteheadBlack: width 6
#   dynamicForte: bbox x=-2, width=10, top=-7.5, bottom=2.5, optical center 4
#   dynamicPiano: same as dynamicForte, but no optical center
_testGlyphs = {
    'noteheadBlack': {'bBoxSW': [0.0, -0.5], 'bBoxNE': [1.2, 0.5]},
    'dynamicForte': {'bBoxSW': [-0.4, -0.5], 'bBoxNE': [1.6, 1.5],
                     'opticalCenter': [0.8, 0.0]},
    'dynamicPiano': {'bBoxSW': [-0.4, -0.5], 'bBoxNE': [1.6, 1.5]},
}


@pytest.fixture
def metrics():
    return GlyphMetrics(_testGlyphs)


@pytest.fixture
def score(metrics):
    return Score(glyphMetrics=metrics)


@pytest.fixture
def system():
    return System(numStaves=2)


@pytest.fixture
def measure(system):
    return Measure(system)
