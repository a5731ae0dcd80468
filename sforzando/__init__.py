"""
sforzando
=========

Dynamic markings (p, f, mf, sfz, ...) for music engraving: their playback
semantics (midi velocity, velocity changes scaled by tempo) and their
placement in a score (optical centering under a notehead and skyline based
collision avoidance).

.. seealso:: :py:mod:`sforzando.dynamic`

The main class is :class:`~sforzando.dynamic.Dynamic`. A dynamic lives in a
:class:`~sforzando.score.Score`, attached to a :class:`~sforzando.score.Segment`:

    >>> from sforzando import *
    >>> score = Score()
    >>> system = System(numStaves=1)
    >>> measure = Measure(system)
    >>> seg = measure.addSegment(tick=0, x=10.)
    >>> seg.add(Chord(width=5.9), track=0)
    >>> dyn = Dynamic(score, segment=seg, kind='mf')
    >>> dyn.layout()
    >>> dyn.autoplace()

Persistence is handled by :mod:`sforzando.xmlio`. Style defaults are defined
in :mod:`sforzando.config`
"""
from .catalog import DynamicKind, DynamicRange, DynamicSpeed
from .common import F, logger
from .config import config
from .dynamic import Dynamic
from .properties import Pid
from .score import Score, System, Staff, Measure, Segment, Chord, Rest
from .tempo import TempoMap
from . import catalog
from . import xmlio
