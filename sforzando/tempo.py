"""
Tempo map: the quarter tempo active at any point of a score

Positions are measured in quarter notes from the start of the score.
"""
from __future__ import annotations
from bisect import bisect_right
from dataclasses import dataclass
import functools

from .common import F, F0, asF, num_t


__all__ = (
    'TempoDef',
    'TempoMap',
    'asQuarterTempo',
)


def figureDuration(base: int, dots: int) -> F:
    """
    The duration (in quarter notes) of a figure

    Args:
        base: 4=quarter, 8=eighth, etc.
        dots: number of dots

    Returns:
        the duration in quarter notes
    """
    dur = F(4, base)
    return dur * (2 - F(1, 2**dots))


@functools.cache
def asQuarterTempo(tempo: F, base: int, dots: int = 0) -> F:
    """
    Convert a generic tempo to a quarternote tempo

    Args:
        tempo: tempo value
        base: base duration, where 4=quarternote, 8=8th note, etc.
        dots: number of dots

    Returns:
        The tempo corresponding to a quarter note

    Example
    -------

        >>> asQuarterTempo(F(60), 2)
        Fraction(120, 1)
    """
    return tempo * figureDuration(base, dots)


@dataclass(frozen=True)
class TempoDef:
    """A tempo change at a given position"""
    position: F
    """The position of the change, in quarter notes"""

    tempo: F
    """The tempo value, relative to base/dots"""

    base: int = 4
    dots: int = 0

    @property
    def quarterTempo(self) -> F:
        return asQuarterTempo(self.tempo, base=self.base, dots=self.dots)


class TempoMap:
    """
    A sorted sequence of tempo changes

    Args:
        initialTempo: the quarter tempo at the start of the score

    Example
    ~~~~~~~

        >>> tempomap = TempoMap(60)
        >>> tempomap.addTempo(8, 90)
        >>> tempomap.tempoAt(10)
        Fraction(90, 1)
    """
    def __init__(self, initialTempo: num_t = 120):
        self._defs: list[TempoDef] = [TempoDef(position=F0, tempo=asF(initialTempo))]
        self._positions: list[F] = [F0]

    def __repr__(self):
        changes = ', '.join(f'{d.position}: {d.quarterTempo}' for d in self._defs)
        return f"TempoMap({changes})"

    def __len__(self) -> int:
        return len(self._defs)

    def addTempo(self, position: num_t, tempo: num_t, base=4, dots=0) -> None:
        """
        Add a tempo change, replacing any existing change at the same position

        Args:
            position: the position of the change, in quarter notes
            tempo: the tempo value
            base: the reference figure of the tempo (4=quarter, 8=eighth, ...)
            dots: number of dots of the reference figure
        """
        position = asF(position)
        if position < 0:
            raise ValueError(f"Position should be positive, got {position}")
        tempodef = TempoDef(position=position, tempo=asF(tempo), base=base, dots=dots)
        idx = bisect_right(self._positions, position)
        if idx > 0 and self._positions[idx - 1] == position:
            self._defs[idx - 1] = tempodef
        else:
            self._defs.insert(idx, tempodef)
            self._positions.insert(idx, position)

    def tempoAt(self, position: num_t) -> F:
        """
        The quarter tempo active at the given position

        Args:
            position: the position in quarter notes

        Returns:
            the quarter tempo
        """
        idx = bisect_right(self._positions, asF(position)) - 1
        return self._defs[max(idx, 0)].quarterTempo
