"""
Glyph metrics: bounding boxes and anchors of music font glyphs

Metrics are read from a yaml file following the SMuFL metadata layout, where
all values are given in staff spaces. :class:`GlyphMetrics` converts them to
points for a staff of 20pt (see :data:`~sforzando.common.SPATIUM20`), with the
layout convention of a y axis pointing downwards. Callers scale the returned
values by ``spatium / SPATIUM20``.
"""
from __future__ import annotations
import functools
import os

import yaml

from .common import SPATIUM20, logger
from .geometry import PointF, RectF


__all__ = (
    'GlyphMetrics',
    'defaultMetricsPath',
)


def defaultMetricsPath() -> str:
    """The path to the bundled glyph metrics"""
    return os.path.join(os.path.dirname(__file__), 'data', 'glyphmetrics.yaml')


class GlyphMetrics:
    """
    Metrics for a set of glyphs

    Args:
        glyphs: a dict mapping glyph name to a dict with keys 'bBoxSW', 'bBoxNE'
            and, optionally, any anchors ('opticalCenter', ...), all as
            pairs of floats in staff spaces

    Example
    ~~~~~~~

        >>> metrics = GlyphMetrics.default()
        >>> metrics.bbox('dynamicForte').width > 0
        True
    """
    noteheadGlyph = 'noteheadBlack'

    def __init__(self, glyphs: dict[str, dict]):
        self._glyphs = glyphs

    def __contains__(self, name: str) -> bool:
        return name in self._glyphs

    def __repr__(self):
        return f"GlyphMetrics(numglyphs={len(self._glyphs)})"

    @classmethod
    def load(cls, path: str) -> GlyphMetrics:
        """
        Load metrics from a yaml file

        Args:
            path: the path to the yaml file

        Returns:
            the loaded GlyphMetrics
        """
        path = os.path.expanduser(path)
        logger.debug(f"Loading glyph metrics from '{path}'")
        with open(path) as f:
            data = yaml.safe_load(f)
        glyphs = data.get('glyphs') if isinstance(data, dict) else None
        if not isinstance(glyphs, dict):
            raise ValueError(f"No glyphs defined in '{path}'")
        return cls(glyphs)

    @staticmethod
    @functools.cache
    def default() -> GlyphMetrics:
        """The bundled glyph metrics (loaded once)"""
        return GlyphMetrics.load(defaultMetricsPath())

    def _glyph(self, name: str) -> dict:
        glyph = self._glyphs.get(name)
        if glyph is None:
            raise KeyError(f"Glyph '{name}' not known")
        return glyph

    def bbox(self, name: str) -> RectF:
        """
        The ink bounding box of the glyph, in points at SPATIUM20

        The x coordinate of the box is negative if the glyph extends to the
        left of its origin
        """
        glyph = self._glyph(name)
        sw = glyph['bBoxSW']
        ne = glyph['bBoxNE']
        return RectF.fromCorners((sw[0] * SPATIUM20, sw[1] * SPATIUM20),
                                 (ne[0] * SPATIUM20, ne[1] * SPATIUM20))

    def width(self, name: str) -> float:
        return self.bbox(name).width

    def anchor(self, name: str, anchor: str) -> PointF | None:
        """
        An anchor point of the glyph, in points at SPATIUM20

        Args:
            name: the glyph name
            anchor: the anchor name, for example 'opticalCenter'

        Returns:
            the anchor or None if the glyph does not define it or the glyph
            is unknown
        """
        glyph = self._glyphs.get(name)
        if glyph is None:
            return None
        point = glyph.get(anchor)
        if point is None:
            return None
        return PointF(point[0] * SPATIUM20, -point[1] * SPATIUM20)

    def noteheadWidth(self) -> float:
        """Width of a black notehead, in points at SPATIUM20"""
        return self.width(self.noteheadGlyph)
