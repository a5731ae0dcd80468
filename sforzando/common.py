"""
Types and helpers shared by all modules

NB: this module cannot import anything from sforzando itself
"""
from __future__ import annotations
import logging as _logging
import functools as _functools

import typing as _t
if _t.TYPE_CHECKING:
    from fractions import Fraction as F
else:
    from quicktions import Fraction as F


__all__ = (
    'getLogger',
    'logger',
    'F',
    'F0',
    'asF',
    'num_t',
    'SPATIUM20',
)


num_t: _t.TypeAlias = _t.Union[int, float, F]
"""A number which can be converted to a rational (quarter notes, tempo values)"""


F0: F = F(0)


SPATIUM20 = 5.0
"""The spatium (in points) of a 20pt staff. Glyph metrics are expressed relative to it"""


def asF(t: num_t | str) -> F:
    """
    Convert ``t`` to a rational, if it is not one already

    Raises:
        TypeError: if t cannot be converted
    """
    if isinstance(t, F):
        return t
    if isinstance(t, (int, float, str)):
        return F(t)
    raise TypeError(f"Could not convert {t!r} to a rational")


@_functools.cache
def getLogger(name: str,
              fmt='[%(name)s:%(filename)s:%(lineno)s:%(funcName)s:%(levelname)s] %(message)s',
              level='WARNING',
              filelog=''
              ) -> _logging.Logger:
    """
    A logger with its own handler, not propagating to the root logger

    Args:
        name: the name of the logger
        fmt: the format of each record
        level: the initial level. Use ``logger.setLevel('DEBUG')`` to see
            why a text was not resolved to a dynamic, or which relayouts
            were requested
        filelog: if given, records are **also** written to this file

    Returns:
        the logger
    """
    logger = _logging.getLogger(name)
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(level)
    formatter = _logging.Formatter(fmt)
    handler = _logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if filelog:
        filehandler = _logging.FileHandler(filelog)
        filehandler.setFormatter(formatter)
        logger.addHandler(filehandler)
    return logger


logger = getLogger("sforzando")
