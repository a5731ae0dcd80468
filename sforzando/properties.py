"""
Property ids and value coercion

Properties are the attributes of an element which can be queried and
modified generically, via ``getProperty`` / ``setProperty``. Each
:class:`Pid` has a name (used when referring to a property by name) and
a value type. :func:`coerce` converts loosely typed values (str tokens,
ints, tuples) to the type of the property.
"""
from __future__ import annotations
import enum

from . import _util
from .catalog import DynamicKind, DynamicRange, DynamicSpeed
from .geometry import PointF

from typing import Any


__all__ = (
    'Pid',
    'propertyName',
    'propertyId',
    'coerce',
)


class Pid(enum.Enum):
    DYNAMIC_TYPE = 'dynamicType'
    VELOCITY = 'velocity'
    DYNAMIC_RANGE = 'dynamicRange'
    VELO_CHANGE = 'veloChange'
    VELO_CHANGE_SPEED = 'veloChangeSpeed'
    SUBTYPE = 'subtype'

    TEXT = 'text'
    PLACEMENT = 'placement'
    ALIGN = 'align'
    OFFSET = 'offset'
    FONT_SIZE = 'fontSize'
    AUTOPLACE = 'autoplace'
    TEXT_STYLE = 'textStyle'


_byName = {pid.value: pid for pid in Pid}


def propertyName(pid: Pid) -> str:
    return pid.value


def propertyId(name: str) -> Pid:
    """
    The property id for the given name

    Raises ValueError if the name is not known
    """
    pid = _byName.get(name)
    if pid is None:
        _util.checkChoice('property name', name, list(_byName.keys()))
    return pid


_placements = ('above', 'below')
_aligns = ('left', 'hcenter', 'right')


def _asKind(value) -> DynamicKind:
    if isinstance(value, DynamicKind):
        return value
    elif isinstance(value, str):
        return DynamicKind(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        # index within the closed set
        return list(DynamicKind)[value]
    raise TypeError(f"Expected a DynamicKind, got {value!r}")


def _asEnum(enumcls: type[enum.Enum], value):
    if isinstance(value, enumcls):
        return value
    elif isinstance(value, str):
        return enumcls(value.lower())
    raise TypeError(f"Expected a {enumcls.__name__}, got {value!r}")


def _asInt(value) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected an int, got {value!r}")
    return int(value)


def _asPoint(value) -> PointF:
    if isinstance(value, PointF):
        return value
    elif isinstance(value, (tuple, list)) and len(value) == 2:
        return PointF(float(value[0]), float(value[1]))
    raise TypeError(f"Expected a point (x, y), got {value!r}")


def _asChoice(name: str, choices: tuple[str, ...]):
    def func(value) -> str:
        if not isinstance(value, str):
            raise TypeError(f"Expected a str for {name}, got {value!r}")
        _util.checkChoice(name, value, choices)
        return value
    return func


def _asStr(value) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected a str, got {value!r}")
    return value


_coercers = {
    Pid.DYNAMIC_TYPE: _asKind,
    Pid.SUBTYPE: _asKind,
    Pid.VELOCITY: _asInt,
    Pid.DYNAMIC_RANGE: lambda v: _asEnum(DynamicRange, v),
    Pid.VELO_CHANGE: _asInt,
    Pid.VELO_CHANGE_SPEED: lambda v: _asEnum(DynamicSpeed, v),
    Pid.TEXT: _asStr,
    Pid.PLACEMENT: _asChoice('placement', _placements),
    Pid.ALIGN: _asChoice('align', _aligns),
    Pid.OFFSET: _asPoint,
    Pid.FONT_SIZE: float,
    Pid.AUTOPLACE: bool,
    Pid.TEXT_STYLE: _asStr,
}


def coerce(pid: Pid, value: Any) -> Any:
    """
    Convert value to the type of the given property

    Args:
        pid: the property id
        value: the value to convert

    Returns:
        the converted value

    Raises:
        TypeError: if the value cannot be interpreted as the property's type
        ValueError: if the value is of the right type but not valid
    """
    return _coercers[pid](value)
