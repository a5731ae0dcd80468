"""
The dynamics catalog

A fixed table mapping each :class:`DynamicKind` to its playback velocity,
its implied change in velocity, whether it supports a time-bounded velocity
change, and the glyphs used to write it.

Velocities follow the usual mapping of dynamics to midi velocities
(see http://en.wikipedia.org/wiki/File:Dynamic's_Note_Velocity.svg)

Example
~~~~~~~

    >>> from sforzando import catalog
    >>> entry = catalog.lookup(catalog.DynamicKind.SFZ)
    >>> entry.baseVelocity, entry.velocityDelta
    (112, -18)
    >>> catalog.glyphTextOf(catalog.DynamicKind.MF)
    '<sym>dynamicMezzo</sym><sym>dynamicForte</sym>'
"""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
import enum


__all__ = (
    'DynamicKind',
    'DynamicRange',
    'DynamicSpeed',
    'CatalogEntry',
    'lookup',
    'glyphTextOf',
    'glyphsToText',
    'kindFromTag',
    'kindFromGlyphText',
    'isAccentStyle',
    'userName',
    'rangeFromToken',
    'speedFromToken',
    'glyphLetters',
)


class DynamicKind(enum.Enum):
    """
    The closed set of dynamic markings

    The value of each member is its canonical short tag, as used when
    persisting a dynamic
    """
    OTHER = 'other'
    PPPPPP = 'pppppp'
    PPPPP = 'ppppp'
    PPPP = 'pppp'
    PPP = 'ppp'
    PP = 'pp'
    P = 'p'
    MP = 'mp'
    MF = 'mf'
    F = 'f'
    FF = 'ff'
    FFF = 'fff'
    FFFF = 'ffff'
    FFFFF = 'fffff'
    FFFFFF = 'ffffff'
    FP = 'fp'
    PF = 'pf'
    SF = 'sf'
    SFZ = 'sfz'
    SFF = 'sff'
    SFFZ = 'sffz'
    SFP = 'sfp'
    SFPP = 'sfpp'
    RFZ = 'rfz'
    RF = 'rf'
    FZ = 'fz'
    M = 'm'
    R = 'r'
    S = 's'
    Z = 'z'
    N = 'n'

    @property
    def tag(self) -> str:
        return self.value


class DynamicRange(enum.Enum):
    """The scope over which the velocity of a dynamic applies"""
    STAFF = 'staff'
    PART = 'part'
    SYSTEM = 'system'


class DynamicSpeed(enum.Enum):
    """How fast a velocity change takes place"""
    SLOW = 'slow'
    NORMAL = 'normal'
    FAST = 'fast'


@dataclass(frozen=True)
class CatalogEntry:
    kind: DynamicKind
    """The kind this entry describes"""

    baseVelocity: int | None
    """Midi velocity (0-127), None if the kind does not imply any velocity"""

    velocityDelta: int
    """Change in velocity implied by this kind"""

    isAccentStyle: bool
    """Does this kind support an explicit, time-bounded velocity change?"""

    glyphs: tuple[str, ...]
    """The glyph names used to write this kind, in order. Empty for OTHER"""

    symbol: str = ''
    """A composite glyph representing the whole marking, used to query
    its metrics. Empty if there is no such glyph"""

    @property
    def glyphText(self) -> str:
        return glyphsToText(self.glyphs)


# Glyph names
_p = 'dynamicPiano'
_m = 'dynamicMezzo'
_f = 'dynamicForte'
_r = 'dynamicRinforzando'
_s = 'dynamicSforzando'
_z = 'dynamicZ'
_n = 'dynamicNiente'


glyphLetters: dict[str, str] = {
    _p: 'p',
    _m: 'm',
    _f: 'f',
    _r: 'r',
    _s: 's',
    _z: 'z',
    _n: 'n',
}
"""Maps each dynamic glyph to the letter it represents"""


def _entry(kind: DynamicKind, velocity: int | None, delta: int, accent: bool,
           glyphs: tuple[str, ...], symbol='') -> CatalogEntry:
    return CatalogEntry(kind=kind, baseVelocity=velocity, velocityDelta=delta,
                        isAccentStyle=accent, glyphs=glyphs, symbol=symbol)


_K = DynamicKind

# Order matters: reverse lookups return the first match
_entries = (
    _entry(_K.OTHER,  None, 0,   False, ()),
    _entry(_K.PPPPPP, 1,    0,   False, (_p,) * 6, 'dynamicPPPPPP'),
    _entry(_K.PPPPP,  5,    0,   False, (_p,) * 5, 'dynamicPPPPP'),
    _entry(_K.PPPP,   10,   0,   False, (_p,) * 4, 'dynamicPPPP'),
    _entry(_K.PPP,    16,   0,   False, (_p,) * 3, 'dynamicPPP'),
    _entry(_K.PP,     33,   0,   False, (_p,) * 2, 'dynamicPP'),
    _entry(_K.P,      49,   0,   False, (_p,), 'dynamicPiano'),

    _entry(_K.MP,     64,   0,   False, (_m, _p), 'dynamicMP'),
    _entry(_K.MF,     80,   0,   False, (_m, _f), 'dynamicMF'),

    _entry(_K.F,      96,   0,   False, (_f,), 'dynamicForte'),
    _entry(_K.FF,     112,  0,   False, (_f,) * 2, 'dynamicFF'),
    _entry(_K.FFF,    126,  0,   False, (_f,) * 3, 'dynamicFFF'),
    _entry(_K.FFFF,   127,  0,   False, (_f,) * 4, 'dynamicFFFF'),
    _entry(_K.FFFFF,  127,  0,   False, (_f,) * 5, 'dynamicFFFFF'),
    _entry(_K.FFFFFF, 127,  0,   False, (_f,) * 6, 'dynamicFFFFFF'),

    _entry(_K.FP,     96,   -47, True,  (_f, _p), 'dynamicFortePiano'),
    _entry(_K.PF,     49,   47,  False, (_p, _f), 'dynamicPF'),

    _entry(_K.SF,     112,  -18, True,  (_s, _f), 'dynamicSforzando1'),
    _entry(_K.SFZ,    112,  -18, True,  (_s, _f, _z), 'dynamicSforzato'),
    _entry(_K.SFF,    126,  -18, True,  (_s, _f, _f)),
    _entry(_K.SFFZ,   126,  -18, True,  (_s, _f, _f, _z), 'dynamicSforzatoFF'),
    _entry(_K.SFP,    112,  -47, True,  (_s, _f, _p), 'dynamicSforzandoPiano'),
    _entry(_K.SFPP,   112,  -79, True,  (_s, _f, _p, _p), 'dynamicSforzandoPianissimo'),

    _entry(_K.RFZ,    112,  -18, True,  (_r, _f, _z), 'dynamicRinforzando2'),
    _entry(_K.RF,     112,  -18, True,  (_r, _f), 'dynamicRinforzando1'),
    _entry(_K.FZ,     112,  -18, True,  (_f, _z), 'dynamicForzando'),

    _entry(_K.M,      96,   -16, True,  (_m,), 'dynamicMezzo'),
    _entry(_K.R,      112,  -18, True,  (_r,), 'dynamicRinforzando'),
    _entry(_K.S,      112,  -18, True,  (_s,), 'dynamicSforzando'),
    _entry(_K.Z,      80,   0,   False, (_z,), 'dynamicZ'),
    _entry(_K.N,      49,   -48, False, (_n,), 'dynamicNiente'),
)

_catalog: MappingProxyType[DynamicKind, CatalogEntry] = MappingProxyType(
    {entry.kind: entry for entry in _entries})


_userNames = {
    _K.OTHER: 'other',
    _K.PPPPPP: 'pppppp',
    _K.PPPPP: 'ppppp',
    _K.PPPP: 'pppp',
    _K.PPP: 'ppp',
    _K.PP: 'pianissimo',
    _K.P: 'piano',
    _K.MP: 'mezzo piano',
    _K.MF: 'mezzo forte',
    _K.F: 'forte',
    _K.FF: 'fortissimo',
    _K.FFF: 'fff',
    _K.FFFF: 'ffff',
    _K.FFFFF: 'fffff',
    _K.FFFFFF: 'ffffff',
    _K.FP: 'fortepiano',
    _K.PF: 'pianoforte',
    _K.SF: 'sforzando',
    _K.SFZ: 'sforzato',
    _K.SFF: 'sforzando fortissimo',
    _K.SFFZ: 'sforzato fortissimo',
    _K.SFP: 'sforzando piano',
    _K.SFPP: 'sforzando pianissimo',
    _K.RFZ: 'rinforzato',
    _K.RF: 'rinforzando',
    _K.FZ: 'forzando',
    _K.M: 'mezzo',
    _K.R: 'rinforzando (r)',
    _K.S: 'sforzando (s)',
    _K.Z: 'z',
    _K.N: 'niente',
}


def lookup(kind: DynamicKind) -> CatalogEntry:
    """
    The catalog entry for the given kind

    Args:
        kind: the dynamic kind

    Returns:
        the corresponding :class:`CatalogEntry`
    """
    return _catalog[kind]


def glyphsToText(glyphs: tuple[str, ...]) -> str:
    """
    Convert a sequence of glyph names to text markup

    Each glyph is written as ``<sym>name</sym>``
    """
    return ''.join(f'<sym>{glyph}</sym>' for glyph in glyphs)


def glyphTextOf(kind: DynamicKind) -> str:
    """The text markup used to write the given kind ('' for OTHER)"""
    return _catalog[kind].glyphText


def isAccentStyle(kind: DynamicKind) -> bool:
    return _catalog[kind].isAccentStyle


def userName(kind: DynamicKind) -> str:
    """A human readable name for the given kind"""
    return _userNames[kind]


def kindFromTag(tag: str) -> DynamicKind | None:
    """
    Find the kind with the given short tag ('sfz', 'mp', ...)

    Returns:
        the matching kind, or None if no kind matches
    """
    for entry in _entries:
        if entry.kind.tag == tag:
            return entry.kind
    return None


def kindFromGlyphText(text: str) -> DynamicKind | None:
    """
    Find the kind whose glyph text is exactly ``text``

    Args:
        text: glyph markup, as returned by :func:`glyphTextOf`

    Returns:
        the matching kind, or None if no kind matches. An empty text never
        matches
    """
    if not text:
        return None
    for entry in _entries:
        if entry.glyphText == text:
            return entry.kind
    return None


def rangeFromToken(token: str, default=DynamicRange.STAFF) -> DynamicRange:
    """Parse a dynamic range token, returns *default* if not recognized"""
    try:
        return DynamicRange(token.strip().lower())
    except ValueError:
        return default


def speedFromToken(token: str, default=DynamicSpeed.NORMAL) -> DynamicSpeed:
    """Parse a velocity change speed token, returns *default* if not recognized"""
    try:
        return DynamicSpeed(token.strip().lower())
    except ValueError:
        return default
