from __future__ import annotations

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Callable, Sequence


def reprObj(obj,
            exclude: Sequence[str] = (),
            properties: Sequence[str] = (),
            priorityargs: Sequence[str] = (),
            hideFalsy=False,
            quoteStrings: Sequence[str] = (),
            convert: dict[str, Callable] | None = None,
            ) -> str:
    """
    Generate the repr of an object from its attributes

    Attributes are sorted alphabetically, with ``priorityargs`` first.
    Attributes which are None are never shown

    Args:
        obj: the object
        exclude: attributes to leave out
        properties: properties to include
        priorityargs: attributes which are shown first
        hideFalsy: hide any attribute which evaluates to False
        quoteStrings: attributes whose value is quoted
        convert: maps attribute names to a function (value) -> str

    Returns:
        a string of the form "Cls(key=value, ...)"

    Example
    ~~~~~~~

        >>> reprObj(dyn, exclude=('score',), priorityargs=('kind',))
        "Dynamic(kind=DynamicKind.SFZ, dynamicRange=DynamicRange.PART, track=0, ...)"
    """
    import emlib.misc
    attrs = [a for a in emlib.misc.find_attrs(obj) if a not in exclude]
    attrs.extend(p for p in properties if p not in attrs)
    attrs.sort()
    attrs.sort(key=lambda attr: attr not in priorityargs)
    parts = []
    for attr in attrs:
        value = getattr(obj, attr)
        if value is None or (hideFalsy and not value):
            continue
        if convert and attr in convert:
            value = convert[attr](value)
        elif attr in quoteStrings:
            value = repr(value)
        parts.append(f'{attr}={value}')
    return f"{type(obj).__name__}({', '.join(parts)})"


def checkChoice(name: str, s: str, choices: Sequence[str], maxSuggestions=12) -> None:
    """
    Check that ``s`` is one of ``choices``

    Args:
        name: what is being checked, used in the error message
        s: the value to check
        choices: the possible values
        maxSuggestions: with more choices than this, only the closest
            matches are suggested

    Raises:
        ValueError: if s is not a valid choice
    """
    if s in choices:
        return
    if len(choices) > maxSuggestions:
        matches = [m[0] for m in fuzzymatch(s, choices, limit=maxSuggestions)]
        raise ValueError(f'Invalid value "{s}" for {name}, maybe you meant "{matches[0]}"? '
                         f'Other possible choices: {matches[1:]}')
    raise ValueError(f'Invalid value "{s}" for {name}, it should be one of {list(choices)}')


def fuzzymatch(query: str, choices: Sequence[str], limit=5) -> list[tuple[str, int]]:
    """
    The choices closest to query, as a list of (choice, score)
    """
    import warnings
    with warnings.catch_warnings():
        # thefuzz warns when the optional C speedups are not installed
        warnings.simplefilter("ignore")
        import thefuzz.process
    return thefuzz.process.extract(query, choices=list(choices), limit=limit)


def hasoverlap(x0: float, x1: float, y0: float, y1: float) -> bool:
    """Do the open intervals (x0, x1) and (y0, y1) overlap?"""
    return x0 < y1 and y0 < x1
