"""Flag types: how many line tokens a flag consumes and how its value is coerced."""

import warnings
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeAlias, get_args, get_origin

from comptree.utils import frozen


class ArgType(Enum):
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    COUNT = "count"


@frozen
class ListOf:
    """A repeatable flag collecting comma (and, for numbers, space) separated values."""

    element: ArgType = ArgType.STRING

    def __attrs_post_init__(self):
        if self.element not in (ArgType.STRING, ArgType.NUMBER):
            raise TypeError(f"ListOf only supports STRING or NUMBER elements, got {self.element}.")


FlagType: TypeAlias = ArgType | ListOf

DEFAULT_TYPE = ArgType.BOOLEAN
"""Type assumed for a flag that was never declared.

A repeated undeclared flag counts its occurrences instead (see :func:`implicit_type`).
"""

_PYTHON_TYPES: dict[Any, ArgType] = {
    bool: ArgType.BOOLEAN,
    str: ArgType.STRING,
    int: ArgType.NUMBER,
    float: ArgType.NUMBER,
}


def implicit_type(seen: bool) -> ArgType:
    """Type of an undeclared flag.

    Parameters
    ----------
    seen: bool
        Whether the flag already appeared earlier in the same line.
    """
    return ArgType.COUNT if seen else DEFAULT_TYPE


def to_flag_type(hint: Any) -> FlagType:
    """Normalize a user-supplied type declaration.

    Accepts :class:`ArgType` / :class:`ListOf` instances, the Python types
    ``bool``, ``str``, ``int`` and ``float``, lists thereof (``list[str]``, ``[int]``),
    and names such as ``"count"`` or ``"list[number]"``.

    Raises
    ------
    TypeError
        If ``hint`` cannot be interpreted as a flag type.
    """
    if isinstance(hint, ArgType | ListOf):
        return hint
    if isinstance(hint, str):
        return _from_name(hint)

    # ``[int]`` style hints, mirroring ``{"--nums": [Number]}`` declarations.
    if isinstance(hint, list | tuple):
        if len(hint) != 1:
            raise TypeError(f"Cannot interpret {hint!r} as a flag type.")
        return ListOf(_element_type(hint[0]))

    if hint in _PYTHON_TYPES:
        return _PYTHON_TYPES[hint]

    # ``list[int]`` / ``tuple[str, ...]`` style hints
    origin = get_origin(hint)
    if origin in (list, tuple, set):
        args = [arg for arg in get_args(hint) if arg is not Ellipsis]
        return ListOf(_element_type(args[0] if args else str))

    raise TypeError(f"Cannot interpret {hint!r} as a flag type.")


def _element_type(hint: Any) -> ArgType:
    element = to_flag_type(hint)
    if not isinstance(element, ArgType) or element not in (ArgType.STRING, ArgType.NUMBER):
        raise TypeError(f"Unsupported list element type {hint!r}.")
    return element


def _from_name(name: str) -> FlagType:
    normalized = name.strip().lower()
    if normalized.startswith("list[") and normalized.endswith("]"):
        return ListOf(_element_type(normalized[5:-1]))
    aliases = {"bool": "boolean", "str": "string", "int": "number", "float": "number"}
    normalized = aliases.get(normalized, normalized)
    try:
        return ArgType(normalized)
    except ValueError:
        raise TypeError(f"Unknown flag type name {name!r}.") from None


def normalize_types(types: Mapping[str, Any] | None, aliases: Mapping[str, str] | None = None) -> dict[str, FlagType]:
    """Build the effective flag-type map.

    Every alias receives the type of its canonical flag, or :data:`DEFAULT_TYPE`
    if the canonical flag is not typed.

    Parameters
    ----------
    types: Mapping[str, Any] | None
        Flag token to type declaration (see :func:`to_flag_type`).
    aliases: Mapping[str, str] | None
        Alias flag token to canonical flag token.

    Returns
    -------
    dict[str, FlagType]
        A new mapping; the inputs are not modified.
    """
    result = {flag: to_flag_type(hint) for flag, hint in (types or {}).items()}
    for alias, canonical in (aliases or {}).items():
        if canonical not in result and canonical.startswith("-"):
            warnings.warn(
                f"Alias {alias!r} targets {canonical!r}, which has no declared type; assuming {DEFAULT_TYPE.value}.",
                stacklevel=2,
            )
        result[alias] = result.get(canonical, DEFAULT_TYPE)
    return result
