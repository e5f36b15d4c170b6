"""To prevent circular dependencies, this module should never import anything else from comptree."""

import functools
import math
from collections.abc import Iterable
from contextlib import suppress
from typing import TYPE_CHECKING, Any

# https://threeofwands.com/attra-iv-zero-overhead-frozen-attrs-classes/
if TYPE_CHECKING:
    from attrs import frozen
else:
    from attrs import define

    frozen = functools.partial(define, unsafe_hash=True)


def is_option_like(token: str) -> bool:
    """Checks if a token looks like an option.

    Namely, negative numbers (``"-2"``) are not options, but a token like ``--foo`` is.

    Parameters
    ----------
    token: str
        String to interpret.

    Returns
    -------
    bool
        Whether or not the ``token`` is option-like.
    """
    if is_number(token):
        return False
    return token.startswith("-")


def is_number(token: str) -> bool:
    """Whether ``token`` parses as a finite or infinite (but not NaN) number."""
    try:
        value = float(token)
    except ValueError:
        return False
    return not math.isnan(value)


def to_number(token: str) -> int | float:
    """Coerce ``token`` to a number.

    Integers are tried first, then floats.
    Anything that doesn't parse (including ``"nan"``) becomes ``0``.
    """
    with suppress(ValueError):
        return int(token)
    if is_number(token):
        return float(token)
    return 0


def is_iterable(obj) -> bool:
    if isinstance(obj, list | tuple | set | dict):  # Fast path for common types
        return True
    return not isinstance(obj, str) and isinstance(obj, Iterable)


def to_tuple_converter(value: None | Any | Iterable[Any]) -> tuple[Any, ...]:
    """Convert a single element or an iterable of elements into a tuple.

    Intended to be used in an ``attrs.Field``. If :obj:`None` is provided, returns an empty tuple.
    If a single element is provided, returns a tuple containing just that element.
    If an iterable is provided, converts it into a tuple.
    """
    if value is None:
        return ()
    elif is_iterable(value):
        return tuple(value)
    else:
        return (value,)
