"""Completion tree: the immutable description of a command's grammar.

A tree is built from nested literals supplied by the CLI author::

    {
        "build": {
            "__desc": "Build the project",
            "__opts": {"--target": ["x86", "arm"]},
            "--target": {},
            "--release": {},
        },
        "deploy": ["staging", "prod"],
        "shell": "__dynamic_payload__",
    }

and converted once into :class:`Branch`, :class:`LeafList` and :class:`LeafString` nodes.
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

from attrs import field

from comptree.utils import frozen

DESCRIPTION_KEY = "__desc"
OPTIONS_KEY = "__opts"
RESERVED_KEYS = frozenset({DESCRIPTION_KEY, OPTIONS_KEY})

ANY_FLAG = "*"
"""``flag_options`` key holding value candidates shared by every flag of a branch."""


def _dedupe(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@frozen
class LeafString:
    """A literal payload returned verbatim, bypassing shell-specific rendering."""

    payload: str


@frozen
class LeafList:
    """A finite set of literal completion strings; declaration order is kept."""

    values: tuple[str, ...] = field(default=(), converter=_dedupe)


@frozen(kw_only=True)
class Branch:
    """Subcommands (and flag names) available at one depth of the command."""

    children: Mapping[str, "Node"] = field(factory=dict)
    description: str | None = None
    flag_options: Mapping[str, "Node"] = field(factory=dict)

    def options_for(self, flag: str) -> "Node | None":
        """Value candidates for ``flag``, falling back to the branch-wide ``"*"`` entry."""
        try:
            return self.flag_options[flag]
        except KeyError:
            return self.flag_options.get(ANY_FLAG)


Node: TypeAlias = Branch | LeafList | LeafString


def parse_tree(obj: Any, *, _path: tuple[str, ...] = ()) -> Node:
    """Convert a nested ``dict``/``list``/``str`` literal into tree nodes.

    Already-built nodes are passed through untouched.

    Parameters
    ----------
    obj: Any
        Tree literal.

    Raises
    ------
    TypeError
        If some part of the literal is not a mapping, a sequence of strings, or a string.

    Returns
    -------
    Node
        Root of the completion tree.
    """
    if isinstance(obj, Branch | LeafList | LeafString):
        return obj
    if isinstance(obj, str):
        return LeafString(obj)
    if isinstance(obj, Mapping):
        description = obj.get(DESCRIPTION_KEY)
        if description is not None and not isinstance(description, str):
            raise TypeError(f"{_where(_path)}: {DESCRIPTION_KEY!r} must be a string, got {type(description).__name__}.")
        children = {
            str(key): parse_tree(value, _path=_path + (str(key),))
            for key, value in obj.items()
            if key not in RESERVED_KEYS
        }
        return Branch(
            children=children,
            description=description,
            flag_options=_parse_flag_options(obj.get(OPTIONS_KEY), _path),
        )
    if isinstance(obj, list | tuple | set | frozenset):
        values = list(obj)
        if not all(isinstance(value, str) for value in values):
            raise TypeError(f"{_where(_path)}: leaf lists may only contain strings.")
        return LeafList(values)
    raise TypeError(f"{_where(_path)}: unsupported completion tree node {type(obj).__name__}.")


def _parse_flag_options(obj: Any, path: tuple[str, ...]) -> dict[str, Node]:
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return {str(flag): parse_tree(value, _path=path + (OPTIONS_KEY, str(flag))) for flag, value in obj.items()}
    # A bare list applies to every value-taking flag of this branch.
    return {ANY_FLAG: parse_tree(obj, _path=path + (OPTIONS_KEY,))}


def _where(path: tuple[str, ...]) -> str:
    return "<root>" if not path else " ".join(path)
