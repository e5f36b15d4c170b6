"""Tree resolver: candidate completions at a resolved command path."""

from collections.abc import Iterable, Mapping

from comptree.tree import RESERVED_KEYS, Branch, LeafList, LeafString, Node
from comptree.unit import CompletionUnit


def resolve(
    tree: Node,
    tokens: Iterable[str],
    *,
    pending_flag: str | None = None,
    alias_hints: Mapping[str, str] | None = None,
) -> str | list[CompletionUnit]:
    """Walk ``tree`` along ``tokens`` and list what may come next.

    Parameters
    ----------
    tree: Node
        Root of the completion tree.
    tokens: Iterable[str]
        Resolved canonical command tokens.
    pending_flag: str | None
        If set, the cursor is on this flag's value;
        only the flag options of the reached branch are considered.
    alias_hints: Mapping[str, str] | None
        Canonical token to a display string of its aliases.

    Returns
    -------
    str | list[CompletionUnit]
        A :class:`~comptree.tree.LeafString` payload verbatim, or the candidates.
        An unknown token anywhere along the path yields an empty list.
    """
    node = tree
    for token in tokens:
        match node:
            case Branch(children=children) if token in children:
                node = children[token]
            case _:
                return []

    if pending_flag is not None:
        if not isinstance(node, Branch):
            return []
        options = node.options_for(pending_flag)
        if options is None:
            return []
        node = options

    return units_of(node, alias_hints or {})


def units_of(node: Node, alias_hints: Mapping[str, str]) -> str | list[CompletionUnit]:
    match node:
        case LeafString(payload=payload):
            return payload
        case LeafList(values=values):
            return [CompletionUnit(name=value) for value in values]
        case Branch(children=children, description=shared):
            return [
                CompletionUnit(name=name, description=_description(child, shared), alias=alias_hints.get(name))
                for name, child in children.items()
                if name not in RESERVED_KEYS
            ]
    raise TypeError(f"Unknown completion tree node {node!r}.")


def _description(child: Node, shared: str | None) -> str | None:
    # A child's own description wins over the one shared by its siblings.
    if isinstance(child, Branch) and child.description:
        return child.description
    return shared
