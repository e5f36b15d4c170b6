import os
import sys
from collections.abc import Iterable, Mapping
from typing import IO, Any

from attrs import define, field

from comptree.parse import ParsedLine, parse_line
from comptree.render import Shell, filter_prefix, render
from comptree.resolve import resolve
from comptree.tree import Node, parse_tree
from comptree.types import FlagType, normalize_types
from comptree.unit import CompletionUnit
from comptree.utils import frozen


@frozen(kw_only=True)
class CompletionResult:
    """Output of a single completion request."""

    completions: str | list[str] = field(hash=False)
    """
    Either a literal payload to hand to the shell unchanged,
    or the rendered candidate lines.
    """

    arg_values: dict[str, Any] = field(factory=dict, hash=False)
    """
    Values accumulated while classifying the line.
    """

    parsed: ParsedLine | None = field(default=None, hash=False)

    @property
    def is_payload(self) -> bool:
        return isinstance(self.completions, str)

    def write(self, file: IO[str] | None = None) -> None:
        """Print the completions, one candidate per line."""
        if file is None:
            file = sys.stdout
        if isinstance(self.completions, str):
            print(self.completions, file=file)
        else:
            for line in self.completions:
                print(line, file=file)


def _to_unit(candidate: CompletionUnit | str) -> CompletionUnit:
    if isinstance(candidate, CompletionUnit):
        return candidate
    return CompletionUnit(name=candidate)


@define
class Completion:
    """Shell completion engine for a single command's grammar.

    Parameters
    ----------
    tree: Node | Mapping
        Completion tree, or the nested literal it is built from (see :func:`~comptree.tree.parse_tree`).
    aliases: Mapping[str, str]
        Alias token to canonical token.
    types: Mapping[str, Any]
        Flag token to type (see :func:`~comptree.types.to_flag_type`).
        Aliases are given their canonical flag's type on construction.

    Example
    -------
    .. code-block:: python

        completion = Completion(
            {"build": {"__opts": {"--target": ["x86", "arm"]}}},
            aliases={"-t": "--target"},
            types={"--target": str},
        )
        completion.next_completions("bash", line="mycli build -t ").write()
    """

    tree: Node = field(converter=parse_tree)
    aliases: dict[str, str] = field(factory=dict, converter=dict)
    types: dict[str, FlagType] = field(factory=dict, converter=dict)

    _alias_hints: dict[str, str] = field(init=False, factory=dict, repr=False)

    def __attrs_post_init__(self):
        self.types = normalize_types(self.types, self.aliases)

        hints: dict[str, list[str]] = {}
        for alias, canonical in self.aliases.items():
            hints.setdefault(canonical, []).append(alias)
        self._alias_hints = {canonical: ", ".join(names) for canonical, names in hints.items()}

    def parse(self, line: str) -> ParsedLine:
        """Classify ``line`` without resolving completions."""
        return parse_line(line, self.types, self.aliases, self.tree)

    def next_completions(
        self,
        shell: Shell,
        other_completions: Iterable[CompletionUnit | str] = (),
        *,
        line: str | None = None,
    ) -> CompletionResult:
        """Compute the completions for the line being edited.

        Parameters
        ----------
        shell: Literal["bash", "zsh", "fish"]
            Already validated shell name (see :func:`~comptree.completion.get_shell`).
        other_completions: Iterable[CompletionUnit | str]
            Extra candidates appended after the tree's candidates.
        line: str | None
            Line to complete. Defaults to the ``COMP_LINE`` environment variable.

        Returns
        -------
        CompletionResult
            Empty if there is no line to complete.
        """
        if line is None:
            line = os.environ.get("COMP_LINE", "")
        if not line:
            return CompletionResult(completions=[])

        parsed = self.parse(line)
        candidates = resolve(self.tree, parsed.tokens, pending_flag=parsed.pending_flag, alias_hints=self._alias_hints)
        if isinstance(candidates, str):
            return CompletionResult(completions=candidates, arg_values=parsed.arg_values, parsed=parsed)

        lines = render(shell, [*candidates, *(_to_unit(x) for x in other_completions)])
        if shell == "bash":
            lines = filter_prefix(lines, parsed.partial)

        return CompletionResult(completions=lines, arg_values=parsed.arg_values, parsed=parsed)


def next_completions(
    tree: Node | Mapping,
    shell: Shell,
    *,
    aliases: Mapping[str, str] | None = None,
    types: Mapping[str, Any] | None = None,
    line: str | None = None,
) -> CompletionResult:
    """One-shot convenience wrapper around :meth:`Completion.next_completions`."""
    return Completion(tree, aliases or {}, types or {}).next_completions(shell, line=line)
