"""Line tokenizer & classifier.

Turns the raw line a shell is completing into the resolved command path,
the partial word under the cursor, and whether the cursor is in flag-value position.
"""

import re
from collections.abc import Mapping
from typing import Any

from attrs import field

from comptree.tree import Branch, Node
from comptree.types import ArgType, FlagType, ListOf, implicit_type
from comptree.utils import frozen, is_number, is_option_like, to_number

SEPARATOR = " -- "
"""Everything after this separator is free-form positional input."""

REMAINDER = "--"
"""``arg_values`` key collecting positional tokens."""

_SPLIT = re.compile(r"[\s=]+")


@frozen(kw_only=True)
class ParsedLine:
    """Classification of a single completion line."""

    tokens: tuple[str, ...] = ()
    "Resolved canonical command tokens, in order; the path used for tree lookup."

    partial: str = ""
    "The in-progress word being completed."

    awaiting_flag_value: bool = False
    "The cursor sits where ``pending_flag``'s value goes."

    pending_flag: str | None = None
    "Canonical flag whose value is being completed."

    arg_values: dict[str, Any] = field(factory=dict, hash=False)
    "Values accumulated from the line, keyed by canonical token (and :data:`REMAINDER`)."


def tokenize(line: str) -> tuple[list[str], list[str]]:
    """Split a completion line into words.

    Parameters
    ----------
    line: str
        Full line, including the program name.

    Returns
    -------
    words: list[str]
        Words before the ``" -- "`` separator, program name dropped.
        The last word is always the partial word; it is ``""`` when the cursor
        follows whitespace, an ``=`` or the separator.
    remainder: list[str]
        Words after the separator.
    """
    head, separator, tail = line.partition(SEPARATOR)
    words = [word for word in _SPLIT.split(head) if word][1:]
    if separator or _SPLIT.match(head[-1:]):
        words.append("")
    if not words:
        words.append("")
    return words, tail.split()


def parse_line(
    line: str,
    types: Mapping[str, FlagType] | None = None,
    aliases: Mapping[str, str] | None = None,
    tree: Node | None = None,
) -> ParsedLine:
    """Classify every word of ``line``.

    Never raises on line content: unknown words become positional input,
    unknown flags follow the default type policy.

    Parameters
    ----------
    line: str
        Full line, including the program name.
    types: Mapping[str, FlagType] | None
        Canonical flag token to type.
    aliases: Mapping[str, str] | None
        Alias token to canonical token.
    tree: Node | None
        Completion tree; non-option words naming a child of the current branch are resolved.

    Returns
    -------
    ParsedLine
    """
    words, remainder = tokenize(line)
    partial = words.pop()

    classifier = _Classifier(words, partial, types or {}, aliases or {}, tree)
    classifier.run()

    if remainder:
        classifier.remainder().extend(remainder)

    return ParsedLine(
        tokens=tuple(classifier.tokens),
        partial=partial,
        awaiting_flag_value=classifier.pending_flag is not None,
        pending_flag=classifier.pending_flag,
        arg_values=classifier.values,
    )


class _Classifier:
    def __init__(
        self,
        words: list[str],
        partial: str,
        types: Mapping[str, FlagType],
        aliases: Mapping[str, str],
        node: Node | None,
    ):
        self.words = words
        self.partial = partial
        self.types = types
        self.aliases = aliases
        self.node = node
        self.index = 0
        self.tokens: list[str] = []
        self.values: dict[str, Any] = {}
        self.pending_flag: str | None = None

    def run(self):
        while self.index < len(self.words) and self.pending_flag is None:
            word = self._consume()
            if word == "--":
                continue
            if word == "-" or not is_option_like(word):
                self._positional(word)
            elif word.startswith("--") or len(word) == 2 or self._canonical(word) in self.types:
                self._flag(self._canonical(word))
            else:
                self._short_cluster(word)

    def _canonical(self, token: str) -> str:
        return self.aliases.get(token, token)

    def _consume(self) -> str:
        word = self.words[self.index]
        self.index += 1
        return word

    def _at_end(self) -> bool:
        return self.index >= len(self.words)

    def _type_of(self, flag: str) -> FlagType:
        try:
            return self.types[flag]
        except KeyError:
            return implicit_type(flag in self.values)

    def _positional(self, word: str):
        canonical = self._canonical(word)
        if isinstance(self.node, Branch) and canonical in self.node.children:
            self.tokens.append(canonical)
            self.values[canonical] = True
            self.node = self.node.children[canonical]
        else:
            self.remainder().append(word)

    def remainder(self) -> list[str]:
        collected = self.values.get(REMAINDER)
        if not isinstance(collected, list):
            collected = self.values[REMAINDER] = []
        return collected

    def _flag(self, flag: str):
        flag_type = self._type_of(flag)
        match flag_type:
            case ArgType.BOOLEAN:
                self.values[flag] = True
            case ArgType.COUNT:
                self._increment(flag)
            case ArgType.STRING | ArgType.NUMBER:
                if self._at_end():
                    self.pending_flag = flag
                else:
                    self.values[flag] = _coerce(flag_type, self._consume())
            case ListOf():
                self._list(flag, flag_type)

    def _increment(self, flag: str):
        current = self.values.get(flag, 0)
        self.values[flag] = (current if isinstance(current, int) else 0) + 1

    def _list(self, flag: str, flag_type: ListOf):
        if self._at_end():
            self.pending_flag = flag
            return

        self._extend(flag, flag_type, self._consume())

        if flag_type.element is ArgType.NUMBER:
            # --nums 1 2 3
            while not self._at_end() and _is_numeric_list(self.words[self.index]):
                self._extend(flag, flag_type, self._consume())
            # Only a number (or nothing yet) continues the list at the cursor.
            if self._at_end() and (not self.partial or _is_numeric_list(self.partial)):
                self.pending_flag = flag

    def _extend(self, flag: str, flag_type: ListOf, raw: str):
        collected = self.values.get(flag)
        if not isinstance(collected, list):
            collected = self.values[flag] = []
        collected.extend(_coerce(flag_type.element, value) for value in raw.split(",") if value)

    def _attach(self, flag: str, flag_type: FlagType | None, raw: str):
        """Record a value written directly after a short flag (``-n5``, ``-ofile``)."""
        if isinstance(flag_type, ListOf):
            self._extend(flag, flag_type, raw)
        elif flag_type is ArgType.STRING:
            self.values[flag] = raw
        else:
            self.values[flag] = to_number(raw)

    def _short_cluster(self, word: str):
        # Numeric suffix takes precedence over cluster decomposition: ``-n5``.
        flag, suffix = self._canonical(word[:2]), word[2:]
        declared = self.types.get(flag)
        if is_number(suffix) and declared not in (ArgType.BOOLEAN, ArgType.COUNT):
            self._attach(flag, declared, suffix)
            return

        for position in range(1, len(word)):
            if word[position] == "-":
                continue
            flag = self._canonical(f"-{word[position]}")
            flag_type = self._type_of(flag)
            if flag_type is ArgType.BOOLEAN:
                self.values[flag] = True
            elif flag_type is ArgType.COUNT:
                self._increment(flag)
            else:
                # Once we hit an option that takes a value, the rest is the value.
                attached = word[position + 1 :]
                if attached:
                    self._attach(flag, flag_type, attached)
                else:
                    self._flag(flag)
                return


def _is_numeric_list(word: str) -> bool:
    values = [value for value in word.split(",") if value]
    return bool(values) and all(is_number(value) for value in values)


def _coerce(flag_type: ArgType, raw: str) -> Any:
    if flag_type is ArgType.NUMBER:
        return to_number(raw)
    return raw
