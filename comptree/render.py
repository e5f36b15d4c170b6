"""Shell-specific rendering of completion candidates.

One line per candidate, in input order:

* ``bash``: ``name``; bash doesn't filter, so callers apply :func:`filter_prefix`.
* ``zsh``: ``name:description`` with ``:`` escaped as ``\\:`` (consumed by ``_describe``).
* ``fish``: ``name<TAB>description``.
"""

import re
from collections.abc import Iterable
from typing import Literal

from comptree.unit import CompletionUnit

Shell = Literal["bash", "zsh", "fish"]

SUPPORTED_SHELLS: tuple[Shell, ...] = ("bash", "zsh", "fish")


def clean_text(text: str) -> str:
    """Collapse whitespace and drop control characters.

    A stray newline or tab would split one candidate into several.
    """
    text = re.sub(r"[\x00-\x1f\x7f]", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def _escape_zsh(text: str) -> str:
    return text.replace(":", r"\:")


def render_unit(shell: Shell, unit: CompletionUnit) -> str:
    # TODO: display ``unit.alias`` once zsh/fish have an agreed-upon format for it.
    description = clean_text(unit.description) if unit.description else ""
    if shell == "bash":
        return unit.name
    elif shell == "zsh":
        name = _escape_zsh(unit.name)
        return f"{name}:{_escape_zsh(description)}" if description else name
    elif shell == "fish":
        return f"{unit.name}\t{description}" if description else unit.name
    else:
        raise ValueError(f"Unsupported shell: {shell}")


def render(shell: Shell, units: Iterable[CompletionUnit]) -> list[str]:
    return [render_unit(shell, unit) for unit in units]


def filter_prefix(lines: Iterable[str], partial: str) -> list[str]:
    """Keep lines starting with ``partial`` (case-sensitive)."""
    return [line for line in lines if line.startswith(partial)]
