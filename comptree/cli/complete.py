"""Completion requests driven by a grammar file."""

import os
import warnings
from pathlib import Path

from rich.markup import escape

from comptree.cli import DEBUG_ENV_VAR, RootKeys, app
from comptree.completion.detect import get_shell
from comptree.exceptions import ComptreeError, ShellValidationError
from comptree.grammar import load_grammar


@app.command
def complete(
    grammar: Path,
    *,
    shell: str | None = None,
    root_keys: RootKeys = (),
) -> int:
    """Print completions for the line in ``COMP_LINE``.

    Intended to be called by a shell completion script.
    A grammar that fails to load prints nothing (set ``COMPTREE_COMPLETION_DEBUG`` to raise instead).

    Parameters
    ----------
    grammar: Path
        JSON, TOML or YAML grammar file.
    shell: str | None
        Shell to format completions for. Defaults to ``$SHELL``.
    root_keys: tuple[str, ...]
        Keys leading to the grammar inside the document (e.g. ``--root-key tool --root-key mycli``).
    """
    try:
        resolved_shell = get_shell(shell)
    except ShellValidationError as e:
        app.error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    try:
        completion = load_grammar(grammar, root_keys=root_keys)
    except (ComptreeError, ValueError, OSError) as e:
        if os.environ.get(DEBUG_ENV_VAR):
            raise
        warnings.warn(f"Failed to load grammar {str(grammar)!r}: {e}", stacklevel=2)
        return 0

    completion.next_completions(resolved_shell).write()
    return 0
