"""Installable completion scripts.

Each supported shell has a template under ``templates/``. The generated script
runs a callback command with ``COMP_LINE`` set to the line being edited, followed
by the shell name, and hands the printed lines to the shell. The callback is either
the program itself (``<pkgname> <completer> <shell>``) or, for a grammar file,
``comptree complete <grammar> --shell <shell>``.
"""

import re
import shlex
from collections.abc import Iterable
from pathlib import Path

from comptree.completion.detect import get_shell

TEMPLATE_DIR = Path(__file__).parent / "templates"

DEFAULT_COMPLETER = "completion"

COMPTREE_PROG = "comptree"


def _validate_name(kind: str, value: str) -> None:
    if not value or not re.match(r"^[a-zA-Z0-9_-]+$", value):
        raise ValueError(f"Invalid {kind}: {value!r}. Must be alphanumeric with hyphens/underscores.")


def completion_command(
    name: str,
    completer: str | None = None,
    *,
    grammar: str | Path | None = None,
    root_keys: Iterable[str] = (),
) -> list[str]:
    """Command a completion script runs; the shell name is appended as the last argument.

    Parameters
    ----------
    name : str
        Program name, as typed on the command line.
    completer : str | None
        Subcommand of ``name`` that prints completions. Defaults to ``"completion"``.
        Mutually exclusive with ``grammar``.
    grammar : str | Path | None
        Grammar file served by ``comptree complete`` instead of the program itself.
        Stored as an absolute path.
    root_keys : Iterable[str]
        Keys leading to the grammar inside the file (see ``comptree complete --root-key``).

    Raises
    ------
    ValueError
        If ``name`` or ``completer`` contains characters unsafe for a shell function name,
        or both ``completer`` and ``grammar`` are given.
    """
    _validate_name("prog_name", name)
    root_keys = tuple(root_keys)

    if grammar is None:
        if root_keys:
            raise ValueError("root_keys requires a grammar file.")
        completer = completer or DEFAULT_COMPLETER
        _validate_name("completer", completer)
        return [name, completer]

    if completer is not None:
        raise ValueError("completer and grammar are mutually exclusive.")
    command = [COMPTREE_PROG, "complete", str(Path(grammar).expanduser().absolute())]
    for key in root_keys:
        command += ["--root-key", key]
    command.append("--shell")
    return command


def generate_shell_completion(
    name: str,
    completer: str | None = None,
    shell: str | None = None,
    *,
    grammar: str | Path | None = None,
    root_keys: Iterable[str] = (),
) -> str:
    """Generate the completion script for program ``name``.

    Parameters
    ----------
    name : str
        Program name, as typed on the command line.
    completer : str | None
        Subcommand of ``name`` that prints completions. Defaults to ``"completion"``.
    shell : str | None
        Target shell; see :func:`~comptree.completion.get_shell`.
    grammar : str | Path | None
        Serve completions from this grammar file through ``comptree complete``.
    root_keys : Iterable[str]
        Keys leading to the grammar inside ``grammar``.

    Returns
    -------
    str
        Script ready to be sourced (bash), placed on ``$fpath`` (zsh),
        or dropped into ``~/.config/fish/completions`` (fish).

    Raises
    ------
    ShellValidationError
        If the shell cannot be resolved.
    ValueError
        See :func:`completion_command`.
    """
    command = shlex.join(completion_command(name, completer, grammar=grammar, root_keys=root_keys))
    shell = get_shell(shell)

    template = (TEMPLATE_DIR / f"completion.{shell}").read_text(encoding="utf-8")
    script = template.replace("{pkgname}", name).replace("{command}", command)
    return re.sub(r"\r?\n", "\n", script)
