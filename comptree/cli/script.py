"""Generation and installation of completion scripts."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.markup import escape

from comptree.cli import RootKeys, app
from comptree.completion.detect import get_shell
from comptree.completion.install import install_completion
from comptree.completion.script import generate_shell_completion
from comptree.exceptions import ShellValidationError


@app.command
def script(
    name: str,
    *,
    completer: str | None = None,
    grammar: Path | None = None,
    root_keys: RootKeys = (),
    shell: str | None = None,
) -> int:
    """Print the completion script for program NAME.

    The script calls ``NAME COMPLETER SHELL`` with ``COMP_LINE`` set, and hands
    the printed lines to the shell. With ``--grammar``, it calls
    ``comptree complete GRAMMAR --shell SHELL`` instead.

    Parameters
    ----------
    name: str
        Program name, as typed on the command line.
    completer: str | None
        Subcommand of NAME that prints completions. Defaults to ``completion``.
    grammar: Path | None
        Grammar file to complete NAME from.
    root_keys: tuple[str, ...]
        Keys leading to the grammar inside GRAMMAR.
    shell: str | None
        Target shell. Defaults to ``$SHELL``.
    """
    try:
        content = generate_shell_completion(name, completer, shell, grammar=grammar, root_keys=root_keys)
    except (ShellValidationError, ValueError) as e:
        app.error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    print(content, end="")
    return 0


@app.command
def install(
    name: str,
    *,
    completer: str | None = None,
    grammar: Path | None = None,
    root_keys: RootKeys = (),
    shell: str | None = None,
    output: Annotated[Path | None, Parameter(name=["-o", "--output"])] = None,
    add_to_startup: bool = False,
) -> int:
    """Install the completion script for program NAME.

    After installation, you may need to restart your shell or source your shell configuration file.

    Parameters
    ----------
    name: str
        Program name, as typed on the command line.
    completer: str | None
        Subcommand of NAME that prints completions. Defaults to ``completion``.
    grammar: Path | None
        Grammar file to complete NAME from.
    root_keys: tuple[str, ...]
        Keys leading to the grammar inside GRAMMAR.
    shell: str | None
        Target shell. Defaults to ``$SHELL``.
    output: Path | None
        Output path for the completion script. If not specified, uses shell-specific default.
    add_to_startup: bool
        Also register the script in ``~/.bashrc`` / ``~/.zshrc``.
    """
    try:
        resolved_shell = get_shell(shell)
        install_path = install_completion(
            name,
            completer,
            resolved_shell,
            output,
            add_to_startup,
            grammar=grammar,
            root_keys=root_keys,
        )
    except (ShellValidationError, ValueError) as e:
        app.error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    print(f"✓ Completion script installed to {install_path}")

    if resolved_shell == "zsh":
        print(f"\nTo enable completions, ensure {install_path.parent} is in your $fpath.")
        print("Then restart your shell or run: exec zsh")
    elif resolved_shell == "fish":
        print("\nCompletions are automatically loaded in fish.")
    elif not add_to_startup:
        print(f'\nTo enable completions, add this to your ~/.bashrc:\n    [ -f "{install_path}" ] && . "{install_path}"')
    return 0
