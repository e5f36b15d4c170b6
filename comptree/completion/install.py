"""Shell completion installation utilities.

This module handles the installation of completion scripts to shell-specific
locations and the updating of shell RC files to load completions.
"""

import shlex
from collections.abc import Iterable
from pathlib import Path

from comptree.completion.detect import get_shell
from comptree.completion.script import completion_command, generate_shell_completion
from comptree.render import Shell

# Relative to the home directory; each shell loads completions from here.
_COMPLETION_DIRS: dict[str, tuple[str, ...]] = {
    "bash": (".local", "share", "bash-completion", "completions"),
    "zsh": (".zsh", "completions"),
    "fish": (".config", "fish", "completions"),
}

_RC_FILES: dict[str, str] = {
    "bash": ".bashrc",
    "zsh": ".zshrc",
}


def get_default_completion_path(shell: Shell, prog_name: str) -> Path:
    """Get the default completion script path for a given shell.

    Parameters
    ----------
    shell : Literal["zsh", "bash", "fish"]
        Shell type.
    prog_name : str
        Program name for the completion script.

    Returns
    -------
    Path
        Default installation path for the shell.

    Raises
    ------
    ValueError
        If shell type is unsupported.
    """
    try:
        directory = _COMPLETION_DIRS[shell]
    except KeyError:
        raise ValueError(f"Unsupported shell: {shell}") from None

    match shell:
        case "zsh":
            filename = f"_{prog_name}"  # compinit autoloads ``_<command>`` files
        case "fish":
            filename = f"{prog_name}.fish"
        case _:
            filename = prog_name
    return Path.home().joinpath(*directory, filename)


def add_to_rc_file(script_path: Path, prog_name: str, shell: Shell, *, callback: str | None = None) -> bool:
    """Add completion configuration to shell RC file.

    For bash, adds a source line to load the completion script.
    For zsh, adds the completion directory to fpath so compinit can find it.
    Fish loads ``~/.config/fish/completions`` on its own, so nothing is written.

    Parameters
    ----------
    script_path : Path
        Path to the completion script.
    prog_name : str
        Program name for display in comments.
    shell : Literal["bash", "zsh", "fish"]
        Shell type.
    callback : str | None
        Command the script calls for completions; named in the comment.

    Returns
    -------
    bool
        True if configuration was added, False if it already existed or isn't needed.
    """
    if shell not in _RC_FILES:
        return False

    rc_file = (Path.home() / _RC_FILES[shell]).resolve()
    if shell == "zsh":
        config_line = f"fpath=({script_path.parent} $fpath)"
    else:
        config_line = f'[ -f "{script_path}" ] && . "{script_path}"'
    comment = f"# {prog_name} completion"
    if callback:
        comment += f" (via {callback})"

    if rc_file.exists():
        content = rc_file.read_text()
        if config_line in content:
            return False
        needs_newline = content and not content.endswith("\n")
    else:
        needs_newline = False

    with rc_file.open("a") as f:
        if needs_newline:
            f.write("\n")
        f.write(f"{comment}\n{config_line}\n")

    return True


def install_completion(
    prog_name: str,
    completer: str | None = None,
    shell: str | None = None,
    output: Path | None = None,
    add_to_startup: bool = False,
    *,
    grammar: str | Path | None = None,
    root_keys: Iterable[str] = (),
) -> Path:
    """Write the completion script for ``prog_name`` to disk.

    Parameters
    ----------
    prog_name : str
        Program name.
    completer : str | None
        Subcommand of ``prog_name`` that prints completions.
    shell : str | None
        Target shell; see :func:`~comptree.completion.get_shell`.
    output : Path | None
        Destination. Defaults to :func:`get_default_completion_path`.
    add_to_startup : bool
        Also register the script in the shell's RC file.
    grammar : str | Path | None
        Serve completions from this grammar file through ``comptree complete``.
    root_keys : Iterable[str]
        Keys leading to the grammar inside ``grammar``.

    Returns
    -------
    Path
        Where the script was written.
    """
    root_keys = tuple(root_keys)
    resolved_shell = get_shell(shell)
    script = generate_shell_completion(prog_name, completer, resolved_shell, grammar=grammar, root_keys=root_keys)

    install_path = output if output is not None else get_default_completion_path(resolved_shell, prog_name)
    install_path.parent.mkdir(parents=True, exist_ok=True)
    install_path.write_text(script)

    if add_to_startup:
        callback = shlex.join(completion_command(prog_name, completer, grammar=grammar, root_keys=root_keys))
        add_to_rc_file(install_path, prog_name, resolved_shell, callback=callback)

    return install_path
