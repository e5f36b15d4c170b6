"""Shell resolution for completion requests and script generation.

The shell is taken from an explicit argument, or else from the ``SHELL``
environment variable; only the basename of a path is considered.
"""

import os
import re
from typing import cast

from comptree.exceptions import ShellValidationError
from comptree.render import SUPPORTED_SHELLS, Shell


def get_shell(shell: str | None = None) -> Shell:
    """Resolve and validate a shell name.

    Parameters
    ----------
    shell : str | None
        Shell name or path (e.g. ``"zsh"``, ``"/usr/bin/fish"``).
        Blank or :obj:`None` falls back to ``$SHELL``.

    Returns
    -------
    Literal["bash", "zsh", "fish"]
        The validated shell name.

    Raises
    ------
    ShellValidationError
        If no shell is provided and ``SHELL`` is unset, or the shell is unsupported.

    Examples
    --------
    >>> get_shell("/bin/bash")
    'bash'
    """
    shell = (shell or "").strip() or os.environ.get("SHELL", "").strip()
    if not shell:
        raise ShellValidationError(
            "Cannot detect SHELL; provide shell manually or set SHELL environment variable.",
        )

    name = re.split(r"[/\\]+", shell)[-1]
    if name not in SUPPORTED_SHELLS:
        supported = "', '".join(SUPPORTED_SHELLS)
        raise ShellValidationError(
            f"Unrecognized SHELL {name!r}. Only '{supported}' are supported.",
            shell=name,
        )
    return cast(Shell, name)
