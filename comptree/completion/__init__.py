"""Shell integration: shell resolution, completion scripts and their installation."""

from comptree.completion.detect import get_shell
from comptree.completion.install import add_to_rc_file, get_default_completion_path, install_completion
from comptree.completion.script import completion_command, generate_shell_completion

__all__ = [
    "add_to_rc_file",
    "completion_command",
    "generate_shell_completion",
    "get_default_completion_path",
    "get_shell",
    "install_completion",
]
