__version__ = "0.1.0"

__all__ = [
    "ArgType",
    "Branch",
    "Completion",
    "CompletionResult",
    "CompletionUnit",
    "ComptreeError",
    "GrammarError",
    "LeafList",
    "LeafString",
    "ListOf",
    "ParsedLine",
    "REMAINDER",
    "ShellValidationError",
    "generate_shell_completion",
    "get_shell",
    "next_completions",
    "parse_line",
    "parse_tree",
    "resolve",
]

from comptree.completion import generate_shell_completion, get_shell
from comptree.engine import Completion, CompletionResult, next_completions
from comptree.exceptions import ComptreeError, GrammarError, ShellValidationError
from comptree.parse import REMAINDER, ParsedLine, parse_line
from comptree.resolve import resolve
from comptree.tree import Branch, LeafList, LeafString, parse_tree
from comptree.types import ArgType, ListOf
from comptree.unit import CompletionUnit
