"""Grammar documents: completion trees, aliases and flag types stored as data."""

__all__ = [
    "Dict",
    "GrammarBase",
    "GrammarFromFile",
    "Json",
    "Toml",
    "Yaml",
    "grammar_from_path",
    "load_grammar",
]

from pathlib import Path
from typing import TYPE_CHECKING

from comptree.grammar._common import Dict, GrammarBase, GrammarFromFile
from comptree.grammar._json import Json
from comptree.grammar._toml import Toml
from comptree.grammar._yaml import Yaml

if TYPE_CHECKING:
    from comptree.engine import Completion

_SUFFIXES: dict[str, type[GrammarFromFile]] = {
    ".json": Json,
    ".toml": Toml,
    ".yaml": Yaml,
    ".yml": Yaml,
}


def grammar_from_path(path: str | Path, **kwargs) -> GrammarFromFile:
    """Pick the grammar loader matching ``path``'s suffix.

    Raises
    ------
    ValueError
        If the suffix is not one of ``.json``, ``.toml``, ``.yaml``, ``.yml``.
    """
    path = Path(path)
    try:
        cls = _SUFFIXES[path.suffix.lower()]
    except KeyError:
        raise ValueError(f"Unsupported grammar file type {path.suffix!r}; expected one of {sorted(_SUFFIXES)}.") from None
    return cls(path, **kwargs)


def load_grammar(path: str | Path, **kwargs) -> "Completion":
    """Load a grammar file and build its :class:`~comptree.engine.Completion`."""
    return grammar_from_path(path, **kwargs).completion()
