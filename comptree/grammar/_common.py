import errno
import os
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from contextlib import suppress
from pathlib import Path
from typing import TYPE_CHECKING, Any

from attrs import define, field

from comptree.exceptions import ComptreeError, GrammarError
from comptree.utils import to_tuple_converter

if TYPE_CHECKING:
    from comptree.engine import Completion


@define(kw_only=True)
class GrammarBase(ABC):
    """Base class for grammar sources.

    A grammar document is a mapping with a ``tree`` entry and optional
    ``aliases`` and ``types`` entries::

        tree:
          build:
            __desc: Build the project
            __opts:
              --target: [x86, arm]
        aliases:
          -t: --target
        types:
          --target: string
    """

    root_keys: Iterable[str] = field(default=(), converter=to_tuple_converter)
    "Keys leading to the grammar inside a larger document (e.g. ``(\"tool\", \"mycli\")``)."

    _source: str | None = field(default=None, alias="source")

    @property
    @abstractmethod
    def grammar(self) -> dict[str, Any]:
        """Return the raw grammar dictionary."""
        raise NotImplementedError

    @property
    @abstractmethod
    def source(self) -> str:
        """Return a string identifying the grammar source for error messages."""
        raise NotImplementedError

    def completion(self) -> "Completion":
        """Build a :class:`~comptree.engine.Completion` from the grammar.

        Raises
        ------
        GrammarError
            If the document doesn't describe a valid grammar.
        """
        from comptree.engine import Completion

        document: Any = self.grammar
        try:
            for key in self.root_keys:
                document = document[key]
        except (KeyError, TypeError):
            raise GrammarError(f"Missing grammar at {'.'.join(self.root_keys)!r}.", source=self.source) from None

        if not isinstance(document, Mapping):
            raise GrammarError("A grammar must be a mapping.", source=self.source)
        if "tree" not in document:
            raise GrammarError("A grammar requires a 'tree' entry.", source=self.source)

        aliases = document.get("aliases") or {}
        types = document.get("types") or {}
        if not isinstance(aliases, Mapping) or not isinstance(types, Mapping):
            raise GrammarError("'aliases' and 'types' must be mappings.", source=self.source)

        try:
            return Completion(document["tree"], aliases, types)
        except TypeError as e:
            raise GrammarError(str(e), source=self.source) from e


class FileCacheKey:
    """Abstraction to quickly check if a file needs to be read again.

    If a newly instantiated ``CacheKey`` doesn't equal a previously instantiated ``CacheKey``,
    then the file needs to be re-read.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).absolute()
        if self.path.exists():
            stat = self.path.stat()
            self._mtime = stat.st_mtime
            self._size = stat.st_size
        else:
            self._mtime = None
            self._size = None

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False

        return self._mtime == other._mtime and self._size == other._size and self.path == other.path


@define
class GrammarFromFile(GrammarBase):
    """Grammar source that loads from a file."""

    path: str | Path = field(converter=Path)

    _grammar: dict[str, Any] | None = field(default=None, init=False, repr=False)
    "Loaded grammar structure (to be loaded by subclassed ``_load_grammar`` method)."

    _grammar_cache_key: FileCacheKey | None = field(default=None, init=False, repr=False)
    "Conditions under which ``_grammar`` was loaded."

    @abstractmethod
    def _load_grammar(self, path: Path) -> dict[str, Any]:
        """Load the grammar dictionary from path.

        Do **not** do any downstream caching; ``GrammarFromFile`` handles caching.

        Parameters
        ----------
        path: Path
            Path to the file. Guaranteed to exist.

        Returns
        -------
        dict
            Loaded grammar.
        """
        raise NotImplementedError

    @property
    def grammar(self) -> dict[str, Any]:
        assert isinstance(self.path, Path)
        path = self.path.expanduser()
        if not path.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.path))

        cache_key = FileCacheKey(path)
        if self._grammar_cache_key == cache_key:
            return self._grammar or {}

        try:
            self._grammar = self._load_grammar(path)
            self._grammar_cache_key = cache_key
        except ComptreeError:
            raise
        except Exception as e:
            msg = getattr(type(e), "__name__", "")
            with suppress(IndexError):
                exception_msg = str(e.args[0])
                if msg:
                    msg += ": "
                msg += exception_msg
            raise GrammarError(msg=msg, source=self.source) from e
        return self._grammar or {}

    @property
    def source(self) -> str:
        """Return a string identifying the grammar source for error messages."""
        if self._source is not None:
            return self._source
        assert isinstance(self.path, Path)
        return str(self.path.absolute())


@define
class Dict(GrammarBase):
    """Grammar source from an in-memory dictionary.

    Useful for programmatically generated grammars.
    """

    data: dict[str, Any]

    @property
    def grammar(self) -> dict[str, Any]:
        return self.data

    @property
    def source(self) -> str:
        """Return a string identifying the grammar source for error messages."""
        if self._source is not None:
            return self._source
        return "dict"
