from pathlib import Path
from typing import Any

from comptree.grammar._common import GrammarFromFile


class Yaml(GrammarFromFile):
    def _load_grammar(self, path: Path) -> dict[str, Any]:
        from yaml import safe_load  # pyright: ignore[reportMissingImports]

        with path.open() as f:
            return safe_load(f)
