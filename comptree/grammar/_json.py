import json
from pathlib import Path
from typing import Any

from comptree.grammar._common import GrammarFromFile


class Json(GrammarFromFile):
    def _load_grammar(self, path: Path) -> dict[str, Any]:
        with path.open() as f:
            return json.load(f)
