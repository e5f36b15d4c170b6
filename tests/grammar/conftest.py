import json

import pytest

GRAMMAR = {
    "tree": {
        "build": {
            "__desc": "Build the project",
            "__opts": {"--target": ["x86", "arm"]},
            "release": {},
        },
        "deploy": ["staging", "prod"],
    },
    "aliases": {"-t": "--target"},
    "types": {"--target": "string"},
}


@pytest.fixture
def grammar_dict():
    return json.loads(json.dumps(GRAMMAR))


@pytest.fixture
def json_grammar(tmp_path, grammar_dict):
    path = tmp_path / "grammar.json"
    path.write_text(json.dumps(grammar_dict))
    return path
