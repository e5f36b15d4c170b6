import sys

import pytest

from comptree import ArgType, Completion


@pytest.fixture
def tree():
    return {
        "start": {"__desc": "Start the service"},
        "stop": {"__desc": "Stop the service"},
        "build": {
            "__desc": "Build the project",
            "__opts": {"--target": ["x86", "arm"], "--nums": ["1", "2"]},
            "release": {"__desc": "Release build"},
            "debug": {"__desc": "Debug: unoptimized"},
        },
        "deploy": ["staging", "prod"],
        "shell": "__payload__",
    }


@pytest.fixture
def aliases():
    return {"-t": "--target", "b": "build"}


@pytest.fixture
def types():
    return {
        "--target": str,
        "--level": int,
        "-v": ArgType.COUNT,
        "-q": bool,
        "-o": str,
        "-n": int,
        "--tags": list[str],
        "--nums": [int],
    }


@pytest.fixture
def completion(tree, aliases, types):
    return Completion(tree, aliases, types)


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Create a temporary home directory for testing."""
    if sys.platform == "win32":
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
    else:
        monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path
