"""comptree CLI implementation."""

from typing import Annotated

from cyclopts import App, Parameter

from comptree import __version__

DEBUG_ENV_VAR = "COMPTREE_COMPLETION_DEBUG"

RootKeys = Annotated[tuple[str, ...], Parameter(name="--root-key", negative=())]
"""Keys leading to a grammar inside a larger document."""

app = App(
    name="comptree",
    help="Shell tab-completion from a completion tree.",
    version=__version__,
)


# Explicitly import command modules
from comptree.cli import (  # noqa: E402
    complete,  # noqa: F401
    script,  # noqa: F401
)

__all__ = ["app"]
