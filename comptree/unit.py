from comptree.utils import frozen


@frozen(kw_only=True)
class CompletionUnit:
    """A single completion candidate."""

    name: str
    description: str | None = None

    alias: str | None = None
    """
    Other spellings of ``name``.

    Carried for renderers that can display alias hints; the bundled renderers don't.
    """
