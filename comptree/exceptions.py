from attrs import define, field

__all__ = [
    "ComptreeError",
    "GrammarError",
    "ShellValidationError",
]


@define
class ComptreeError(Exception):
    """Root exception for runtime errors.

    The completion engine itself never raises while processing a line;
    these are raised by the surrounding glue (shell resolution, grammar loading).
    """

    msg: str | None = None
    """
    If set, override automatic message generation.
    """

    def __str__(self):
        if self.msg is not None:
            return self.msg
        return type(self).__name__


@define
class ShellValidationError(ComptreeError):
    """The shell could not be detected, or is not one of the supported shells."""

    shell: str | None = field(default=None, kw_only=True)
    """
    The offending shell name, if one was supplied.
    """


@define
class GrammarError(ComptreeError):
    """A grammar document is malformed."""

    source: str | None = field(default=None, kw_only=True)
    """
    Where the grammar came from (typically a file path).
    """

    def __str__(self):
        message = super().__str__()
        if self.source:
            return f"{self.source}: {message}"
        return message
