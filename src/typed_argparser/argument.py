"""Declared arguments and the names an option answers to."""

from typing import Callable, NamedTuple, Optional

from .values import Value, ValueKind

Writer = Callable[[Value], Optional[str]]


class OptionNames(NamedTuple):
    """Long and short spelling of an option; either may be empty, not both."""

    long_name: str = ""
    short_name: str = ""

    def one_defined(self) -> bool:
        return bool(self.long_name or self.short_name)


class Argument:
    """
    One declared binding, owned by the parser that created it.

    ``index`` is the argument's identity inside its parser and never changes.
    The parser marks ``provided`` the first time the argument shows up on the
    command line, and hands decoded values to ``writer``.

    Example:
        parser.positional("input", Path).required()
        parser.option(("--jobs", "-j"), int).help("Number of workers")
    """

    def __init__(
        self,
        index: int,
        kind: ValueKind,
        names: list[str],
        writer: Writer,
    ) -> None:
        self.index = index
        self.kind = kind
        self.names: tuple[str, ...] = tuple(names)
        self.writer = writer
        self.is_required = False
        self.provided = False
        self.help_text = ""

    @property
    def name(self) -> str:
        return self.names[0]

    def required(self) -> "Argument":
        self.is_required = True
        return self

    def help(self, text: str) -> "Argument":
        # Stored for callers; the parser does not render help.
        self.help_text = text
        return self

    def mark_provided(self) -> None:
        self.provided = True

    def __repr__(self) -> str:
        return (
            f"Argument(index={self.index}, names={self.names!r}, "
            f"kind={self.kind.value}, required={self.is_required})"
        )
