"""
TypedArgParser - a small command-line parser with typed, declared arguments.

Arguments are declared up front, each with one scalar type. ``parse()`` walks
the raw tokens once, left to right, and stops at the first problem, returning
it as an ``Err`` with a descriptive message. On success the caller reads the
bound values out of the returned ``ParsedArgs``.
"""

import os
import sys
from collections.abc import Iterator, Mapping
from typing import Any, Callable, Optional, Sequence, Union

from loguru import logger
from result import Err, Ok, Result

from .argument import Argument, OptionNames, Writer
from .errors import panic, require
from .policy import Policy
from .values import (
    Decoder,
    Value,
    ValueKind,
    default_decoder,
    kind_for,
    render,
    type_name,
)

Callback = Callable[[Any], None]
ArgumentKey = Union[str, Argument]


class ParsedArgs(Mapping):
    """
    Values bound by a successful parse, keyed by canonical argument name.

    Any registered name (``"--output"`` or ``"-o"``) or the ``Argument``
    returned at registration can be used as a key. Arguments that did not
    appear on the command line are absent.
    """

    def __init__(
        self,
        arguments: Sequence[Argument],
        names: dict[str, int],
        bound: dict[int, Value],
    ) -> None:
        self._arguments = tuple(arguments)
        self._names = dict(names)
        self._bound = dict(bound)

    def _index(self, key: ArgumentKey) -> int:
        if isinstance(key, Argument):
            if (
                key.index < len(self._arguments)
                and self._arguments[key.index] is key
            ):
                return key.index
            raise KeyError(key)
        if key in self._names:
            return self._names[key]
        raise KeyError(key)

    def value_of(self, key: ArgumentKey) -> Value:
        """Return the typed ``Value`` bound to an argument."""
        index = self._index(key)
        if index not in self._bound:
            raise KeyError(key)
        return self._bound[index]

    def __getitem__(self, key: ArgumentKey) -> Any:
        return self.value_of(key).data

    def __iter__(self) -> Iterator[str]:
        for argument in self._arguments:
            if argument.index in self._bound:
                yield argument.name

    def __len__(self) -> int:
        return len(self._bound)

    def __repr__(self) -> str:
        return f"ParsedArgs({dict(self)!r})"


class ArgumentParser:
    """
    A command-line parser for positional arguments and options of one scalar type each.

    Tokens that start with the long prefix are long options and take their
    value inline (``--output=out.txt``); tokens that start with the short
    prefix are short options and take the next token as their value
    (``-o out.txt``). Boolean options need no value. Every other token fills
    the next positional argument in declaration order.

    Example:
        parser = ArgumentParser(["prog", "--verbose", "in.txt", "-o", "out.txt"])
        source = parser.positional("input", Path).required()
        parser.option(("--output", "-o"), Path)
        parser.option(("--verbose", "-v"), bool)

        result = parser.parse()
        if result.is_err():
            sys.exit(result.unwrap_err())
        args = result.unwrap()
        args[source], args["--output"], args["--verbose"]
    """

    def __init__(
        self,
        argv: Optional[Sequence[str]] = None,
        policy: Optional[Policy] = None,
        decoder: Decoder = default_decoder,
    ) -> None:
        """
        Initialize the parser.

        Args:
            argv: Raw tokens, program name first. If None, uses sys.argv.
            policy: Prefix and delimiter conventions. Defaults to ``Policy()``.
            decoder: Turns a token into a value of the kind an argument expects.
        """
        self.argv: list[str] = list(sys.argv if argv is None else argv)
        self.policy: Policy = policy if policy is not None else Policy()
        self.decoder: Decoder = decoder

        self._arguments: list[Argument] = []
        self._positionals: list[int] = []
        self._option_order: list[int] = []
        # option names only; drives token lookup
        self._options: dict[str, int] = {}
        # every name, positional or option; drives result lookup
        self._names: dict[str, int] = {}
        self._bound: dict[int, Value] = {}
        self._position = 0

    @property
    def prog(self) -> str:
        return os.path.basename(self.argv[0]) if self.argv else "prog"

    @property
    def arguments(self) -> tuple[Argument, ...]:
        return tuple(self._arguments)

    def positional(
        self, name: str, type: Any, callback: Optional[Callback] = None
    ) -> Argument:
        """
        Declare the next positional argument.

        Args:
            name: Display name of the argument; must be non-empty.
            type: Python type of the value (bool, int, float, str, Path) or a ValueKind.
            callback: Optional callable receiving the value each time it is bound.

        Returns:
            Argument: The declared argument, for chaining ``.required()``.
        """
        require(
            isinstance(name, str) and name, "positional must have non-empty name"
        )
        require(
            name not in self._names, f"argument name already registered: {name!r}"
        )

        argument = self._register(kind_for(type), [name], callback)
        self._positionals.append(argument.index)
        return argument

    def option(
        self,
        names: Union[OptionNames, tuple[str, str], str],
        type: Any,
        callback: Optional[Callback] = None,
    ) -> Argument:
        """
        Declare an option.

        Args:
            names: ``(long_name, short_name)``, either of which may be empty, or a
                single name whose prefix decides its role.
            type: Python type of the value (bool, int, float, str, Path) or a ValueKind.
            callback: Optional callable receiving the value each time it is bound.

        Returns:
            Argument: The declared argument, for chaining ``.required()``.
        """
        option_names = self._option_names(names)
        require(option_names.one_defined(), "option must have at least one name")

        long_name, short_name = option_names
        declared = []
        if long_name:
            require(
                long_name.startswith(self.policy.long_prefix),
                f"long option name must start with {self.policy.long_prefix!r}: "
                f"{long_name!r}",
            )
            declared.append(long_name)
        if short_name:
            require(
                short_name.startswith(self.policy.short_prefix),
                f"short option name must start with {self.policy.short_prefix!r}: "
                f"{short_name!r}",
            )
            require(
                short_name != long_name,
                f"long and short option names must differ: {short_name!r}",
            )
            declared.append(short_name)
        for name in declared:
            require(
                name not in self._names, f"argument name already registered: {name!r}"
            )

        argument = self._register(kind_for(type), declared, callback)
        for name in declared:
            self._options[name] = argument.index
        self._option_order.append(argument.index)
        return argument

    def parse(self) -> Result[ParsedArgs, str]:
        """
        Parse the tokens after the program name.

        Returns:
            Result[ParsedArgs, str]:
                - Ok with the bound values if every token was accepted and every
                  required argument was supplied,
                - Err with the message of the first problem found.
        """
        self._position = 0
        tokens = iter(self.argv[1:])
        for token in tokens:
            if token.startswith(self.policy.long_prefix):
                error = self._parse_long_option(token)
            elif token.startswith(self.policy.short_prefix):
                error = self._parse_short_option(token, tokens)
            else:
                error = self._parse_positional(token)
            if error is not None:
                logger.debug(f"parse failed at {token!r}: {error}")
                return Err(error)

        error = self._check_required()
        if error is not None:
            return Err(error)
        return Ok(ParsedArgs(self._arguments, self._names, self._bound))

    def parse_or_exit(self) -> ParsedArgs:
        """
        Parse, or print the error to stderr and exit with status 2.

        Raises:
            SystemExit: If parsing fails.
        """
        result = self.parse()
        if result.is_err():
            print(f"{self.prog}: error: {result.unwrap_err()}", file=sys.stderr)
            raise SystemExit(2)
        return result.unwrap()

    def _option_names(
        self, names: Union[OptionNames, tuple[str, str], str]
    ) -> OptionNames:
        if isinstance(names, OptionNames):
            return names
        if isinstance(names, str):
            if names.startswith(self.policy.long_prefix):
                return OptionNames(long_name=names)
            if names.startswith(self.policy.short_prefix):
                return OptionNames(short_name=names)
            panic(
                f"option name must start with {self.policy.long_prefix!r} "
                f"or {self.policy.short_prefix!r}: {names!r}"
            )
        require(
            isinstance(names, (tuple, list)) and len(names) <= 2,
            f"option names must be (long_name, short_name), got {names!r}",
        )
        return OptionNames(*names)

    def _register(
        self, kind: ValueKind, names: list[str], callback: Optional[Callback]
    ) -> Argument:
        index = len(self._arguments)
        argument = Argument(
            index, kind, names, self._make_writer(index, kind, names[0], callback)
        )
        self._arguments.append(argument)
        for name in names:
            self._names[name] = index
        logger.debug(f"registered {argument!r}")
        return argument

    def _make_writer(
        self,
        index: int,
        kind: ValueKind,
        name: str,
        callback: Optional[Callback],
    ) -> Writer:
        def write(value: Value) -> Optional[str]:
            if value.kind is not kind:
                return f"{name}: expected {type_name(kind)}, got {type_name(value)}"
            if index in self._bound:
                # Supplied again: the latest value replaces the earlier one.
                logger.debug(f"{name}: rebinding {render(self._bound[index])!r}")
            self._bound[index] = value
            if callback is not None:
                callback(value.data)
            return None

        return write

    def _parse_long_option(self, token: str) -> Optional[str]:
        name, _, raw = token.partition(self.policy.assign_delim)
        index = self._options.get(name)
        if index is None:
            return f"unknown option: {name}"

        option = self._arguments[index]
        option.mark_provided()

        decoded = self.decoder(raw, option.kind)
        if decoded.is_err():
            if option.kind is not ValueKind.BOOL:
                return f"{token}: {decoded.unwrap_err()}"
            # Bare flag, or a value that is not a boolean literal.
            value = Value(ValueKind.BOOL, True)
        else:
            value = decoded.unwrap()
            error = self._type_check(token, value, option)
            if error is not None:
                return error

        logger.debug(f"{option.name} <- {render(value)!r}")
        return option.writer(value)

    def _parse_short_option(self, token: str, tokens: Iterator[str]) -> Optional[str]:
        index = self._options.get(token)
        if index is None:
            return f"unknown option: {token}"

        option = self._arguments[index]
        option.mark_provided()

        if option.kind is ValueKind.BOOL:
            value = Value(ValueKind.BOOL, True)
        else:
            raw = next(tokens, None)
            if raw is None:
                return f"{token}: missing value"
            decoded = self.decoder(raw, option.kind)
            if decoded.is_err():
                return f"{token}: {decoded.unwrap_err()}"
            value = decoded.unwrap()
            error = self._type_check(token, value, option)
            if error is not None:
                return error

        logger.debug(f"{option.name} <- {render(value)!r}")
        return option.writer(value)

    def _parse_positional(self, token: str) -> Optional[str]:
        if self._position >= len(self._positionals):
            return f"unexpected positional argument #{self._position}: {token}"

        positional = self._arguments[self._positionals[self._position]]
        positional.mark_provided()

        decoded = self.decoder(token, positional.kind)
        if decoded.is_err():
            return f"{positional.name}: {decoded.unwrap_err()}"
        value = decoded.unwrap()
        error = self._type_check(token, value, positional)
        if error is not None:
            return error

        logger.debug(f"{positional.name} <- {render(value)!r}")
        error = positional.writer(value)
        if error is not None:
            return error
        self._position += 1
        return None

    def _type_check(
        self, label: str, value: Value, argument: Argument
    ) -> Optional[str]:
        if value.kind is not argument.kind:
            return (
                f"{label}: expected {type_name(argument.kind)}, "
                f"got {type_name(value)} '{render(value)}'"
            )
        return None

    def _check_required(self) -> Optional[str]:
        for index in self._positionals:
            positional = self._arguments[index]
            if positional.is_required and not positional.provided:
                return f"missing required positional: {positional.name}"
        for index in self._option_order:
            option = self._arguments[index]
            if option.is_required and not option.provided:
                return f"missing required option: {option.name}"
        return None
