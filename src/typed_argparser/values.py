"""
The closed set of scalar values an argument can hold.

A raw command-line token is turned into a ``Value`` by a decoder. The default
decoder understands every ``ValueKind``; numbers are parsed strictly, so that a
bad token is reported as an invalid literal, an out-of-range number, or a
number followed by trailing characters.
"""

import enum
import math
import re
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any, Protocol, Union

from result import Err, Ok, Result

from .errors import panic

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1
_MAX_INTEGER_DIGITS = len(str(UINT64_MAX))

_TRUE_WORDS = ("true", "on", "yes")
_FALSE_WORDS = ("false", "off", "no")

_SIGNED_PREFIX = re.compile(r"-?[0-9]+")
_UNSIGNED_PREFIX = re.compile(r"[0-9]+")
_DOUBLE_PREFIX = re.compile(
    r"-?(?:"
    r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?"
    r"|inf(?:inity)?"
    r"|nan(?:\([0-9a-z_]*\))?"
    r")",
    re.IGNORECASE,
)


class ValueKind(enum.Enum):
    """Scalar kinds; the value is the label used in error messages."""

    BOOL = "boolean"
    INT64 = "int64"
    UINT64 = "uint64"
    DOUBLE = "double"
    STRING = "string"
    PATH = "path"


class DecodeFailure(enum.Enum):
    INVALID = "invalid"
    OUT_OF_RANGE = "out of range"
    TRAILING = "trailing characters"


@dataclass(frozen=True)
class DecodeError:
    """Why a token could not be decoded as a given kind."""

    kind: ValueKind
    reason: DecodeFailure = DecodeFailure.INVALID

    def __str__(self) -> str:
        label = self.kind.value
        if self.reason is DecodeFailure.OUT_OF_RANGE:
            return f"bad value ({label} out of range)"
        if self.reason is DecodeFailure.TRAILING:
            return f"bad value (trailing characters in {label})"
        return f"bad value ({label})"


def _payload_matches(kind: ValueKind, data: Any) -> bool:
    if kind is ValueKind.BOOL:
        return isinstance(data, bool)
    if kind is ValueKind.INT64:
        return (
            isinstance(data, int)
            and not isinstance(data, bool)
            and INT64_MIN <= data <= INT64_MAX
        )
    if kind is ValueKind.UINT64:
        return (
            isinstance(data, int)
            and not isinstance(data, bool)
            and 0 <= data <= UINT64_MAX
        )
    if kind is ValueKind.DOUBLE:
        return isinstance(data, float)
    if kind is ValueKind.STRING:
        return isinstance(data, str)
    return isinstance(data, PurePath)


@dataclass(frozen=True)
class Value:
    """
    A decoded scalar: exactly one kind and its payload.

    Example:
        Value(ValueKind.INT64, -3)
        Value(ValueKind.PATH, Path("out.txt"))
    """

    kind: ValueKind
    data: Any

    def __post_init__(self) -> None:
        if not _payload_matches(self.kind, self.data):
            raise TypeError(
                f"{type(self.data).__name__} {self.data!r} is not a valid "
                f"{self.kind.value} value"
            )

    def __str__(self) -> str:
        return render(self)


class Decoder(Protocol):
    """Anything that turns a raw token into a value of the requested kind."""

    def __call__(
        self, raw: str, kind: ValueKind
    ) -> Result[Value, Union[DecodeError, str]]: ...


def _decode_bool(raw: str) -> Result[Value, DecodeError]:
    if raw in _TRUE_WORDS:
        return Ok(Value(ValueKind.BOOL, True))
    if raw in _FALSE_WORDS:
        return Ok(Value(ValueKind.BOOL, False))
    return Err(DecodeError(ValueKind.BOOL))


def _decode_integer(raw: str, kind: ValueKind) -> Result[Value, DecodeError]:
    if kind is ValueKind.INT64:
        pattern, low, high = _SIGNED_PREFIX, INT64_MIN, INT64_MAX
    else:
        pattern, low, high = _UNSIGNED_PREFIX, 0, UINT64_MAX

    match = pattern.match(raw)
    if match is None:
        return Err(DecodeError(kind, DecodeFailure.INVALID))
    text = match.group()
    negative = text.startswith("-")
    digits = text.lstrip("-").lstrip("0") or "0"
    # Longer than any 64-bit value; also keeps int() under its digit limit
    if len(digits) > _MAX_INTEGER_DIGITS:
        return Err(DecodeError(kind, DecodeFailure.OUT_OF_RANGE))
    number = -int(digits) if negative else int(digits)
    if not low <= number <= high:
        return Err(DecodeError(kind, DecodeFailure.OUT_OF_RANGE))
    if match.end() != len(raw):
        return Err(DecodeError(kind, DecodeFailure.TRAILING))
    return Ok(Value(kind, number))


def _decode_double(raw: str) -> Result[Value, DecodeError]:
    kind = ValueKind.DOUBLE
    match = _DOUBLE_PREFIX.match(raw)
    if match is None:
        return Err(DecodeError(kind, DecodeFailure.INVALID))

    text = match.group()
    body = text.lstrip("-").lower()
    if body.startswith("nan"):
        # float() does not accept the nan(payload) form
        number = float(text[: len(text) - len(body)] + "nan")
    else:
        number = float(text)
        if math.isinf(number) and not body.startswith("inf"):
            return Err(DecodeError(kind, DecodeFailure.OUT_OF_RANGE))
        mantissa = body.split("e")[0]
        if number == 0.0 and mantissa.strip("0.") != "":
            return Err(DecodeError(kind, DecodeFailure.OUT_OF_RANGE))

    if match.end() != len(raw):
        return Err(DecodeError(kind, DecodeFailure.TRAILING))
    return Ok(Value(kind, number))


def decode(raw: str, kind: ValueKind) -> Result[Value, DecodeError]:
    """
    Decode a raw token as a value of ``kind``.

    Args:
        raw (str): The token text, without any option name.
        kind (ValueKind): The kind the argument expects.

    Returns:
        Result[Value, DecodeError]:
            - Ok with the decoded value,
            - Err describing why the token is not a valid ``kind``.
    """
    if kind is ValueKind.BOOL:
        return _decode_bool(raw)
    if kind in (ValueKind.INT64, ValueKind.UINT64):
        return _decode_integer(raw, kind)
    if kind is ValueKind.DOUBLE:
        return _decode_double(raw)
    if kind is ValueKind.STRING:
        return Ok(Value(kind, raw))
    return Ok(Value(kind, Path(raw)))


default_decoder: Decoder = decode


def type_name(item: Union[ValueKind, Value]) -> str:
    """Human readable label of a kind, or of the kind of a value."""
    if isinstance(item, Value):
        return item.kind.value
    return item.value


def render(value: Value) -> str:
    """Canonical text of a value, as used in error messages."""
    if value.kind is ValueKind.BOOL:
        return "true" if value.data else "false"
    if value.kind is ValueKind.DOUBLE:
        return repr(value.data)
    return str(value.data)


def kind_for(target: Any) -> ValueKind:
    """
    Map the type of a bound variable to its value kind.

    ``bool``, ``int``, ``float``, ``str`` and any ``pathlib.PurePath`` subclass
    are understood. Python has no unsigned integer type, so ``ValueKind.UINT64``
    has to be passed explicitly; any ``ValueKind`` is returned unchanged.
    """
    if isinstance(target, ValueKind):
        return target
    if isinstance(target, type):
        # bool is a subclass of int
        if issubclass(target, bool):
            return ValueKind.BOOL
        if issubclass(target, int):
            return ValueKind.INT64
        if issubclass(target, float):
            return ValueKind.DOUBLE
        if issubclass(target, str):
            return ValueKind.STRING
        if issubclass(target, PurePath):
            return ValueKind.PATH
    panic(f"unsupported argument type: {target!r}")
