"""
TypedArgParser - a command-line parser with typed, declared arguments.

This package parses a raw token list into positional arguments and options,
each declared with a single scalar type (boolean, signed or unsigned integer,
double, string, or path). Parsing stops at the first bad token and reports it
as a descriptive error instead of raising.
"""

from loguru import logger

from .argument import Argument, OptionNames
from .errors import DeclarationError
from .parser import ArgumentParser, ParsedArgs
from .policy import Policy, load_policy
from .values import (
    DecodeError,
    DecodeFailure,
    Decoder,
    Value,
    ValueKind,
    decode,
    default_decoder,
    kind_for,
    render,
    type_name,
)

# Library logging is opt-in: logger.enable("typed_argparser")
logger.disable(__name__)

__version__ = "1.0.0"
__all__ = [
    "Argument",
    "ArgumentParser",
    "DeclarationError",
    "DecodeError",
    "DecodeFailure",
    "Decoder",
    "OptionNames",
    "ParsedArgs",
    "Policy",
    "Value",
    "ValueKind",
    "decode",
    "default_decoder",
    "kind_for",
    "load_policy",
    "render",
    "type_name",
]
