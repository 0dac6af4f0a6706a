"""
Error types and programmer-error helpers.

Bad command-line input is never raised: the parser returns it as an ``Err``.
Mistakes in how arguments or policies are declared are programmer errors and
are raised as ``DeclarationError`` through ``require``/``panic``.
"""

from typing import NoReturn

from loguru import logger


class DeclarationError(ValueError):
    """Raised when arguments or a policy are declared incorrectly."""


def panic(message: str) -> NoReturn:
    """Log a programmer error and abort the current declaration."""
    logger.critical(f"panic() called: {message}")
    raise DeclarationError(message)


def require(condition: object, message: str) -> None:
    """Panic with ``message`` unless ``condition`` holds."""
    if not condition:
        panic(message)
