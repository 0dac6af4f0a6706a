"""
Token conventions of a parser: option prefixes and delimiters.

A policy is fixed when the parser is built. It can be written inline or loaded
from a YAML or JSON file, for programs that want their own conventions.
"""

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Union

import yaml

from .errors import require


@dataclass(frozen=True)
class Policy:
    """
    Prefixes that mark long and short option names, and the delimiters used
    inside a token.

    ``assign_delim`` separates a long option from its inline value
    (``--level=3``). ``separator_delim`` is reserved for list values and is
    not consumed by the parser.

    Example:
        Policy()                                    # --name=value, -n value
        Policy(long_prefix="++", short_prefix="+")  # ++name=value, +n value
    """

    long_prefix: str = "--"
    short_prefix: str = "-"
    assign_delim: str = "="
    separator_delim: str = ","

    def __post_init__(self) -> None:
        require(
            self.long_prefix and self.short_prefix,
            "option prefixes must be non-empty",
        )
        require(
            self.long_prefix != self.short_prefix,
            f"long and short prefixes must differ (both {self.long_prefix!r})",
        )
        require(
            len(self.assign_delim) == 1 and len(self.separator_delim) == 1,
            "delimiters must be single characters",
        )
        require(
            self.assign_delim != self.separator_delim,
            f"assignment and separator delimiters must differ "
            f"(both {self.assign_delim!r})",
        )

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Policy":
        """
        Build a policy from a mapping of field names to strings.

        Missing keys keep their defaults; unknown keys are rejected.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown policy keys: {', '.join(unknown)}")
        for key, value in data.items():
            if not isinstance(value, str):
                raise ValueError(
                    f"Policy key '{key}' expects str, got {type(value).__name__}: {value!r}"
                )
        return cls(**data)


def _read_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"policy is not valid JSON: {e}")


def _read_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"policy is not valid YAML: {e}")


_POLICY_READERS: dict[str, Callable[[str], Any]] = {
    ".json": _read_json,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
}


def load_policy(path: Union[str, os.PathLike]) -> Policy:
    """
    Read a policy from a JSON or YAML file.

    Only the four policy keys are read; the file never supplies argument
    values. An empty file yields the default policy.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the suffix is unknown, the file does not parse, or it
            does not hold a mapping of policy keys.
    """
    policy_file = Path(path)
    reader = _POLICY_READERS.get(policy_file.suffix.lower())
    if reader is None:
        known = ", ".join(sorted(_POLICY_READERS))
        raise ValueError(
            f"cannot read policy from {policy_file.name!r}: expected one of {known}"
        )

    data = reader(policy_file.read_text())
    if data is None:
        return Policy()
    if not isinstance(data, dict):
        raise ValueError(
            f"policy file must contain a mapping, got {type(data).__name__}"
        )
    return Policy.from_mapping(data)
