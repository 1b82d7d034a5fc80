"""Key comparison modes and the permitted-keys variant.

Validators compare mapping keys under exactly one :class:`KeyMode`, chosen
when the validator is constructed and applied to both the mapping's keys and
every key passed to a rule.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from enum import Enum
from typing import Final, Literal, Union


class KeyMode(str, Enum):
    """How mapping keys are compared.

    Attributes
    ----------
    RAW
        Keys are compared as the literal objects found in the mapping.
    NORMALIZED
        Keys are reduced to one canonical string before comparison.
    """

    RAW = "raw"
    NORMALIZED = "normalized"


class _AllKeys(Enum):
    ALL = "all"

    def __repr__(self) -> str:
        return "ALL_KEYS"


ALL_KEYS: Final = _AllKeys.ALL
"""Permitted-keys variant that accepts every key."""

PermittedKeys = Union[frozenset[Hashable], Literal[_AllKeys.ALL]]


def normalize_key(key: Hashable) -> str:
    """Return the canonical string form of one key.

    Parameters
    ----------
    key : Hashable
        Raw mapping or rule key.

    Returns
    -------
    str
        ``str`` keys unchanged, ``bytes`` decoded as UTF-8, enum members as
        their string value (or their name for non-string values), and any
        other key as ``str(key)``.
    """

    if isinstance(key, Enum):
        return key.value if isinstance(key.value, str) else key.name
    if isinstance(key, str):
        return key
    if isinstance(key, bytes):
        return key.decode("utf-8")
    return str(key)


def coerce_key_mode(raw: KeyMode | str, *, field_name: str = "key_mode") -> KeyMode:
    """Coerce a string or enum value to :class:`KeyMode`."""

    try:
        return KeyMode(raw)
    except ValueError:
        raise ValueError(f"{field_name} must be one of {{'raw', 'normalized'}}") from None


def key_normalizer(mode: KeyMode):
    """Return the key transform used under ``mode``."""

    if mode is KeyMode.NORMALIZED:
        return normalize_key
    return _identity


def ordered_unique(keys: Iterable[Hashable]) -> list[Hashable]:
    """Drop repeated keys while keeping first-seen order."""

    return list(dict.fromkeys(keys))


def _identity(key: Hashable) -> Hashable:
    return key


__all__ = [
    "ALL_KEYS",
    "KeyMode",
    "PermittedKeys",
    "coerce_key_mode",
    "key_normalizer",
    "normalize_key",
    "ordered_unique",
]
