"""Structured validation errors.

Every violation raised by a validator is a :class:`MappingValidationError`.
The formatted message keeps the human-readable contract, while ``kind``,
``keys`` and ``data`` expose the same information without message parsing.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from enum import Enum
from typing import Any


class ViolationKind(str, Enum):
    """Category of a failed rule."""

    MISSING_REQUIRED_KEYS = "missing_required_keys"
    INSUFFICIENT_ALTERNATIVES = "insufficient_alternatives"
    UNEXPECTED_KEYS = "unexpected_keys"
    TYPE_MISMATCH = "type_mismatch"
    NULL_VALUE = "null_value"


class MappingValidationError(ValueError):
    """Raised when a mapping violates a declared rule.

    Parameters
    ----------
    message : str
        Full formatted message, including the diagnostic suffix.
    kind : ViolationKind | None, optional
        Violated rule category.
    keys : Iterable[Hashable], optional
        Offending keys in the order they were reported.
    data : Mapping[Hashable, Any] | None, optional
        Key-compared view of the validated mapping.
    """

    default_kind: ViolationKind | None = None

    def __init__(
        self,
        message: str,
        *,
        kind: ViolationKind | None = None,
        keys: Iterable[Hashable] = (),
        data: Mapping[Hashable, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind if kind is not None else self.default_kind
        self.keys = tuple(keys)
        self.data = dict(data) if data is not None else {}


class MissingRequiredKeysError(MappingValidationError):
    """One or more required keys are absent."""

    default_kind = ViolationKind.MISSING_REQUIRED_KEYS


class InsufficientAlternativesError(MappingValidationError):
    """Too many keys of an alternative group are absent."""

    default_kind = ViolationKind.INSUFFICIENT_ALTERNATIVES


class UnexpectedKeysError(MappingValidationError):
    """Keys are present that were never required or permitted."""

    default_kind = ViolationKind.UNEXPECTED_KEYS


class TypeMismatchError(MappingValidationError):
    """A value failed an integer constraint."""

    default_kind = ViolationKind.TYPE_MISMATCH


class NullValueError(MappingValidationError):
    """A value is ``None`` or absent under a not-``None`` constraint."""

    default_kind = ViolationKind.NULL_VALUE


ERROR_TYPES: dict[ViolationKind, type[MappingValidationError]] = {
    ViolationKind.MISSING_REQUIRED_KEYS: MissingRequiredKeysError,
    ViolationKind.INSUFFICIENT_ALTERNATIVES: InsufficientAlternativesError,
    ViolationKind.UNEXPECTED_KEYS: UnexpectedKeysError,
    ViolationKind.TYPE_MISMATCH: TypeMismatchError,
    ViolationKind.NULL_VALUE: NullValueError,
}


def build_error(
    error_type: type[Exception] | None,
    message: str,
    *,
    kind: ViolationKind,
    keys: Iterable[Hashable],
    data: Mapping[Hashable, Any],
) -> Exception:
    """Instantiate the exception a validator raises for one violation.

    Parameters
    ----------
    error_type : type[Exception] | None
        Caller-selected exception class. ``None`` selects the kind-specific
        :class:`MappingValidationError` subclass.
    message : str
        Full formatted message.
    kind : ViolationKind
        Violated rule category.
    keys : Iterable[Hashable]
        Offending keys.
    data : Mapping[Hashable, Any]
        Key-compared view of the validated mapping.

    Returns
    -------
    Exception
        Exception instance ready to raise. Classes outside the
        :class:`MappingValidationError` hierarchy receive only the message.
    """

    if error_type is None:
        error_type = ERROR_TYPES[kind]
    if issubclass(error_type, MappingValidationError):
        return error_type(message, kind=kind, keys=keys, data=data)
    return error_type(message)


__all__ = [
    "ERROR_TYPES",
    "InsufficientAlternativesError",
    "MappingValidationError",
    "MissingRequiredKeysError",
    "NullValueError",
    "TypeMismatchError",
    "UnexpectedKeysError",
    "ViolationKind",
    "build_error",
]
