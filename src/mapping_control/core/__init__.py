"""Core key modes, structured errors, and mapping file loading."""

from .config_loading import SUPPORTED_CONFIG_SUFFIXES, load_config_mapping, parse_json_mapping
from .errors import (
    InsufficientAlternativesError,
    MappingValidationError,
    MissingRequiredKeysError,
    NullValueError,
    TypeMismatchError,
    UnexpectedKeysError,
    ViolationKind,
)
from .keys import ALL_KEYS, KeyMode, PermittedKeys, normalize_key

__all__ = [
    "ALL_KEYS",
    "InsufficientAlternativesError",
    "KeyMode",
    "MappingValidationError",
    "MissingRequiredKeysError",
    "NullValueError",
    "PermittedKeys",
    "SUPPORTED_CONFIG_SUFFIXES",
    "TypeMismatchError",
    "UnexpectedKeysError",
    "ViolationKind",
    "load_config_mapping",
    "normalize_key",
    "parse_json_mapping",
]
