"""Top-level package for ``mapping_control``.

The package enforces declared key sets on loosely structured mappings such
as decoded request bodies and configuration files:

1. a :class:`~mapping_control.validation.validator.Validator` checks one
   mapping through a chain of ``require``/``permit``/``only`` rules,
2. a :class:`~mapping_control.validation.rules.RuleChain` records such a
   chain for reuse and composition,
3. :func:`~mapping_control.models.model.define_model` generates typed record
   classes that validate on construction.

Notes
-----
Validation checks key presence and integer/``None`` constraints only. Values
are never coerced.
"""

from .core import (
    ALL_KEYS,
    InsufficientAlternativesError,
    KeyMode,
    MappingValidationError,
    MissingRequiredKeysError,
    NullValueError,
    TypeMismatchError,
    UnexpectedKeysError,
    ViolationKind,
    load_config_mapping,
)
from .models import Model, ModelSchema, define_model
from .validation import (
    RecipeRegistry,
    RuleChain,
    ValidationSpec,
    Validator,
    build_default_registry,
    load_validation_spec,
    validation_spec_from_config,
)

__all__ = [
    "ALL_KEYS",
    "InsufficientAlternativesError",
    "KeyMode",
    "MappingValidationError",
    "MissingRequiredKeysError",
    "Model",
    "ModelSchema",
    "NullValueError",
    "RecipeRegistry",
    "RuleChain",
    "TypeMismatchError",
    "UnexpectedKeysError",
    "ValidationSpec",
    "Validator",
    "ViolationKind",
    "build_default_registry",
    "define_model",
    "load_config_mapping",
    "load_validation_spec",
    "validation_spec_from_config",
]
