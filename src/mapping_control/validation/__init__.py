"""Validator, composable rule chains, recipes, and config-driven specs."""

from .cli import run_check_cli
from .config import ValidationSpec, load_validation_spec, validation_spec_from_config
from .registry import RecipeManifest, RecipeRegistry, build_default_registry
from .rules import (
    RuleChain,
    RuleStep,
    integer,
    integer_or_none,
    not_none,
    only,
    permit,
    permit_all,
    permit_only,
    require,
    require_n_of,
    require_one_of,
)
from .validator import Validator

__all__ = [
    "RecipeManifest",
    "RecipeRegistry",
    "RuleChain",
    "RuleStep",
    "ValidationSpec",
    "Validator",
    "build_default_registry",
    "integer",
    "integer_or_none",
    "load_validation_spec",
    "not_none",
    "only",
    "permit",
    "permit_all",
    "permit_only",
    "require",
    "require_n_of",
    "require_one_of",
    "run_check_cli",
    "validation_spec_from_config",
]
