"""Config-driven validation specs.

A validation config declares a rule list plus optional message term and key
mode. Configs are themselves validated with :class:`Validator` before they
are turned into a :class:`ValidationSpec`.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mapping_control.core import load_config_mapping
from mapping_control.core.keys import KeyMode, coerce_key_mode

from .registry import RecipeRegistry, build_default_registry
from .rules import RULE_METHODS, RuleChain
from .validator import Validator

RULE_CONFIG_KEYS: tuple[str, ...] = (*RULE_METHODS, "recipe")
_FLAG_RULES: frozenset[str] = frozenset({"only", "permit_all"})


@dataclass(frozen=True, slots=True)
class ValidationSpec:
    """Rule chain plus the validator options it runs with.

    Parameters
    ----------
    chain : RuleChain
        Parsed rule chain.
    term : str
        Singular noun used in messages.
    key_mode : KeyMode
        Key comparison mode.
    """

    chain: RuleChain
    term: str = "param"
    key_mode: KeyMode = KeyMode.NORMALIZED

    def validate(self, data: Mapping[Hashable, Any], **options: Any) -> Validator:
        """Validate ``data`` with a fresh validator."""

        options.setdefault("term", self.term)
        options.setdefault("key_mode", self.key_mode)
        return self.chain.validate(data, **options)


def validation_spec_from_config(
    cfg: Mapping[str, Any],
    *,
    registry: RecipeRegistry | None = None,
) -> ValidationSpec:
    """Parse a validation config mapping into :class:`ValidationSpec`.

    Parameters
    ----------
    cfg : Mapping[str, Any]
        Config with a required ``rules`` list and optional ``term`` and
        ``key_mode``.
    registry : RecipeRegistry | None, optional
        Registry resolving ``recipe`` rules. Defaults to
        :func:`~mapping_control.validation.registry.build_default_registry`.

    Returns
    -------
    ValidationSpec
        Parsed spec.

    Raises
    ------
    ValueError
        If the config is malformed. Key-level problems surface as
        :class:`~mapping_control.core.errors.MappingValidationError`.
    """

    Validator(cfg, term="key").require("rules").permit("term", "key_mode").only()

    term = cfg.get("term", "param")
    if not isinstance(term, str) or not term:
        raise ValueError("term must be a non-empty string")
    key_mode = coerce_key_mode(cfg.get("key_mode", KeyMode.NORMALIZED))

    rules = cfg["rules"]
    if isinstance(rules, (str, bytes)) or not isinstance(rules, list):
        raise ValueError("rules must be a list")

    recipes = registry if registry is not None else build_default_registry()
    chain = RuleChain()
    for index, entry in enumerate(rules):
        chain = chain.then(_parse_rule(entry, field_name=f"rules[{index}]", registry=recipes))

    return ValidationSpec(chain=chain, term=term, key_mode=key_mode)


def load_validation_spec(
    path: str | Path,
    *,
    registry: RecipeRegistry | None = None,
) -> ValidationSpec:
    """Load a JSON/YAML validation config and parse it."""

    return validation_spec_from_config(load_config_mapping(path), registry=registry)


def _parse_rule(entry: Any, *, field_name: str, registry: RecipeRegistry) -> RuleChain:
    """Parse one single-key rule entry."""

    if not isinstance(entry, Mapping) or len(entry) != 1:
        raise ValueError(f"{field_name} must be a mapping with exactly one rule key")
    Validator(entry, term="rule").permit_only(*RULE_CONFIG_KEYS)

    ((name, value),) = entry.items()
    if name == "recipe":
        if not isinstance(value, str):
            raise ValueError(f"{field_name}.recipe must be a recipe ID string")
        try:
            return registry.chain(value)
        except KeyError:
            raise ValueError(f"{field_name}.recipe {value!r} is not registered") from None

    if name in _FLAG_RULES:
        if value is not True:
            raise ValueError(f"{field_name}.{name} must be true")
        return RuleChain().step(name)

    if name == "require_n_of":
        if not isinstance(value, Mapping):
            raise ValueError(f"{field_name}.require_n_of must be a mapping with `n` and `keys`")
        Validator(value, term="key").require("n", "keys").integer("n").only()
        if value["n"] < 0:
            raise ValueError(f"{field_name}.require_n_of.n must be non-negative")
        return RuleChain().require_n_of(value["n"], *_coerce_keys(value["keys"], field_name=field_name))

    return RuleChain().step(name, *_coerce_keys(value, field_name=field_name))


def _coerce_keys(raw: Any, *, field_name: str) -> tuple[str, ...]:
    """Coerce a key name or list of key names."""

    if isinstance(raw, str):
        return (raw,)
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ValueError(f"{field_name} keys must be a string or a list of strings")
    return tuple(raw)


__all__ = [
    "RULE_CONFIG_KEYS",
    "ValidationSpec",
    "load_validation_spec",
    "validation_spec_from_config",
]
