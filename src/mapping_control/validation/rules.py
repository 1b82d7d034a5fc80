"""Composable rule chains.

A :class:`RuleChain` records validator method calls without running them, so
a validation recipe can be declared once, composed with other recipes, and
applied to many mappings::

    request = require_one_of("get", "post")
    post_request = request.then(permit("body").only())
    post_request.validate({"post": "/a", "body": {}})
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Any

from .validator import Validator

RULE_METHODS: tuple[str, ...] = (
    "require",
    "require_n_of",
    "require_one_of",
    "permit",
    "permit_all",
    "only",
    "permit_only",
    "integer",
    "integer_or_none",
    "not_none",
)


@dataclass(frozen=True, slots=True)
class RuleStep:
    """One recorded validator method call.

    Parameters
    ----------
    method : str
        Validator method name. Subclass recipe methods are allowed.
    args : tuple[Any, ...]
        Positional arguments passed to the method.
    """

    method: str
    args: tuple[Any, ...] = ()

    def __call__(self, validator: Validator) -> Validator:
        bound = getattr(validator, self.method, None)
        if bound is None:
            raise AttributeError(
                f"{type(validator).__name__} has no rule method {self.method!r}"
            )
        return bound(*self.args)

    def describe(self) -> str:
        """Return call-like text for the step."""

        rendered = ", ".join(repr(arg) for arg in self.args)
        return f"{self.method}({rendered})"


@dataclass(frozen=True, slots=True)
class RuleChain:
    """Immutable sequence of rule steps.

    Builder methods return a new chain with one more step; the receiving
    chain is never modified.

    Parameters
    ----------
    steps : tuple[RuleStep, ...]
        Steps applied in order.
    """

    steps: tuple[RuleStep, ...] = ()

    def step(self, method: str, *args: Any) -> RuleChain:
        """Append a call to any validator method, including recipe methods."""

        return RuleChain(steps=(*self.steps, RuleStep(method=method, args=args)))

    def then(self, other: RuleChain) -> RuleChain:
        """Return a chain running this chain's steps followed by ``other``'s."""

        return RuleChain(steps=(*self.steps, *other.steps))

    def require(self, *keys: Hashable) -> RuleChain:
        return self.step("require", *keys)

    def require_n_of(self, n: int, *keys: Hashable) -> RuleChain:
        return self.step("require_n_of", n, *keys)

    def require_one_of(self, *keys: Hashable) -> RuleChain:
        return self.step("require_one_of", *keys)

    def permit(self, *keys: Hashable) -> RuleChain:
        return self.step("permit", *keys)

    def permit_all(self) -> RuleChain:
        return self.step("permit_all")

    def only(self) -> RuleChain:
        return self.step("only")

    def permit_only(self, *keys: Hashable) -> RuleChain:
        return self.step("permit_only", *keys)

    def integer(self, *keys: Hashable) -> RuleChain:
        return self.step("integer", *keys)

    def integer_or_none(self, *keys: Hashable) -> RuleChain:
        return self.step("integer_or_none", *keys)

    def not_none(self, *keys: Hashable) -> RuleChain:
        return self.step("not_none", *keys)

    def __call__(self, validator: Validator) -> Validator:
        """Apply every step to ``validator``; the first violation propagates."""

        for rule_step in self.steps:
            validator = rule_step(validator)
        return validator

    def validate(
        self,
        data: Mapping[Hashable, Any],
        *,
        validator_cls: type[Validator] = Validator,
        **options: Any,
    ) -> Validator:
        """Build a fresh validator for ``data`` and apply the chain.

        Parameters
        ----------
        data : Mapping[Hashable, Any]
            Mapping under validation.
        validator_cls : type[Validator], optional
            Validator class, for chains that call subclass recipe methods.
        **options : Any
            Validator keyword options (``error_type``, ``term``, ``key_mode``).

        Returns
        -------
        Validator
            Validator after the last step.
        """

        return self(validator_cls(data, **options))

    def describe(self) -> str:
        """Return the chain as dotted call text."""

        return ".".join(rule_step.describe() for rule_step in self.steps)


def require(*keys: Hashable) -> RuleChain:
    return RuleChain().require(*keys)


def require_n_of(n: int, *keys: Hashable) -> RuleChain:
    return RuleChain().require_n_of(n, *keys)


def require_one_of(*keys: Hashable) -> RuleChain:
    return RuleChain().require_one_of(*keys)


def permit(*keys: Hashable) -> RuleChain:
    return RuleChain().permit(*keys)


def permit_all() -> RuleChain:
    return RuleChain().permit_all()


def only() -> RuleChain:
    return RuleChain().only()


def permit_only(*keys: Hashable) -> RuleChain:
    return RuleChain().permit_only(*keys)


def integer(*keys: Hashable) -> RuleChain:
    return RuleChain().integer(*keys)


def integer_or_none(*keys: Hashable) -> RuleChain:
    return RuleChain().integer_or_none(*keys)


def not_none(*keys: Hashable) -> RuleChain:
    return RuleChain().not_none(*keys)


__all__ = [
    "RULE_METHODS",
    "RuleChain",
    "RuleStep",
    "integer",
    "integer_or_none",
    "not_none",
    "only",
    "permit",
    "permit_all",
    "permit_only",
    "require",
    "require_n_of",
    "require_one_of",
]
