"""Chainable key-presence and value-type validation for flat mappings.

A :class:`Validator` accumulates permitted keys as rules are declared and
raises on the first violated rule. Every rule returns the validator itself,
so rules read as one chain::

    Validator(body).require("author", "body").permit("image").only()

Subclasses express reusable validation recipes as methods composed from the
base rules::

    class RequestValidator(Validator):
        def validate_post_request(self):
            return self.require_one_of("get", "post").permit("body").only()
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from functools import lru_cache
import logging
from typing import Any

import inflect
import numpy as np

from mapping_control.core.errors import ViolationKind, build_error
from mapping_control.core.keys import ALL_KEYS, KeyMode, PermittedKeys, key_normalizer, ordered_unique

logger = logging.getLogger(__name__)

_INFLECT = inflect.engine()


class Validator:
    """Rule accumulator over one mapping.

    Parameters
    ----------
    data : Mapping[Hashable, Any]
        Mapping under validation. It is read, never modified.
    error_type : type[Exception] | None, optional
        Exception class raised on violations. ``None`` raises the
        kind-specific :class:`~mapping_control.core.errors.MappingValidationError`
        subclass.
    term : str, optional
        Singular noun used in messages; pluralized for multi-key messages.
    key_mode : KeyMode | str, optional
        Key comparison mode fixed for the lifetime of the validator.

    Raises
    ------
    TypeError
        If ``data`` is not a mapping.
    ValueError
        If ``term`` is empty or ``key_mode`` is unknown.

    Notes
    -----
    A validator is built for one validation attempt and is not safe to share
    between threads: rule calls update its permitted-key set in place.
    """

    def __init__(
        self,
        data: Mapping[Hashable, Any],
        *,
        error_type: type[Exception] | None = None,
        term: str = "param",
        key_mode: KeyMode | str = KeyMode.NORMALIZED,
    ) -> None:
        if not isinstance(data, Mapping):
            raise TypeError(f"data must be a mapping, got {type(data).__name__}")
        if not isinstance(term, str) or not term:
            raise ValueError("term must be a non-empty string")

        self._key_mode = KeyMode(key_mode)
        self._normalize = key_normalizer(self._key_mode)
        self._view: dict[Hashable, Any] = {self._normalize(key): value for key, value in data.items()}
        self._error_type = error_type
        self._term = term
        self._permitted: set[Hashable] | PermittedKeys = set()

    @property
    def key_mode(self) -> KeyMode:
        """Key comparison mode."""

        return self._key_mode

    @property
    def term(self) -> str:
        """Singular noun used in messages."""

        return self._term

    @property
    def terms(self) -> str:
        """Plural form of :attr:`term`."""

        return _pluralize(self._term)

    @property
    def data(self) -> dict[Hashable, Any]:
        """Copy of the mapping with keys in comparison form."""

        return dict(self._view)

    @property
    def permitted_keys(self) -> frozenset[Hashable] | PermittedKeys:
        """Keys permitted so far, or ``ALL_KEYS``."""

        if self._permitted is ALL_KEYS:
            return ALL_KEYS
        return frozenset(self._permitted)

    def require(self, *keys: Hashable) -> Validator:
        """Require every key in ``keys`` to be present."""

        required = self._permit_keys(keys)
        missing = [key for key in required if key not in self._view]
        if missing:
            self._fail(
                ViolationKind.MISSING_REQUIRED_KEYS,
                f"required {self.terms} {missing!r} missing",
                missing,
            )
        return self

    def require_n_of(self, n: int, *keys: Hashable) -> Validator:
        """Fail when more than ``n`` of ``keys`` are absent.

        Parameters
        ----------
        n : int
            Largest tolerated number of absent keys.
        *keys : Hashable
            Alternative key group.

        Returns
        -------
        Validator
            This validator.

        Raises
        ------
        ValueError
            If ``n`` is not a non-negative integer.
        """

        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValueError(f"n must be a non-negative integer, got {n!r}")

        group = self._permit_keys(keys)
        missing = [key for key in group if key not in self._view]
        if len(missing) > n:
            self._fail(
                ViolationKind.INSUFFICIENT_ALTERNATIVES,
                f"{n} or more {self.terms} in {missing!r} must be given",
                missing,
            )
        return self

    def require_one_of(self, *keys: Hashable) -> Validator:
        """Shorthand for ``require_n_of(1, *keys)``."""

        return self.require_n_of(1, *keys)

    def permit(self, *keys: Hashable) -> Validator:
        """Mark keys as allowed without checking anything."""

        self._permit_keys(keys)
        return self

    def permit_all(self) -> Validator:
        """Allow every key; later :meth:`only` checks pass."""

        self._permitted = ALL_KEYS
        return self

    def only(self) -> Validator:
        """Fail when a present key was not required or permitted earlier.

        Only keys named by rules called before this one count as permitted,
        so calling ``only()`` first reports every present key.
        """

        if self._permitted is ALL_KEYS:
            return self

        extra = [key for key in self._view if key not in self._permitted]
        if extra:
            self._fail(
                ViolationKind.UNEXPECTED_KEYS,
                f"extra {self.terms} {extra!r}",
                extra,
            )
        return self

    def permit_only(self, *keys: Hashable) -> Validator:
        """Shorthand for ``permit(*keys).only()``."""

        return self.permit(*keys).only()

    def integer(self, *keys: Hashable) -> Validator:
        """Fail when a present value is not an integer.

        Absent keys pass; an explicit ``None`` does not. Combine with
        :meth:`require` to also demand presence.
        """

        for key in self._permit_keys(keys):
            if key in self._view and not _is_integer(self._view[key]):
                self._type_mismatch(key)
        return self

    def integer_or_none(self, *keys: Hashable) -> Validator:
        """Like :meth:`integer`, but an explicit ``None`` passes."""

        for key in self._permit_keys(keys):
            value = self._view.get(key)
            if value is not None and not _is_integer(value):
                self._type_mismatch(key)
        return self

    def not_none(self, *keys: Hashable) -> Validator:
        """Fail when a value is ``None`` or the key is absent."""

        for key in self._permit_keys(keys):
            if self._view.get(key) is None:
                self._fail(ViolationKind.NULL_VALUE, f"{self.term} {key!r} is None", [key])
        return self

    def _permit_keys(self, keys: tuple[Hashable, ...]) -> list[Hashable]:
        normalized = ordered_unique(self._normalize(key) for key in keys)
        if self._permitted is not ALL_KEYS:
            self._permitted.update(normalized)
        return normalized

    def _type_mismatch(self, key: Hashable) -> None:
        self._fail(
            ViolationKind.TYPE_MISMATCH,
            f"{self.term} {key!r} must be integer but was {self._view.get(key)!r}",
            [key],
        )

    def _fail(self, kind: ViolationKind, message: str, keys: list[Hashable]) -> None:
        logger.debug("validation failed (%s): %s", kind.value, message)
        raise build_error(
            self._error_type,
            message + self._postscript(),
            kind=kind,
            keys=keys,
            data=self._view,
        )

    def _postscript(self) -> str:
        return f"\n\tin {self._view!r}"


def _is_integer(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, np.integer))


@lru_cache(maxsize=32)
def _pluralize(term: str) -> str:
    return _INFLECT.plural_noun(term)


__all__ = ["Validator"]
