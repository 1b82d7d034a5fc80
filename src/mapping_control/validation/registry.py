"""Named validation recipes.

This module provides a lightweight registry mapping stable recipe IDs to
:class:`~mapping_control.validation.rules.RuleChain` objects, used by the
declarative config parser and the command line.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Any

from .rules import RuleChain, require_one_of
from .validator import Validator


@dataclass(frozen=True, slots=True)
class RecipeManifest:
    """Manifest for one named recipe.

    Parameters
    ----------
    recipe_id : str
        Stable identifier unique within a registry.
    chain : RuleChain
        Rule chain applied by the recipe.
    description : str, optional
        Human-readable recipe summary.
    """

    recipe_id: str
    chain: RuleChain
    description: str = ""


class RecipeRegistry:
    """Registry of named recipe manifests."""

    def __init__(self) -> None:
        self._manifests: dict[str, RecipeManifest] = {}

    def register(self, manifest: RecipeManifest) -> None:
        """Register one recipe manifest.

        Parameters
        ----------
        manifest : RecipeManifest
            Manifest to register.

        Raises
        ------
        ValueError
            If a different manifest already exists for the same ID.
        """

        existing = self._manifests.get(manifest.recipe_id)
        if existing is None:
            self._manifests[manifest.recipe_id] = manifest
            return

        if existing != manifest:
            raise ValueError(f"recipe conflict for {manifest.recipe_id!r}; already registered")

    def get(self, recipe_id: str) -> RecipeManifest:
        """Return a manifest by ID.

        Raises
        ------
        KeyError
            If the recipe is not registered.
        """

        return self._manifests[recipe_id]

    def list(self) -> tuple[RecipeManifest, ...]:
        """List registered manifests sorted by ID."""

        return tuple(sorted(self._manifests.values(), key=lambda item: item.recipe_id))

    def chain(self, recipe_id: str) -> RuleChain:
        """Return the rule chain of one recipe."""

        return self.get(recipe_id).chain

    def validate(self, recipe_id: str, data: Mapping[Hashable, Any], **options: Any) -> Validator:
        """Validate ``data`` with one registered recipe.

        Parameters
        ----------
        recipe_id : str
            Registered recipe ID.
        data : Mapping[Hashable, Any]
            Mapping under validation.
        **options : Any
            Validator keyword options.

        Returns
        -------
        Validator
            Validator after the recipe ran.
        """

        return self.chain(recipe_id).validate(data, **options)


def build_default_registry() -> RecipeRegistry:
    """Create a registry holding the built-in request recipes.

    Returns
    -------
    RecipeRegistry
        Registry with ``request``, ``get_request`` and ``post_request``.
    """

    request = require_one_of("get", "post")
    registry = RecipeRegistry()
    registry.register(
        RecipeManifest(
            recipe_id="request",
            chain=request,
            description="At least one of `get` or `post` is present.",
        )
    )
    registry.register(
        RecipeManifest(
            recipe_id="get_request",
            chain=request.only(),
            description="A request with no keys besides `get`/`post`.",
        )
    )
    registry.register(
        RecipeManifest(
            recipe_id="post_request",
            chain=request.permit("body").only(),
            description="A request that may also carry a `body`.",
        )
    )
    return registry


__all__ = ["RecipeManifest", "RecipeRegistry", "build_default_registry"]
