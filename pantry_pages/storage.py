from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol

from .models import Recipe


class RecipeStoreError(Exception):
    """Base class for failures talking to the recipe collection."""


class FetchFailure(RecipeStoreError):
    """Listing the recipe collection failed."""


class CreateFailure(RecipeStoreError):
    """Creating a recipe failed."""


class RecipeRepository(Protocol):
    """Protocol describing the behaviour required by the web layer."""

    def list_recipes(self) -> Iterable[Recipe]:
        """Return every stored recipe or raise :class:`FetchFailure`."""

    def add_recipe(self, payload: Mapping[str, Any]) -> Recipe:
        """Persist a new recipe and return it with its assigned ``id``.

        ``payload`` already carries ``tags`` and ``ingredients`` as lists.
        Raises :class:`CreateFailure` when the recipe could not be stored.
        """


__all__ = ["CreateFailure", "FetchFailure", "RecipeRepository", "RecipeStoreError"]
