"""Free-text filtering of the in-memory recipe list."""

from typing import List, Sequence

from .models import Recipe


def build_haystack(recipe: Recipe) -> str:
    """Return the lowercased searchable text of ``recipe``.

    Title, cuisine, tags and ingredients are joined with single spaces; absent
    or empty parts are skipped.
    """

    parts = [
        recipe.title,
        recipe.cuisine,
        " ".join(recipe.tags) if recipe.tags else None,
        " ".join(recipe.ingredients) if recipe.ingredients else None,
    ]
    return " ".join(part for part in parts if part).lower()


def filter_recipes(recipes: Sequence[Recipe], query: str) -> List[Recipe]:
    """Return the recipes matching ``query``, keeping their original order.

    A blank query matches everything.
    """

    term = (query or "").strip().lower()
    if not term:
        return list(recipes)
    return [recipe for recipe in recipes if term in build_haystack(recipe)]


__all__ = ["build_haystack", "filter_recipes"]
