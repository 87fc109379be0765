from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass
class Recipe:
    """Domain object representing a recipe served by the recipe API."""

    id: Any
    title: str
    cuisine: Optional[str] = None
    time: Optional[str] = None
    difficulty: Optional[str] = None
    servings: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    ingredients: List[str] = field(default_factory=list)
    instructions: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Recipe":
        """Build a recipe from one JSON object returned by the API.

        Raises :class:`KeyError` when the object carries no ``id``.
        """

        servings = data.get("servings")

        return cls(
            id=data["id"],
            title=data.get("title") or "",
            cuisine=data.get("cuisine"),
            time=data.get("time"),
            difficulty=data.get("difficulty"),
            servings=str(servings) if servings is not None else None,
            tags=_as_list(data.get("tags")),
            ingredients=_as_list(data.get("ingredients")),
            instructions=data.get("instructions") or "",
        )


__all__ = ["Recipe"]
