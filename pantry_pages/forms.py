"""Draft handling for the "Add a recipe" form.

The draft keeps every field as the raw string the user typed. Tags and
ingredients stay comma separated until :func:`build_payload` turns them into
lists right before the create request.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

LIST_FIELDS = ("tags", "ingredients")


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    placeholder: str
    widget: str = "input"
    required: bool = False
    input_mode: Optional[str] = None


FORM_FIELDS = (
    FormField("title", "Title", "Smoky tofu tacos", required=True),
    FormField("cuisine", "Cuisine", "Fusion"),
    FormField("time", "Time", "25 min"),
    FormField("difficulty", "Difficulty", "Easy"),
    FormField("servings", "Servings", "4", input_mode="numeric"),
    FormField("tags", "Tags (comma separated)", "vegan, weeknight"),
    FormField(
        "ingredients",
        "Ingredients (comma separated)",
        "corn tortillas, chipotle, tofu, lime",
        widget="textarea",
        required=True,
    ),
    FormField(
        "instructions",
        "Instructions",
        "Marinate tofu, sear, warm tortillas, assemble.",
        widget="textarea",
        required=True,
    ),
)

DRAFT_FIELDS = tuple(form_field.name for form_field in FORM_FIELDS)
REQUIRED_FIELDS = tuple(form_field.name for form_field in FORM_FIELDS if form_field.required)


def empty_draft() -> Dict[str, str]:
    return {name: "" for name in DRAFT_FIELDS}


def split_list(text: str) -> List[str]:
    """Split a comma separated string into trimmed, non-empty pieces."""

    return [piece.strip() for piece in text.split(",") if piece.strip()]


def build_payload(draft: Mapping[str, str]) -> Dict[str, Any]:
    """Turn a draft into the JSON body of a create request."""

    payload: Dict[str, Any] = dict(draft)
    for name in LIST_FIELDS:
        payload[name] = split_list(draft.get(name, ""))
    return payload


def missing_required_fields(draft: Mapping[str, str]) -> List[str]:
    return [name for name in REQUIRED_FIELDS if not draft.get(name, "").strip()]


__all__ = [
    "DRAFT_FIELDS",
    "FORM_FIELDS",
    "FormField",
    "LIST_FIELDS",
    "REQUIRED_FIELDS",
    "build_payload",
    "empty_draft",
    "missing_required_fields",
    "split_list",
]
