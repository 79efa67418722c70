"""
Recipe input normalization.

Input is permissive: bad numbers and unknown difficulties fall back to a
default instead of failing the request. All defaults live in
RECIPE_DEFAULTS so the policy is visible in one place.
"""

import math
from typing import Any, Optional

from .exceptions import RecipeValidationError
from .models import Difficulty, Recipe, RecipeInput

RECIPE_DEFAULTS: dict[str, Any] = {
    "category": "Uncategorised",
    "difficulty": Difficulty.MEDIUM,
    "rating": 0,
    "cooking_time": 0,
    "prep_time": 0,
    "servings": 0,
    "image_url": "",
    "notes": "",
}

NUMERIC_FIELDS = ("rating", "cooking_time", "prep_time", "servings")
TEXT_FIELDS = ("category", "image_url", "notes")
LIST_FIELDS = ("ingredients", "instructions", "dietary", "tags")
LOWERCASE_LIST_FIELDS = frozenset({"tags"})


def safe_trim(value: Any, fallback: str = "") -> str:
    """Trim a value as text; None gives the fallback."""
    if value is None:
        return fallback
    return str(value).strip()


def parse_number(value: Any, fallback: Any = 0) -> Any:
    """
    Parse a finite number. Anything else gives the fallback.

    Integral values come back as int.
    """
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return int(number) if number.is_integer() else number


def parse_difficulty(value: Any, fallback: Difficulty = Difficulty.MEDIUM) -> Difficulty:
    try:
        return Difficulty(value)
    except (TypeError, ValueError):
        return fallback


def clean_list(value: Any, lowercase: bool = False) -> list[str]:
    """Trim entries, drop null/empty ones. Non-lists become []."""
    if not isinstance(value, (list, tuple)):
        return []
    cleaned = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if lowercase:
            text = text.lower()
        if text:
            cleaned.append(text)
    return cleaned


def normalize_title(title: str) -> str:
    """Comparison key for duplicate detection."""
    return title.strip().lower()


def normalize_new_recipe(fields: RecipeInput) -> dict[str, Any]:
    """
    Turn create input into stored field values.

    Raises:
        RecipeValidationError: If title or description is blank
    """
    title = safe_trim(fields.title)
    description = safe_trim(fields.description)
    if not title or not description:
        raise RecipeValidationError("Title and description are required.")

    values: dict[str, Any] = {"title": title, "description": description}
    for name in TEXT_FIELDS:
        raw = getattr(fields, name)
        values[name] = safe_trim(raw) if raw is not None else RECIPE_DEFAULTS[name]
    if not values["category"]:
        values["category"] = RECIPE_DEFAULTS["category"]
    for name in NUMERIC_FIELDS:
        values[name] = parse_number(getattr(fields, name), RECIPE_DEFAULTS[name])
    values["difficulty"] = parse_difficulty(fields.difficulty, RECIPE_DEFAULTS["difficulty"])
    for name in LIST_FIELDS:
        values[name] = clean_list(getattr(fields, name), lowercase=name in LOWERCASE_LIST_FIELDS)
    return values


def merge_recipe_update(recipe: Recipe, fields: RecipeInput) -> dict[str, Any]:
    """
    Compute the changed values for an update.

    Omitted fields keep their stored value; stored values are also the
    fallback for unparseable numbers and unknown difficulties.

    Raises:
        RecipeValidationError: If title or description is supplied blank
    """
    supplied = fields.model_dump(exclude_none=True)
    changes: dict[str, Any] = {}

    for name in ("title", "description"):
        if name in supplied:
            text = safe_trim(supplied[name])
            if not text:
                raise RecipeValidationError("Title and description are required.")
            changes[name] = text

    for name in TEXT_FIELDS:
        if name in supplied:
            changes[name] = safe_trim(supplied[name])
    if changes.get("category") == "":
        changes["category"] = recipe.category or RECIPE_DEFAULTS["category"]

    for name in NUMERIC_FIELDS:
        if name in supplied:
            changes[name] = parse_number(supplied[name], getattr(recipe, name))

    if "difficulty" in supplied:
        changes["difficulty"] = parse_difficulty(supplied["difficulty"], recipe.difficulty)

    for name in LIST_FIELDS:
        if name in supplied:
            changes[name] = clean_list(supplied[name], lowercase=name in LOWERCASE_LIST_FIELDS)

    return changes
