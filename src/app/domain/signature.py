# src/app/domain/signature.py
"""
Deterministic content signature of a recipe.

The signature is the recipe's identity in the cookbook: two recipes with the
same canonical preferences, title, cooks amount and ingredient multiset get the
same key, whatever the ingredient order or the casing/whitespace of the text.
"""
from __future__ import annotations

from src.app.domain.models import Recipe, RecipeIngredient
from src.app.domain.preferences import PreferenceCanonicalizer

FIELD_SEPARATOR = "||"
INGREDIENT_SEPARATOR = ";"
INGREDIENT_PART_SEPARATOR = "|"


def format_number(value: float | int | None) -> str:
    """Locale-independent rendering; integral values drop the fractional part."""
    if not value:
        return "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def ingredient_fragment(item: RecipeIngredient) -> str:
    name = (item.ingredient or "").strip().lower()
    unit = item.unit.abbreviation or item.unit.name or ""
    return INGREDIENT_PART_SEPARATOR.join([name, format_number(item.serving_size), unit])


def ingredient_key(recipe: Recipe) -> str:
    fragments = sorted(ingredient_fragment(item) for item in recipe.ingredients.combined())
    return INGREDIENT_SEPARATOR.join(fragments)


def compute_signature(recipe: Recipe, canonicalizer: PreferenceCanonicalizer) -> str:
    preferences = canonicalizer.canonicalize(recipe.preferences)
    parts = [
        (recipe.title or "").strip().lower(),
        preferences.cuisine,
        preferences.cooking_time,
        preferences.diet_preferences,
        str(recipe.cooks_amount),
        ingredient_key(recipe),
    ]
    return FIELD_SEPARATOR.join(parts)


def get_or_create_signature(recipe: Recipe, canonicalizer: PreferenceCanonicalizer) -> str:
    """Return the cached signature, computing and caching it on first use."""
    if not recipe.recipe_signature:
        recipe.recipe_signature = compute_signature(recipe, canonicalizer)
    return recipe.recipe_signature
