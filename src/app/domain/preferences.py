# src/app/domain/preferences.py
"""
Canonicalization of recipe preferences.

The generator returns free text for cuisine, cooking time and diet. Before a
recipe is keyed or displayed, every axis is mapped onto a fixed vocabulary.
The vocabulary is a `PreferenceOptions` value handed to the canonicalizer at
construction time; signature computation and display must share the same
instance or duplicates stop collapsing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from src.app.domain.models import RecipePreferences

NO_PREFERENCE_VALUES = ("no preferences", "no preference", "none")


def normalize_value(value: Any) -> str:
    """Lower-case and trim a raw axis value; lists contribute their first item."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return ""
    return str(value).strip().lower()


def _resolve_default(allowed: tuple[str, ...], preferred: Optional[str]) -> str:
    if not allowed:
        return ""
    if preferred is not None and normalize_value(preferred) in allowed:
        return normalize_value(preferred)
    for candidate in NO_PREFERENCE_VALUES:
        if candidate in allowed:
            return candidate
    return allowed[0]


@dataclass(frozen=True)
class PreferenceAxis:
    allowed: tuple[str, ...]
    default: str

    @classmethod
    def build(cls, allowed: Sequence[str], default: Optional[str] = None) -> PreferenceAxis:
        normalized: list[str] = []
        for value in allowed:
            item = normalize_value(value)
            if item and item not in normalized:
                normalized.append(item)
        values = tuple(normalized)
        return cls(allowed=values, default=_resolve_default(values, default))

    def canonicalize(self, value: Any) -> str:
        normalized = normalize_value(value)
        return normalized if normalized in self.allowed else self.default


@dataclass(frozen=True)
class PreferenceOptions:
    """Allowed vocabulary and default for each preference axis."""
    cooking_time: PreferenceAxis
    cuisine: PreferenceAxis
    diet_preferences: PreferenceAxis

    @classmethod
    def build(
        cls,
        *,
        cooking_times: Sequence[str],
        cuisines: Sequence[str],
        diet_preferences: Sequence[str],
        default_cooking_time: Optional[str] = None,
        default_cuisine: Optional[str] = None,
        default_diet_preference: Optional[str] = None,
    ) -> PreferenceOptions:
        return cls(
            cooking_time=PreferenceAxis.build(cooking_times, default_cooking_time),
            cuisine=PreferenceAxis.build(cuisines, default_cuisine),
            diet_preferences=PreferenceAxis.build(diet_preferences, default_diet_preference),
        )


DEFAULT_PREFERENCE_OPTIONS = PreferenceOptions.build(
    cooking_times=["quick", "medium", "complex"],
    cuisines=["german", "italian", "indian", "japanese", "gourmet", "fusion"],
    diet_preferences=["vegetarian", "vegan", "keto", "no preferences"],
    default_cooking_time="quick",
    default_cuisine="fusion",
    default_diet_preference="no preferences",
)


RawPreferences = Union[RecipePreferences, Mapping[str, Any], None]


class PreferenceCanonicalizer:
    def __init__(self, options: PreferenceOptions = DEFAULT_PREFERENCE_OPTIONS):
        self.options = options

    def canonicalize(self, raw: RawPreferences) -> RecipePreferences:
        if isinstance(raw, RecipePreferences):
            cooking_time: Any = raw.cooking_time
            cuisine: Any = raw.cuisine
            diet: Any = raw.diet_preferences
        elif isinstance(raw, Mapping):
            cooking_time = raw.get("cookingTime")
            cuisine = raw.get("cuisine")
            diet = raw.get("dietPreferences")
        else:
            cooking_time = cuisine = diet = None

        return RecipePreferences(
            cooking_time=self.options.cooking_time.canonicalize(cooking_time),
            cuisine=self.options.cuisine.canonicalize(cuisine),
            diet_preferences=self.options.diet_preferences.canonicalize(diet),
        )

    def is_known_cuisine(self, value: Any) -> bool:
        return normalize_value(value) in self.options.cuisine.allowed
