# src/app/domain/models.py
"""
Domain models for the recipe cookbook.
These are pure data structures with no infrastructure dependencies.

Wire and store documents use the camelCase shape produced by the recipe
generator; the dataclasses use snake_case attributes.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional


def _to_number(value: Any, default: float = 0) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        parsed = float(str(value).strip())
    except ValueError:
        return default
    return int(parsed) if parsed.is_integer() else parsed


def _to_int(value: Any, default: int = 0) -> int:
    number = _to_number(value, default)
    return int(number)


def _to_str(value: Any) -> str:
    return "" if value is None else str(value)


def _first_str(value: Any) -> str:
    """Like `_to_str`, but a list contributes only its first item."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return _to_str(value)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    try:
        normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


@dataclass
class UnitOfMeasurement:
    name: str = ""
    abbreviation: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> UnitOfMeasurement:
        if isinstance(data, str):
            return cls(name=data)
        if not isinstance(data, Mapping):
            return cls()
        return cls(name=_to_str(data.get("name")), abbreviation=_to_str(data.get("abbreviation")))

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "abbreviation": self.abbreviation}


@dataclass
class RecipeIngredient:
    ingredient: str
    serving_size: float = 0
    unit: UnitOfMeasurement = field(default_factory=UnitOfMeasurement)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RecipeIngredient:
        # The generator is not consistent about the name key.
        name = data.get("ingredient")
        if name is None:
            name = data.get("name")
        return cls(
            ingredient=_to_str(name),
            serving_size=max(_to_number(data.get("servingSize")), 0),
            unit=UnitOfMeasurement.from_dict(data.get("unit")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ingredient": self.ingredient,
            "servingSize": self.serving_size,
            "unit": self.unit.to_dict(),
        }


@dataclass
class RecipeIngredients:
    """User-supplied ingredients plus the extras the generator added."""
    your_ingredients: list[RecipeIngredient] = field(default_factory=list)
    extra_ingredients: list[RecipeIngredient] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> RecipeIngredients:
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            your_ingredients=[
                RecipeIngredient.from_dict(item)
                for item in data.get("yourIngredients") or []
                if isinstance(item, Mapping)
            ],
            extra_ingredients=[
                RecipeIngredient.from_dict(item)
                for item in data.get("extraIngredients") or []
                if isinstance(item, Mapping)
            ],
        )

    def combined(self) -> list[RecipeIngredient]:
        return [*self.your_ingredients, *self.extra_ingredients]

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "yourIngredients": [item.to_dict() for item in self.your_ingredients],
            "extraIngredients": [item.to_dict() for item in self.extra_ingredients],
        }


@dataclass
class NutritionalInformation:
    calories: float = 0
    proteins: float = 0
    fats: float = 0
    carbs: float = 0

    @classmethod
    def from_dict(cls, data: Any) -> NutritionalInformation:
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            calories=_to_number(data.get("calories")),
            proteins=_to_number(data.get("proteins")),
            fats=_to_number(data.get("fats")),
            carbs=_to_number(data.get("carbs")),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "calories": self.calories,
            "proteins": self.proteins,
            "fats": self.fats,
            "carbs": self.carbs,
        }


@dataclass
class RecipeStep:
    order: int
    title: str = ""
    description: str = ""
    cook: float = 0  # minutes

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RecipeStep:
        return cls(
            order=_to_int(data.get("order")),
            title=_to_str(data.get("title")),
            description=_to_str(data.get("description")),
            cook=_to_number(data.get("cook")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "order": self.order,
            "title": self.title,
            "description": self.description,
            "cook": self.cook,
        }


@dataclass
class RecipePreferences:
    """Cuisine, cooking-time bucket and diet preference of a recipe."""
    cooking_time: str = ""
    cuisine: str = ""
    diet_preferences: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> RecipePreferences:
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            cooking_time=_first_str(data.get("cookingTime")),
            cuisine=_first_str(data.get("cuisine")),
            diet_preferences=_first_str(data.get("dietPreferences")),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "cookingTime": self.cooking_time,
            "cuisine": self.cuisine,
            "dietPreferences": self.diet_preferences,
        }


@dataclass
class Recipe:
    """
    A generated recipe, persisted or not.

    `id`, `recipe_signature` and `likes` are identity fields owned by the
    cookbook; everything else is content produced by the generator.
    """
    title: str
    cooks_amount: int = 1
    cooking_time_text: str = ""
    cooking_time_minutes: Optional[int] = None
    nutritional_information: NutritionalInformation = field(default_factory=NutritionalInformation)
    preferences: RecipePreferences = field(default_factory=RecipePreferences)
    ingredients: RecipeIngredients = field(default_factory=RecipeIngredients)
    directions: list[RecipeStep] = field(default_factory=list)

    # Identity (populated once persisted)
    id: Optional[str] = None
    recipe_signature: Optional[str] = None
    likes: int = 0
    is_seed_recipe: bool = False
    created_at: Optional[datetime] = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Recipe:
        """
        Build a recipe from a generator payload or a store document.

        Missing or malformed fields fall back to safe defaults instead of
        raising; `likes` is clamped at zero.
        """
        minutes = data.get("cookingTimeMinutes")
        recipe_id = data.get("id")
        signature = data.get("recipeSignature")
        return cls(
            title=_to_str(data.get("title")),
            cooks_amount=_to_int(data.get("cooksAmount"), 1),
            cooking_time_text=_to_str(data.get("cookingTimeText")),
            cooking_time_minutes=_to_int(minutes) if minutes is not None else None,
            nutritional_information=NutritionalInformation.from_dict(data.get("nutritionalInformation")),
            preferences=RecipePreferences.from_dict(data.get("preferences")),
            ingredients=RecipeIngredients.from_dict(data.get("ingredients")),
            directions=[
                RecipeStep.from_dict(step)
                for step in data.get("directions") or []
                if isinstance(step, Mapping)
            ],
            id=str(recipe_id) if recipe_id else None,
            recipe_signature=str(signature) if signature else None,
            likes=max(_to_int(data.get("likes")), 0),
            is_seed_recipe=bool(data.get("isSeedRecipe", False)),
            created_at=_parse_datetime(data.get("createdAt")),
        )

    def content_document(self) -> dict[str, Any]:
        """Content fields only, in the camelCase document shape."""
        document: dict[str, Any] = {
            "title": self.title,
            "cookingTimeText": self.cooking_time_text,
            "cooksAmount": self.cooks_amount,
            "nutritionalInformation": self.nutritional_information.to_dict(),
            "preferences": self.preferences.to_dict(),
            "ingredients": self.ingredients.to_dict(),
            "directions": [step.to_dict() for step in self.directions],
        }
        if self.cooking_time_minutes is not None:
            document["cookingTimeMinutes"] = self.cooking_time_minutes
        return document

    def to_document(self) -> dict[str, Any]:
        document = self.content_document()
        document.update(
            {
                "id": self.id,
                "recipeSignature": self.recipe_signature,
                "likes": self.likes,
                "isSeedRecipe": self.is_seed_recipe,
                "createdAt": self.created_at.isoformat() if self.created_at else None,
            }
        )
        return document

    def with_persisted_identity(
        self,
        *,
        recipe_id: str,
        signature: str,
        likes: int,
        preferences: Optional[RecipePreferences] = None,
    ) -> Recipe:
        """
        Copy of this submission carrying the identity of a stored record.

        Content comes from this submission; `id`, `recipe_signature` and
        `likes` come from the store. Nothing else of the stored record is
        carried over.
        """
        return Recipe(
            title=self.title,
            cooks_amount=self.cooks_amount,
            cooking_time_text=self.cooking_time_text,
            cooking_time_minutes=self.cooking_time_minutes,
            nutritional_information=copy.deepcopy(self.nutritional_information),
            preferences=copy.deepcopy(preferences or self.preferences),
            ingredients=copy.deepcopy(self.ingredients),
            directions=copy.deepcopy(self.directions),
            id=recipe_id,
            recipe_signature=signature,
            likes=max(likes, 0),
            is_seed_recipe=self.is_seed_recipe,
            created_at=self.created_at,
        )


@dataclass
class CookbookPage:
    """One page of a likes-ordered cookbook listing."""
    items: list[Recipe]
    page: int
    page_size: int
    total_pages: int
    total_items: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1
