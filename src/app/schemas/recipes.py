# src/app/schemas/recipes.py
from __future__ import annotations

from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.app.domain.models import CookbookPage, Recipe

Number = Union[int, float]
PreferenceValue = Union[str, list[str], None]


class UnitSchema(BaseModel):
    name: str = ""
    abbreviation: str = ""


class IngredientSchema(BaseModel):
    ingredient: str = Field(default="", validation_alias=AliasChoices("ingredient", "name"))
    servingSize: Optional[Number] = Field(default=0, ge=0)
    unit: Union[UnitSchema, str, None] = None


class IngredientsSchema(BaseModel):
    yourIngredients: list[IngredientSchema] = Field(default_factory=list)
    extraIngredients: list[IngredientSchema] = Field(default_factory=list)


class NutritionSchema(BaseModel):
    calories: Number = 0
    proteins: Number = 0
    fats: Number = 0
    carbs: Number = 0


class PreferencesSchema(BaseModel):
    # Lists are accepted; only their first item counts.
    cookingTime: PreferenceValue = None
    cuisine: PreferenceValue = None
    dietPreferences: PreferenceValue = None


class StepSchema(BaseModel):
    order: int
    title: str = ""
    description: str = ""
    cook: Number = 0


class RecipeIn(BaseModel):
    """Recipe content as returned by the generator. Identity fields are ignored."""
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1)
    cookingTimeText: str = ""
    cookingTimeMinutes: Optional[int] = None
    cooksAmount: int = Field(default=1, ge=1)
    nutritionalInformation: NutritionSchema = Field(default_factory=NutritionSchema)
    preferences: PreferencesSchema = Field(default_factory=PreferencesSchema)
    ingredients: IngredientsSchema = Field(default_factory=IngredientsSchema)
    directions: list[StepSchema] = Field(default_factory=list)

    def to_domain(self) -> Recipe:
        return Recipe.from_dict(self.model_dump())


class RecipeResponse(BaseModel):
    id: Optional[str] = None
    title: str
    cookingTimeText: str = ""
    cookingTimeMinutes: Optional[int] = None
    cooksAmount: int
    nutritionalInformation: NutritionSchema
    preferences: PreferencesSchema
    ingredients: IngredientsSchema
    directions: list[StepSchema] = Field(default_factory=list)
    recipeSignature: Optional[str] = None
    likes: int = 0
    isSeedRecipe: bool = False
    createdAt: Optional[str] = None

    @classmethod
    def from_domain(cls, recipe: Recipe) -> RecipeResponse:
        return cls(**recipe.to_document())


class SyncRecipesRequest(BaseModel):
    recipes: list[RecipeIn] = Field(default_factory=list)


class EnsureRecipeRequest(BaseModel):
    recipe: RecipeIn
    isSeed: bool = False


class LikeRequest(BaseModel):
    recipe: RecipeIn
    isFavorite: bool


class LikeResponse(BaseModel):
    id: str
    recipeSignature: str
    likes: int


class CookbookPageResponse(BaseModel):
    items: list[RecipeResponse] = Field(default_factory=list)
    page: int
    pageSize: int
    totalPages: int
    totalItems: int

    @classmethod
    def from_domain(cls, page: CookbookPage) -> CookbookPageResponse:
        return cls(
            items=[RecipeResponse.from_domain(recipe) for recipe in page.items],
            page=page.page,
            pageSize=page.page_size,
            totalPages=page.total_pages,
            totalItems=page.total_items,
        )
