# src/app/services/cookbook_service.py
"""
Cookbook service.
Entry point used by the API for syncing, liking and listing recipes.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from src.app.domain.errors import RecipeNotFoundError
from src.app.domain.models import CookbookPage, Recipe
from src.app.domain.preferences import PreferenceCanonicalizer, normalize_value
from src.app.infra.db.base import RecipeStore
from src.app.services.likes_service import LikeCounterService
from src.app.services.upsert_service import RecipeUpsertService

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 15
DEFAULT_TOP_LIKED = 3

CUISINE_FIELD = "preferences.cuisine"
SEED_FIELD = "isSeedRecipe"


def sort_by_likes(recipes: Sequence[Recipe]) -> list[Recipe]:
    """Most liked first; ties keep their input order."""
    return sorted(recipes, key=lambda recipe: recipe.likes or 0, reverse=True)


def paginate(recipes: Sequence[Recipe], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> CookbookPage:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total_items = len(recipes)
    total_pages = max(math.ceil(total_items / page_size), 1)
    page = min(max(page, 1), total_pages)
    start = (page - 1) * page_size

    return CookbookPage(
        items=list(recipes[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_items=total_items,
    )


class CookbookService:
    """
    Service for the shared cookbook.

    Responsibilities:
    - Sync generated recipes into the store
    - Toggle favorites on the global likes counter
    - Load single recipes, cuisine listings and seed recipes
    """

    def __init__(
        self,
        store: RecipeStore,
        canonicalizer: Optional[PreferenceCanonicalizer] = None,
        upserts: Optional[RecipeUpsertService] = None,
        likes: Optional[LikeCounterService] = None,
    ):
        self._store = store
        self.canonicalizer = canonicalizer or PreferenceCanonicalizer()
        self._upserts = upserts or RecipeUpsertService(store, self.canonicalizer)
        self._likes = likes or LikeCounterService(self._upserts)

    async def ensure_recipe_in_cookbook(self, recipe: Recipe, *, is_seed: bool = False) -> Recipe:
        return await self._upserts.ensure_recipe_in_cookbook(recipe, is_seed=is_seed)

    async def sync_generated_recipes(self, recipes: Sequence[Recipe]) -> list[Recipe]:
        return await self._upserts.sync_generated_recipes(recipes)

    async def update_likes_for_recipe(self, recipe: Recipe, is_favorite: bool) -> int:
        return await self._likes.update_likes_for_recipe(recipe, is_favorite)

    async def get_recipe_by_id(self, recipe_id: str) -> Optional[Recipe]:
        return await self._store.get_by_id(recipe_id)

    async def require_recipe(self, recipe_id: str) -> Recipe:
        """
        Get a recipe by id.

        Raises:
            RecipeNotFoundError: If the store has no such recipe
        """
        recipe = await self.get_recipe_by_id(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return recipe

    async def load_cookbook(self, cuisine: Optional[str] = None) -> list[Recipe]:
        """
        Load the cookbook, optionally for a single cuisine.

        Cuisines outside the configured vocabulary match nothing.

        Args:
            cuisine: Cuisine name, any casing

        Returns:
            Recipes sorted by likes, most liked first
        """
        if cuisine is None:
            # The store interface has no "all" query; every record is either seed or not.
            seeds = await self._store.query_bool(SEED_FIELD, True)
            generated = await self._store.query_bool(SEED_FIELD, False)
            return sort_by_likes([*seeds, *generated])

        if not self.canonicalizer.is_known_cuisine(cuisine):
            logger.info("Unknown cuisine requested: %s", cuisine)
            return []

        recipes = await self._store.query_by_field(CUISINE_FIELD, normalize_value(cuisine))
        return sort_by_likes(recipes)

    async def load_cookbook_page(
        self,
        cuisine: Optional[str] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> CookbookPage:
        return paginate(await self.load_cookbook(cuisine), page, page_size)

    async def load_seed_recipes(self) -> list[Recipe]:
        return await self._store.query_bool(SEED_FIELD, True)

    async def top_liked_recipes(self, limit: int = DEFAULT_TOP_LIKED) -> list[Recipe]:
        return (await self.load_cookbook())[:max(limit, 0)]
