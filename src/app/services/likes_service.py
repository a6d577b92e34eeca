# src/app/services/likes_service.py
"""
Global likes counter of cookbook recipes.
"""
from __future__ import annotations

import logging

from src.app.domain.models import Recipe
from src.app.domain.signature import get_or_create_signature
from src.app.services.upsert_service import RecipeUpsertService

logger = logging.getLogger(__name__)

LIKES_FIELD = "likes"


class LikeCounterService:
    """
    Applies favorite toggles to the shared likes counter.

    The stored value is only ever changed through the store's atomic
    increment. The number returned to callers is an optimistic estimate for
    immediate display and may differ from the stored counter when other
    callers toggle the same recipe concurrently.
    """

    def __init__(self, upserts: RecipeUpsertService):
        self._upserts = upserts
        self._store = upserts.store

    async def update_likes_for_recipe(self, recipe: Recipe, is_favorite: bool) -> int:
        """
        Apply a favorite (+1) or unfavorite (-1) to the recipe's counter.

        A recipe the store has never seen is created with 1 like when
        favorited and 0 when unfavorited. `recipe.id` is updated to the id of
        the backing record.

        Args:
            recipe: The recipe being toggled
            is_favorite: New favorite state

        Returns:
            Advisory likes count, never negative
        """
        signature = get_or_create_signature(recipe, self._upserts.canonicalizer)
        existing = await self._store.find_by_signature(signature)
        delta = 1 if is_favorite else -1

        if existing is None or not existing.id:
            initial_likes = 1 if is_favorite else 0
            created = await self._upserts.create_recipe(recipe, likes=initial_likes, is_seed=False)
            recipe.id = created.id
            logger.info("Recipe created on like toggle: id=%s, likes=%d", created.id, initial_likes)
            return initial_likes

        await self._store.atomic_increment(existing.id, LIKES_FIELD, delta)
        recipe.id = existing.id

        likes = max((existing.likes or 0) + delta, 0)
        logger.info("Likes updated: id=%s, delta=%d, advisory=%d", existing.id, delta, likes)
        return likes
