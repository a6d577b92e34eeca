# src/app/services/upsert_service.py
"""
Recipe upsert service.
Makes sure every generated recipe exists exactly once in the cookbook.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence

from src.app.domain.models import Recipe, RecipePreferences
from src.app.domain.preferences import PreferenceCanonicalizer
from src.app.domain.signature import get_or_create_signature
from src.app.infra.db.base import RecipeStore

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def build_recipe_payload(
    recipe: Recipe,
    *,
    signature: str,
    preferences: RecipePreferences,
    likes: int,
    is_seed: bool,
    created_at: datetime,
) -> dict[str, Any]:
    """Document written for a recipe the store has never seen."""
    payload = recipe.content_document()
    payload.update(
        {
            "preferences": preferences.to_dict(),
            "recipeSignature": signature,
            "likes": likes,
            "isSeedRecipe": is_seed,
            "createdAt": created_at.isoformat(),
        }
    )
    return payload


class RecipeUpsertService:
    """
    Service reconciling generated recipes against the store.

    Responsibilities:
    - Derive the content signature of a recipe
    - Reuse the stored record when the signature is already known
    - Create the record otherwise

    Lookup and create are two separate store calls. Two concurrent callers
    with the same new recipe can both create it.
    """

    def __init__(
        self,
        store: RecipeStore,
        canonicalizer: Optional[PreferenceCanonicalizer] = None,
        clock: Callable[[], datetime] = _now_utc,
    ):
        self._store = store
        self.canonicalizer = canonicalizer or PreferenceCanonicalizer()
        self._clock = clock

    @property
    def store(self) -> RecipeStore:
        return self._store

    async def create_recipe(self, recipe: Recipe, *, likes: int, is_seed: bool) -> Recipe:
        """
        Persist a recipe the store does not know yet.

        Args:
            recipe: The submitted recipe
            likes: Initial value of the likes counter
            is_seed: Whether this is curated seed content

        Returns:
            Copy of the recipe carrying its new id, signature and likes
        """
        signature = get_or_create_signature(recipe, self.canonicalizer)
        preferences = self.canonicalizer.canonicalize(recipe.preferences)
        created_at = self._clock()

        payload = build_recipe_payload(
            recipe,
            signature=signature,
            preferences=preferences,
            likes=likes,
            is_seed=is_seed,
            created_at=created_at,
        )
        recipe_id = await self._store.create(payload)

        persisted = recipe.with_persisted_identity(
            recipe_id=recipe_id,
            signature=signature,
            likes=likes,
            preferences=preferences,
        )
        persisted.is_seed_recipe = is_seed
        persisted.created_at = created_at
        return persisted

    async def ensure_recipe_in_cookbook(self, recipe: Recipe, *, is_seed: bool = False) -> Recipe:
        """
        Return the recipe with the identity of its stored record, creating
        the record on first sight.

        The first stored content for a signature wins; the content of later
        duplicates is never written.

        Args:
            recipe: The submitted recipe
            is_seed: Flag stored on the record if it has to be created

        Returns:
            The submitted content with id, signature and likes attached
        """
        signature = get_or_create_signature(recipe, self.canonicalizer)
        preferences = self.canonicalizer.canonicalize(recipe.preferences)

        existing = await self._store.find_by_signature(signature)
        if existing is not None and existing.id:
            logger.debug("Recipe already in cookbook: id=%s", existing.id)
            return recipe.with_persisted_identity(
                recipe_id=existing.id,
                signature=signature,
                likes=existing.likes or 0,
                preferences=preferences,
            )

        persisted = await self.create_recipe(recipe, likes=recipe.likes or 0, is_seed=is_seed)
        logger.info("Recipe added to cookbook: id=%s, title=%s", persisted.id, persisted.title)
        return persisted

    async def sync_generated_recipes(self, recipes: Sequence[Recipe]) -> list[Recipe]:
        """
        Upsert a generated batch one recipe at a time, in input order.

        A store failure stops the batch: earlier recipes stay persisted and
        later ones are not attempted.
        """
        synced: list[Recipe] = []
        for recipe in recipes:
            synced.append(await self.ensure_recipe_in_cookbook(recipe))

        logger.info("Synced %d generated recipes", len(synced))
        return synced
