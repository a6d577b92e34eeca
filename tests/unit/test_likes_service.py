from __future__ import annotations

from typing import Callable

import pytest

from src.app.domain.models import Recipe
from src.app.services.likes_service import LikeCounterService
from src.app.services.upsert_service import RecipeUpsertService
from tests.factories import RecordingRecipeStore

MakeRecipe = Callable[..., Recipe]


def _services(store: RecordingRecipeStore) -> tuple[RecipeUpsertService, LikeCounterService]:
    upserts = RecipeUpsertService(store)
    return upserts, LikeCounterService(upserts)


class TestFavoriteUnknownRecipe:
    @pytest.mark.asyncio
    async def test_creates_record_with_one_like(
        self, store: RecordingRecipeStore, make_recipe: MakeRecipe
    ) -> None:
        _, likes = _services(store)
        recipe = make_recipe()

        result = await likes.update_likes_for_recipe(recipe, True)

        assert result == 1
        assert len(store) == 1
        assert recipe.id is not None
        stored = await store.get_by_id(recipe.id)
        assert stored is not None
        assert stored.likes == 1
        assert store.increments == []

    @pytest.mark.asyncio
    async def test_unfavorite_unknown_creates_record_at_zero(
        self, store: RecordingRecipeStore, make_recipe: MakeRecipe
    ) -> None:
        _, likes = _services(store)
        recipe = make_recipe()

        result = await likes.update_likes_for_recipe(recipe, False)

        assert result == 0
        assert len(store) == 1
        assert store.created_payloads[0]["likes"] == 0
        assert store.increments == []


class TestToggleExistingRecipe:
    @pytest.mark.asyncio
    async def test_unfavorite_right_after_favorite(
        self, store: RecordingRecipeStore, make_recipe: MakeRecipe
    ) -> None:
        _, likes = _services(store)
        recipe = make_recipe()
        await likes.update_likes_for_recipe(recipe, True)

        result = await likes.update_likes_for_recipe(recipe, False)

        assert result == 0
        assert store.increments == [(recipe.id, "likes", -1)]
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_favorite_increments_existing(
        self, store: RecordingRecipeStore, make_recipe: MakeRecipe
    ) -> None:
        upserts, likes = _services(store)
        persisted = await upserts.ensure_recipe_in_cookbook(make_recipe())
        recipe = make_recipe()

        result = await likes.update_likes_for_recipe(recipe, True)

        assert result == 1
        assert recipe.id == persisted.id
        assert store.increments == [(persisted.id, "likes", 1)]
        stored = await store.get_by_id(persisted.id)
        assert stored is not None and stored.likes == 1

    @pytest.mark.asyncio
    async def test_repeated_unfavorite_never_reports_negative(
        self, store: RecordingRecipeStore, make_recipe: MakeRecipe
    ) -> None:
        upserts, likes = _services(store)
        await upserts.ensure_recipe_in_cookbook(make_recipe())

        results = [await likes.update_likes_for_recipe(make_recipe(), False) for _ in range(3)]

        assert results == [0, 0, 0]
        assert [delta for _, _, delta in store.increments] == [-1, -1, -1]

    @pytest.mark.asyncio
    async def test_advisory_value_uses_observed_likes(
        self, store: RecordingRecipeStore, make_recipe: MakeRecipe
    ) -> None:
        upserts, likes = _services(store)
        persisted = await upserts.ensure_recipe_in_cookbook(make_recipe())
        await store.atomic_increment(persisted.id, "likes", 5)

        result = await likes.update_likes_for_recipe(make_recipe(), False)

        assert result == 4
