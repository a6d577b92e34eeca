from __future__ import annotations

from typing import Any

import pytest

from src.app.domain.errors import RecipeNotFoundError
from src.app.domain.models import Recipe
from src.app.infra.db.memory_recipes_repo import InMemoryRecipeStore
from src.app.services.cookbook_service import CookbookService, paginate, sort_by_likes
from tests.factories import recipe_payload


def _stored(title: str, likes: int, cuisine: str = "italian", is_seed: bool = False) -> dict[str, Any]:
    document = recipe_payload(title=title, cuisine=cuisine)
    document.update({"recipeSignature": f"sig-{title}", "likes": likes, "isSeedRecipe": is_seed})
    return document


@pytest.fixture
def cookbook() -> CookbookService:
    store = InMemoryRecipeStore(
        [
            _stored("Carbonara", 2),
            _stored("Ramen", 7, cuisine="japanese"),
            _stored("Lasagna", 5),
            _stored("Pizza", 2, is_seed=True),
            _stored("Curry", 0, cuisine="indian", is_seed=True),
        ]
    )
    return CookbookService(store)


def _recipes(*pairs: tuple[str, int]) -> list[Recipe]:
    return [Recipe(title=title, likes=likes) for title, likes in pairs]


class TestSortByLikes:
    def test_descending_and_stable(self) -> None:
        recipes = _recipes(("a", 1), ("b", 3), ("c", 1), ("d", 3))

        assert [r.title for r in sort_by_likes(recipes)] == ["b", "d", "a", "c"]


class TestPaginate:
    def test_first_page(self) -> None:
        recipes = _recipes(*((str(i), 0) for i in range(20)))

        page = paginate(recipes, page=1, page_size=15)

        assert len(page.items) == 15
        assert page.total_pages == 2
        assert page.total_items == 20
        assert page.has_next is True
        assert page.has_previous is False

    def test_last_page_is_partial(self) -> None:
        recipes = _recipes(*((str(i), 0) for i in range(20)))

        page = paginate(recipes, page=2, page_size=15)

        assert [r.title for r in page.items] == [str(i) for i in range(15, 20)]
        assert page.has_next is False

    @pytest.mark.parametrize("requested,expected", ((0, 1), (-3, 1), (9, 2)))
    def test_out_of_range_pages_are_clamped(self, requested: int, expected: int) -> None:
        recipes = _recipes(*((str(i), 0) for i in range(20)))

        assert paginate(recipes, page=requested, page_size=15).page == expected

    def test_empty_listing_has_one_empty_page(self) -> None:
        page = paginate([], page=1)

        assert page.items == []
        assert page.total_pages == 1
        assert page.total_items == 0

    def test_rejects_non_positive_page_size(self) -> None:
        with pytest.raises(ValueError):
            paginate([], page_size=0)


class TestLoadCookbook:
    @pytest.mark.asyncio
    async def test_all_recipes_sorted_by_likes(self, cookbook: CookbookService) -> None:
        recipes = await cookbook.load_cookbook()

        # Seeds are listed before generated recipes, so Pizza precedes Carbonara on a tie.
        assert [r.title for r in recipes] == ["Ramen", "Lasagna", "Pizza", "Carbonara", "Curry"]

    @pytest.mark.asyncio
    async def test_filters_by_cuisine_case_insensitively(self, cookbook: CookbookService) -> None:
        recipes = await cookbook.load_cookbook(" Italian ")

        assert [r.title for r in recipes] == ["Lasagna", "Carbonara", "Pizza"]

    @pytest.mark.asyncio
    async def test_unknown_cuisine_is_empty(self, cookbook: CookbookService) -> None:
        assert await cookbook.load_cookbook("martian") == []

    @pytest.mark.asyncio
    async def test_page(self, cookbook: CookbookService) -> None:
        page = await cookbook.load_cookbook_page(page=2, page_size=2)

        assert page.page == 2
        assert page.total_pages == 3
        assert page.total_items == 5
        assert len(page.items) == 2


class TestSeedsAndTopLiked:
    @pytest.mark.asyncio
    async def test_seed_recipes(self, cookbook: CookbookService) -> None:
        recipes = await cookbook.load_seed_recipes()

        assert sorted(r.title for r in recipes) == ["Curry", "Pizza"]
        assert all(r.is_seed_recipe for r in recipes)

    @pytest.mark.asyncio
    async def test_top_liked_defaults_to_three(self, cookbook: CookbookService) -> None:
        recipes = await cookbook.top_liked_recipes()

        assert [r.title for r in recipes] == ["Ramen", "Lasagna", "Pizza"]

    @pytest.mark.asyncio
    async def test_top_liked_with_non_positive_limit(self, cookbook: CookbookService) -> None:
        assert await cookbook.top_liked_recipes(0) == []


class TestRequireRecipe:
    @pytest.mark.asyncio
    async def test_returns_stored_recipe(self, cookbook: CookbookService) -> None:
        created = await cookbook.ensure_recipe_in_cookbook(Recipe.from_dict(recipe_payload(title="Gnocchi")))

        recipe = await cookbook.require_recipe(created.id)

        assert recipe.title == "Gnocchi"

    @pytest.mark.asyncio
    async def test_missing_recipe_raises(self, cookbook: CookbookService) -> None:
        with pytest.raises(RecipeNotFoundError):
            await cookbook.require_recipe("missing")

        assert await cookbook.get_recipe_by_id("missing") is None
