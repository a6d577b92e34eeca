from __future__ import annotations

from typing import Any, Callable

import pytest

from src.app.domain.models import Recipe
from tests.factories import RecordingRecipeStore, recipe_payload


@pytest.fixture
def make_recipe() -> Callable[..., Recipe]:
    def _make(**kwargs: Any) -> Recipe:
        return Recipe.from_dict(recipe_payload(**kwargs))

    return _make


@pytest.fixture
def store() -> RecordingRecipeStore:
    return RecordingRecipeStore()
