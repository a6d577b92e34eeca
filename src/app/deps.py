# src/app/deps.py (singletons exposed as FastAPI dependencies)

from __future__ import annotations

from fastapi import Depends
from supabase import acreate_client

from src.app.config import settings
from src.app.domain.errors import StoreConfigurationError
from src.app.domain.preferences import DEFAULT_PREFERENCE_OPTIONS, PreferenceCanonicalizer
from src.app.infra.db.base import RecipeStore
from src.app.infra.db.memory_recipes_repo import InMemoryRecipeStore
from src.app.infra.db.supabase_recipes_repo import SupabaseRecipeStore
from src.app.services.cookbook_service import CookbookService

_store: RecipeStore | None = None
_canonicalizer = PreferenceCanonicalizer(DEFAULT_PREFERENCE_OPTIONS)


async def get_recipe_store() -> RecipeStore:
    global _store
    if _store is None:
        errors = settings.validate_store()
        if errors:
            raise StoreConfigurationError(errors)

        if settings.RECIPE_STORE_BACKEND == "memory":
            _store = InMemoryRecipeStore()
        else:
            client = await acreate_client(str(settings.SUPABASE_URL),
                                          settings.SUPABASE_SERVICE_ROLE_KEY)
            _store = SupabaseRecipeStore(client, settings.RECIPES_TABLE)
    return _store


def get_canonicalizer() -> PreferenceCanonicalizer:
    return _canonicalizer


async def get_cookbook_service(
    store: RecipeStore = Depends(get_recipe_store),
    canonicalizer: PreferenceCanonicalizer = Depends(get_canonicalizer),
) -> CookbookService:
    return CookbookService(store, canonicalizer)
