# src/app/routers/recipes.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.app.config import settings
from src.app.deps import get_cookbook_service
from src.app.domain.errors import RecipeNotFoundError, RecipeStoreError
from src.app.schemas.recipes import (
    CookbookPageResponse,
    EnsureRecipeRequest,
    LikeRequest,
    LikeResponse,
    RecipeResponse,
    SyncRecipesRequest,
)
from src.app.services.cookbook_service import DEFAULT_TOP_LIKED, CookbookService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _store_unavailable(exc: RecipeStoreError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@router.post("/sync", response_model=list[RecipeResponse])
async def sync_generated_recipes(
    payload: SyncRecipesRequest,
    cookbook: CookbookService = Depends(get_cookbook_service),
) -> list[RecipeResponse]:
    recipes = [item.to_domain() for item in payload.recipes]
    try:
        synced = await cookbook.sync_generated_recipes(recipes)
    except RecipeStoreError as exc:
        raise _store_unavailable(exc)
    return [RecipeResponse.from_domain(recipe) for recipe in synced]


@router.post("/ensure", response_model=RecipeResponse)
async def ensure_recipe(
    payload: EnsureRecipeRequest,
    cookbook: CookbookService = Depends(get_cookbook_service),
) -> RecipeResponse:
    try:
        recipe = await cookbook.ensure_recipe_in_cookbook(payload.recipe.to_domain(), is_seed=payload.isSeed)
    except RecipeStoreError as exc:
        raise _store_unavailable(exc)
    return RecipeResponse.from_domain(recipe)


@router.post("/likes", response_model=LikeResponse)
async def toggle_like(
    payload: LikeRequest,
    cookbook: CookbookService = Depends(get_cookbook_service),
) -> LikeResponse:
    recipe = payload.recipe.to_domain()
    try:
        likes = await cookbook.update_likes_for_recipe(recipe, payload.isFavorite)
    except RecipeStoreError as exc:
        raise _store_unavailable(exc)
    return LikeResponse(id=recipe.id, recipeSignature=recipe.recipe_signature, likes=likes)


@router.get("", response_model=CookbookPageResponse)
async def list_cookbook(
    cuisine: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    cookbook: CookbookService = Depends(get_cookbook_service),
) -> CookbookPageResponse:
    try:
        result = await cookbook.load_cookbook_page(cuisine, page, settings.COOKBOOK_PAGE_SIZE)
    except RecipeStoreError as exc:
        raise _store_unavailable(exc)
    return CookbookPageResponse.from_domain(result)


@router.get("/top", response_model=list[RecipeResponse])
async def top_liked(
    limit: int = Query(default=DEFAULT_TOP_LIKED, ge=1, le=50),
    cookbook: CookbookService = Depends(get_cookbook_service),
) -> list[RecipeResponse]:
    try:
        recipes = await cookbook.top_liked_recipes(limit)
    except RecipeStoreError as exc:
        raise _store_unavailable(exc)
    return [RecipeResponse.from_domain(recipe) for recipe in recipes]


@router.get("/seeds", response_model=list[RecipeResponse])
async def list_seed_recipes(
    cookbook: CookbookService = Depends(get_cookbook_service),
) -> list[RecipeResponse]:
    try:
        recipes = await cookbook.load_seed_recipes()
    except RecipeStoreError as exc:
        raise _store_unavailable(exc)
    return [RecipeResponse.from_domain(recipe) for recipe in recipes]


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: str,
    cookbook: CookbookService = Depends(get_cookbook_service),
) -> RecipeResponse:
    try:
        recipe = await cookbook.require_recipe(recipe_id)
    except RecipeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except RecipeStoreError as exc:
        raise _store_unavailable(exc)
    return RecipeResponse.from_domain(recipe)
