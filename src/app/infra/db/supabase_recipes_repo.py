from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient

from src.app.domain.errors import RecipeStoreError, UnsupportedFieldError
from src.app.domain.models import Recipe
from src.app.infra.db.base import RecipeStore

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "recipes"
INCREMENT_FUNCTION = "increment_recipe_field"

# camelCase record field -> table column
COLUMNS: dict[str, str] = {
    "id": "id",
    "title": "title",
    "cookingTimeText": "cooking_time_text",
    "cookingTimeMinutes": "cooking_time_minutes",
    "cooksAmount": "cooks_amount",
    "nutritionalInformation": "nutritional_information",
    "preferences": "preferences",
    "ingredients": "ingredients",
    "directions": "directions",
    "recipeSignature": "recipe_signature",
    "likes": "likes",
    "isSeedRecipe": "is_seed_recipe",
    "createdAt": "created_at",
}
JSON_COLUMNS = frozenset({"nutritionalInformation", "preferences", "ingredients", "directions"})
INCREMENTABLE_FIELDS = frozenset({"likes"})

_STORE_ERRORS = (APIError, httpx.HTTPError, ConnectionError, TimeoutError)


def _field_to_column(field: str) -> str:
    """Map a dotted record path onto a PostgREST column expression."""
    head, *rest = field.split(".")
    column = COLUMNS.get(head)
    if column is None:
        raise UnsupportedFieldError(field)
    if not rest:
        return column
    if head not in JSON_COLUMNS:
        raise UnsupportedFieldError(field, "Field has no nested values")
    *middle, last = rest
    return "->".join([column, *middle]) + "->>" + last


def _document_to_row(document: dict[str, Any]) -> dict[str, Any]:
    return {COLUMNS[key]: value for key, value in document.items() if key in COLUMNS}


def _row_to_recipe(row: dict[str, Any]) -> Recipe:
    document = {key: row.get(column) for key, column in COLUMNS.items() if column in row}
    return Recipe.from_dict(document)


class SupabaseRecipeStore(RecipeStore):
    def __init__(self, client: AsyncClient, table_name: str = DEFAULT_TABLE_NAME):
        self._client = client
        self._table_name = table_name
        logger.info("SupabaseRecipeStore initialized: table=%s", table_name)

    def _table(self):
        return self._client.table(self._table_name)

    async def _execute(self, operation: str, query) -> list[dict[str, Any]]:
        try:
            result = await query.execute()
        except _STORE_ERRORS as error:
            logger.error("Store error during %s: %s", operation, error)
            raise RecipeStoreError(operation, str(error)) from error
        return result.data or []

    async def find_by_signature(self, signature: str) -> Recipe | None:
        rows = await self._execute(
            "find_by_signature",
            self._table()
            .select("*")
            .eq("recipe_signature", signature)
            .order("created_at")
            .limit(1),
        )
        return _row_to_recipe(rows[0]) if rows else None

    async def create(self, payload: dict[str, Any]) -> str:
        row = _document_to_row(payload)
        row["id"] = str(uuid4())

        rows = await self._execute("create", self._table().insert(row))
        if not rows:
            raise RecipeStoreError("create", "Insert returned no rows")

        recipe_id = str(rows[0].get("id") or row["id"])
        logger.info("Created recipe: id=%s, signature=%s", recipe_id, row.get("recipe_signature"))
        return recipe_id

    async def get_by_id(self, recipe_id: str) -> Recipe | None:
        rows = await self._execute(
            "get_by_id",
            self._table().select("*").eq("id", str(recipe_id)).limit(1),
        )
        return _row_to_recipe(rows[0]) if rows else None

    async def query_by_field(self, field: str, value: Any) -> list[Recipe]:
        rows = await self._execute(
            "query_by_field",
            self._table().select("*").eq(_field_to_column(field), value).order("created_at"),
        )
        return [_row_to_recipe(row) for row in rows]

    async def query_bool(self, field: str, value: bool = True) -> list[Recipe]:
        rows = await self._execute(
            "query_bool",
            self._table().select("*").is_(_field_to_column(field), "true" if value else "false").order("created_at"),
        )
        return [_row_to_recipe(row) for row in rows]

    async def atomic_increment(self, recipe_id: str, field: str, delta: int) -> None:
        if field not in INCREMENTABLE_FIELDS:
            raise UnsupportedFieldError(field, "Field cannot be incremented")

        await self._execute(
            "atomic_increment",
            self._client.rpc(
                INCREMENT_FUNCTION,
                {"p_id": str(recipe_id), "p_field": _field_to_column(field), "p_delta": delta},
            ),
        )
        logger.debug("Incremented %s on recipe %s by %d", field, recipe_id, delta)
