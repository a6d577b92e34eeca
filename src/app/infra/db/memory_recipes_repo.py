from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any
from uuid import uuid4

from src.app.domain.errors import UnsupportedFieldError
from src.app.domain.models import Recipe
from src.app.infra.db.base import RecipeStore

logger = logging.getLogger(__name__)

INCREMENTABLE_FIELDS = frozenset({"likes"})

_MISSING = object()


def _lookup(document: dict[str, Any], field: str) -> Any:
    value: Any = document
    for part in field.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _flag(document: dict[str, Any], field: str) -> bool:
    value = _lookup(document, field)
    return False if value is _MISSING else bool(value)


class InMemoryRecipeStore(RecipeStore):
    """
    Process-local recipe store.

    Documents are kept in insertion order, which is the store order used for
    signature lookups. Mutations are serialized with an asyncio.Lock so the
    increment is a genuine read-modify-write within one event loop. Like a
    native increment, the raw counter is not clamped.
    """

    def __init__(self, documents: list[dict[str, Any]] | None = None):
        self._documents: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()
        for document in documents or []:
            recipe_id = str(document.get("id") or uuid4())
            self._documents[recipe_id] = {**copy.deepcopy(document), "id": recipe_id}
        logger.info("InMemoryRecipeStore initialized with %d recipes", len(self._documents))

    async def find_by_signature(self, signature: str) -> Recipe | None:
        for document in self._documents.values():
            if document.get("recipeSignature") == signature:
                return Recipe.from_dict(document)
        return None

    async def create(self, payload: dict[str, Any]) -> str:
        async with self._lock:
            recipe_id = str(uuid4())
            document = copy.deepcopy(payload)
            document["id"] = recipe_id
            self._documents[recipe_id] = document
        logger.info("Created recipe: id=%s, signature=%s", recipe_id, payload.get("recipeSignature"))
        return recipe_id

    async def get_by_id(self, recipe_id: str) -> Recipe | None:
        document = self._documents.get(str(recipe_id))
        return Recipe.from_dict(document) if document is not None else None

    async def query_by_field(self, field: str, value: Any) -> list[Recipe]:
        return [
            Recipe.from_dict(document)
            for document in self._documents.values()
            if _lookup(document, field) == value
        ]

    async def query_bool(self, field: str, value: bool = True) -> list[Recipe]:
        return [
            Recipe.from_dict(document)
            for document in self._documents.values()
            if _flag(document, field) is value
        ]

    async def atomic_increment(self, recipe_id: str, field: str, delta: int) -> None:
        if field not in INCREMENTABLE_FIELDS:
            raise UnsupportedFieldError(field, "Field cannot be incremented")

        async with self._lock:
            document = self._documents.get(str(recipe_id))
            if document is None:
                # Same as a native increment on a missing key: nothing to update.
                logger.warning("Increment on missing recipe: id=%s", recipe_id)
                return
            current = document.get(field) or 0
            document[field] = int(current) + delta

        logger.debug("Incremented %s on recipe %s by %d", field, recipe_id, delta)

    def raw_document(self, recipe_id: str) -> dict[str, Any] | None:
        document = self._documents.get(str(recipe_id))
        return copy.deepcopy(document) if document is not None else None

    def __len__(self) -> int:
        return len(self._documents)
