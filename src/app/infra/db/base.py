# src/app/infra/db/base.py
"""
Abstract base class for the recipe store.
This interface allows easy swapping between different storage backends.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from src.app.domain.models import Recipe


class RecipeStore(ABC):
    """
    Abstract interface for the shared recipe collection.

    Implementations:
    - SupabaseRecipeStore: Postgres table behind Supabase
    - InMemoryRecipeStore: process-local dict for local runs and tests
    """

    @abstractmethod
    async def find_by_signature(self, signature: str) -> Optional[Recipe]:
        """
        Look up a recipe by its content signature.

        Args:
            signature: The recipe signature

        Returns:
            The first matching recipe in store order (oldest first), or None
        """
        pass

    @abstractmethod
    async def create(self, payload: dict[str, Any]) -> str:
        """
        Create a new recipe document.

        Args:
            payload: Document in the camelCase record shape, without an id

        Returns:
            The id assigned by the store
        """
        pass

    @abstractmethod
    async def get_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """
        Get a recipe by its id.

        Args:
            recipe_id: The recipe id

        Returns:
            The recipe, or None if not found
        """
        pass

    @abstractmethod
    async def query_by_field(self, field: str, value: Any) -> list[Recipe]:
        """
        Get every recipe whose field equals value.

        Args:
            field: Record field, dotted for nested values ("preferences.cuisine")
            value: Value to compare against

        Returns:
            Matching recipes in store order
        """
        pass

    @abstractmethod
    async def query_bool(self, field: str, value: bool = True) -> list[Recipe]:
        """
        Get every recipe whose boolean field has the given value.

        Args:
            field: Boolean record field ("isSeedRecipe")
            value: Expected flag value

        Returns:
            Matching recipes in store order
        """
        pass

    @abstractmethod
    async def atomic_increment(self, recipe_id: str, field: str, delta: int) -> None:
        """
        Apply a signed delta to a numeric field as a server-side
        read-modify-write, independent of any value the caller has seen.

        Args:
            recipe_id: The recipe to update
            field: Numeric record field ("likes")
            delta: Signed amount to add
        """
        pass
