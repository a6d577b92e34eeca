from __future__ import annotations

from src.app.domain.errors import (
    CookbookError,
    RecipeNotFoundError,
    RecipeStoreError,
    StoreConfigurationError,
    UnsupportedFieldError,
)


class TestCookbookError:
    def test_base_exception(self) -> None:
        error = CookbookError("Base error")
        assert str(error) == "Base error"
        assert isinstance(error, Exception)


class TestRecipeStoreError:
    def test_includes_operation_and_reason(self) -> None:
        error = RecipeStoreError("create", "connection refused")
        assert "create" in str(error)
        assert "connection refused" in str(error)
        assert error.operation == "create"
        assert error.reason == "connection refused"
        assert isinstance(error, CookbookError)


class TestRecipeNotFoundError:
    def test_includes_recipe_id(self) -> None:
        error = RecipeNotFoundError("abc-123")
        assert "abc-123" in str(error)
        assert error.recipe_id == "abc-123"


class TestUnsupportedFieldError:
    def test_default_reason(self) -> None:
        error = UnsupportedFieldError("title")
        assert str(error) == "Unsupported field: title"
        assert error.field == "title"

    def test_custom_reason(self) -> None:
        error = UnsupportedFieldError("title", "Field cannot be incremented")
        assert str(error) == "Field cannot be incremented: title"


class TestStoreConfigurationError:
    def test_lists_all_errors(self) -> None:
        error = StoreConfigurationError(["SUPABASE_URL is required", "SUPABASE_SERVICE_ROLE_KEY is required"])
        assert "SUPABASE_URL is required" in str(error)
        assert "SUPABASE_SERVICE_ROLE_KEY is required" in str(error)
        assert len(error.errors) == 2
