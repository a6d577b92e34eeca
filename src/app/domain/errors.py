from __future__ import annotations


class CookbookError(Exception):
    pass


class RecipeStoreError(CookbookError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Recipe store error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class RecipeNotFoundError(CookbookError):
    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id


class UnsupportedFieldError(CookbookError):
    def __init__(self, field: str, reason: str = "Unsupported field"):
        super().__init__(f"{reason}: {field}")
        self.field = field
        self.reason = reason


class StoreConfigurationError(CookbookError):
    def __init__(self, errors: list[str]):
        super().__init__(f"Recipe store configuration errors: {', '.join(errors)}")
        self.errors = errors
