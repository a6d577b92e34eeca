from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.app.config import Settings


def _settings(**values: object) -> Settings:
    return Settings(_env_file=None, **values)


class TestValidateStore:
    def test_supabase_requires_credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)

        errors = _settings(RECIPE_STORE_BACKEND="supabase").validate_store()

        assert errors == ["SUPABASE_URL is required", "SUPABASE_SERVICE_ROLE_KEY is required"]

    def test_supabase_with_credentials(self) -> None:
        settings = _settings(
            RECIPE_STORE_BACKEND="supabase",
            SUPABASE_URL="https://example.supabase.co",
            SUPABASE_SERVICE_ROLE_KEY="service-role",
        )

        assert settings.validate_store() == []

    def test_memory_backend_needs_nothing(self) -> None:
        assert _settings(RECIPE_STORE_BACKEND="memory").validate_store() == []


class TestSettingsValues:
    def test_page_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            _settings(COOKBOOK_PAGE_SIZE=0)

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _settings(RECIPE_STORE_BACKEND="firestore")

    def test_page_size_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COOKBOOK_PAGE_SIZE", "20")

        assert _settings().COOKBOOK_PAGE_SIZE == 20
