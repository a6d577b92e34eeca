from __future__ import annotations

from typing import Literal, Optional

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    SUPABASE_URL: Optional[AnyUrl] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    APP_ENV: str = "local"
    RECIPE_STORE_BACKEND: Literal["supabase", "memory"] = "supabase"
    RECIPES_TABLE: str = "recipes"
    COOKBOOK_PAGE_SIZE: int = Field(default=15, ge=1)
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:4200"],
    )

    def validate_store(self) -> list[str]:
        errors: list[str] = []
        if self.RECIPE_STORE_BACKEND == "supabase":
            if not self.SUPABASE_URL:
                errors.append("SUPABASE_URL is required")
            if not self.SUPABASE_SERVICE_ROLE_KEY:
                errors.append("SUPABASE_SERVICE_ROLE_KEY is required")
        return errors


settings = Settings()
