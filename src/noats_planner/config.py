"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str = ""
    openai_text_model: str = "gpt-4.1-mini"
    openai_vision_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    openai_timeout_seconds: float = 60.0
    shopify_store: str | None = None
    shopify_admin_api_access_token: str | None = None
    shopify_api_version: str = "2024-10"
    mailerlite_api_key: str | None = None
    mailerlite_group_id: str | None = None
    catalog_path: str | None = None
    transform_url: str = "https://dailynoats.com/pages/transform"
    cors_allow_origins: str = "*"
    max_recipe_images: int = 4
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def shopify_enabled(self) -> bool:
        """Return true when both Shopify credentials are configured."""
        return bool(self.shopify_store and self.shopify_admin_api_access_token)

    @property
    def mailerlite_enabled(self) -> bool:
        """Return true when both MailerLite credentials are configured."""
        return bool(self.mailerlite_api_key and self.mailerlite_group_id)


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
