"""Configuration management using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # CMS settings
    blog_api_url: str = Field(
        default="http://localhost:1337", description="Base URL of the headless CMS API"
    )
    request_timeout: float = Field(default=30.0, description="CMS request timeout in seconds")
    max_retries: int = Field(
        default=0, description="Retries on network errors (0 disables retrying)"
    )
    cache_ttl_seconds: int = Field(
        default=300, description="Lifetime of cached CMS responses (0 disables caching)"
    )

    # Public site settings
    site_url: str = Field(
        default="http://localhost:8000", description="Public base URL of this site"
    )
    site_name: str = Field(default="たついよサイクル", description="Site title")
    site_description: str = Field(default="自転車ブログ", description="Default meta description")
    image_proxy_url: str = Field(
        default="", description="Image optimizer endpoint, e.g. https://example.com/_image"
    )

    # Webhook
    revalidate_token: str = Field(default="", description="Shared secret for the CMS webhook")

    # Page composition
    page_size: int = Field(default=10, description="Posts per listing page")
    sidebar_recent_count: int = Field(default=5, description="Recent posts shown in the sidebar")
    sitemap_page_size: int = Field(default=1000, description="Posts fetched for the sitemap")
    featured_post_slug: str = Field(default="", description="Slug of the post pinned in the sidebar")

    log_level: str = Field(default="INFO", description="Logging level name")
    log_file: Path | None = Field(default=None, description="Optional file for DEBUG logs")

    @property
    def has_revalidate_token(self) -> bool:
        """Check if the webhook secret is configured."""
        return bool(self.revalidate_token)

    @property
    def public_base_url(self) -> str:
        """Site URL without a trailing slash."""
        return self.site_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
