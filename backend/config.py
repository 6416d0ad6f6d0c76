"""
Sitecraft configuration — all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os

_DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-4o",
}


class Settings:
    """Application settings from environment variables."""

    # Database (empty = in-memory project storage)
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")

    # AI Providers
    AI_PROVIDER: str = os.environ.get("AI_PROVIDER", "anthropic").lower()
    ANTHROPIC_API_KEY: str = os.environ.get("ANTHROPIC_API_KEY", "")
    OPENAI_API_KEY: str = os.environ.get("OPENAI_API_KEY", "")

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    @property
    def CONTENT_MODEL(self) -> str:
        return os.environ.get("CONTENT_MODEL") or _DEFAULT_MODELS.get(self.AI_PROVIDER, _DEFAULT_MODELS["anthropic"])

    @property
    def COLOR_MODEL(self) -> str:
        return os.environ.get("COLOR_MODEL") or self.CONTENT_MODEL

    @property
    def EXPORT_BASE_URL(self) -> str:
        url = os.environ.get("EXPORT_BASE_URL")
        if url:
            return url.rstrip("/")
        return "http://localhost:8000/api/export" if self.ENVIRONMENT == "development" else "https://sitecraft.app/api/export"

    @property
    def USE_MEMORY_STORAGE(self) -> bool:
        return not self.DATABASE_URL

    # Content generation limits
    CONTENT_MAX_TOKENS: int = 500
    COLOR_MAX_TOKENS: int = 200


# Singleton instance
settings = Settings()

# Validate required settings (skip in test mode)
_testing = os.environ.get("TESTING", "").lower() == "true"

if settings.AI_PROVIDER not in _DEFAULT_MODELS:
    raise RuntimeError(f"AI_PROVIDER must be one of {sorted(_DEFAULT_MODELS)}, got {settings.AI_PROVIDER!r}")

if not _testing and settings.ENVIRONMENT == "production":
    if not settings.DATABASE_URL:
        raise RuntimeError("DATABASE_URL environment variable is required")
    if settings.AI_PROVIDER == "anthropic" and not settings.ANTHROPIC_API_KEY:
        raise RuntimeError("ANTHROPIC_API_KEY environment variable is required")
    if settings.AI_PROVIDER == "openai" and not settings.OPENAI_API_KEY:
        raise RuntimeError("OPENAI_API_KEY environment variable is required")
