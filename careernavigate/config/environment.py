"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Secrets and deployment-specific overrides read from the environment."""

    def __init__(
        self,
        ai_api_key: str,
        ai_base_url: Optional[str] = None,
        serpapi_api_key: Optional[str] = None,
        database_url: Optional[str] = None,
        blob_dir: Optional[str] = None,
        log_level: Optional[str] = None,
    ):
        self.ai_api_key = ai_api_key
        self.ai_base_url = ai_base_url
        self.serpapi_api_key = serpapi_api_key
        self.database_url = database_url or "sqlite:///./data/careernavigate.db"
        self.blob_dir = blob_dir
        self.log_level = log_level

    def __repr__(self) -> str:
        # Keys stay out of reprs that end up in tracebacks and logs
        return (
            f"EnvironmentConfig(ai_base_url={self.ai_base_url!r}, "
            f"serpapi_configured={bool(self.serpapi_api_key)}, "
            f"database_url={self.database_url!r}, blob_dir={self.blob_dir!r}, "
            f"log_level={self.log_level!r})"
        )


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Required environment variables:
    - AI_API_KEY: Bearer token for the chat completion API

    Optional environment variables:
    - AI_BASE_URL: Override of ``ai.base_url`` from the config file
    - SERPAPI_API_KEY: Key for the job search API (job search is unavailable without it)
    - DATABASE_URL: Database URL (default: sqlite:///./data/careernavigate.db)
    - BLOB_DIR: Override of ``storage.blob_dir`` from the config file
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors = []

    ai_api_key = (os.getenv("AI_API_KEY") or "").strip()
    ai_base_url = os.getenv("AI_BASE_URL")
    serpapi_api_key = (os.getenv("SERPAPI_API_KEY") or "").strip() or None
    database_url = os.getenv("DATABASE_URL")
    blob_dir = os.getenv("BLOB_DIR")
    log_level = os.getenv("LOG_LEVEL")

    if not ai_api_key:
        errors.append("Missing required environment variable: AI_API_KEY")

    if ai_base_url is not None:
        ai_base_url = ai_base_url.strip().rstrip("/")
        if not ai_base_url.startswith(("http://", "https://")):
            errors.append(
                f"Invalid AI_BASE_URL: '{ai_base_url}'. Must start with http:// or https://"
            )

    if database_url is not None and not database_url.strip():
        errors.append("DATABASE_URL is set but empty")

    if blob_dir is not None and not blob_dir.strip():
        errors.append("BLOB_DIR is set but empty")

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Ensure AI_API_KEY is set",
                "Set SERPAPI_API_KEY to enable job recommendations",
            ],
        )

    return EnvironmentConfig(
        ai_api_key=ai_api_key,
        ai_base_url=ai_base_url,
        serpapi_api_key=serpapi_api_key,
        database_url=database_url.strip() if database_url else None,
        blob_dir=blob_dir.strip() if blob_dir else None,
        log_level=log_level,
    )
