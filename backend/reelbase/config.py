"""
Reelbase Backend — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from pathlib import Path
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

PACKAGE_ROOT = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development against a
    MongoDB instance on localhost. Attributes are grouped by concern.
    """

    # ── Document Store ────────────────────────────────────────────────────
    # What: Which DocumentStore implementation the app builds at startup
    # mongo:  MongoDB through the motor async driver
    # memory: In-process dictionaries (development, tests, demos)
    store_backend: Literal["mongo", "memory"] = Field(default="mongo")

    # What: MongoDB connection string (mongodb:// or mongodb+srv:// for Atlas)
    mongodb_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL",
    )
    mongodb_database: str = Field(default="reelbase")

    # What: How long the driver waits to find a usable server before failing a call
    mongodb_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    movies_collection: str = Field(default="movies")
    employees_collection: str = Field(default="emps")

    # ── Startup Connection Probe ──────────────────────────────────────────
    # What: Tenacity retry settings for the startup ping only.
    # Request handlers never retry store calls.
    store_connect_attempts: int = Field(default=5, ge=1, le=20)
    store_retry_min_wait: int = Field(default=1, ge=0, le=30)
    store_retry_max_wait: int = Field(default=8, ge=1, le=120)

    # ── Templates & Static Assets ─────────────────────────────────────────
    templates_dir: str = Field(default=str(PACKAGE_ROOT / "templates"))
    static_dir: str = Field(default=str(PACKAGE_ROOT / "static"))

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (see cors_origins_list)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGODB_URL and mongodb_url both work
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Checks each required field and raises ValueError with guidance.
        """
        errors = []
        if self.store_backend == "mongo" and not self.mongodb_url.strip():
            errors.append(
                "MONGODB_URL is not set. "
                "Use mongodb://host:27017 or an Atlas mongodb+srv:// URL."
            )
        if not self.mongodb_database.strip():
            errors.append("MONGODB_DATABASE must not be empty.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
