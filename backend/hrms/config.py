"""
HRMS Backend — Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   The connection string, database name and listening port used to be
       literals baked into startup; they are read from the environment here.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py; passed explicitly into Database.connect().
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default that points at a local MongoDB.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host:port/[dbname]
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/fiber-hrms",
        description="MongoDB connection string",
    )
    mongo_db_name: str = Field(default="fiber-hrms")
    mongo_collection: str = Field(default="employees")

    # What: Upper bound (seconds) for server selection during startup
    # Startup aborts when the server cannot be reached within this window
    mongo_connect_timeout: int = Field(default=30, ge=1, le=300)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

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

    @property
    def mongo_connect_timeout_ms(self) -> int:
        """Connect timeout in the unit pymongo expects for serverSelectionTimeoutMS."""
        return self.mongo_connect_timeout * 1000

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGO_URI and mongo_uri both work
    }


# Singleton instance — imported by main.py as the default configuration
settings = Settings()
