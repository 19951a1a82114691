"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults match the values the service has
always used (MongoDB on ``localhost:27017``, database ``Centivo``,
HTTP port ``3000``), so an unconfigured process behaves exactly like
the original deployment.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Centivo Users API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))

    # HTTP listener.
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # MongoDB connection.  ``server_selection_timeout_ms`` bounds how long
    # the startup ping waits for a reachable server before giving up.
    mongo_url: str = field(default_factory=lambda: os.getenv("MONGO_URL", "mongodb://localhost:27017"))
    database_name: str = field(default_factory=lambda: os.getenv("MONGO_DB_NAME", "Centivo"))
    users_collection: str = field(default_factory=lambda: os.getenv("MONGO_USERS_COLLECTION", "users"))
    server_selection_timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))
    )

    # User lookup.  Only users strictly older than ``minimum_age`` are
    # returned.  A ``query_timeout_seconds`` of 0 disables the bound.
    minimum_age: int = field(default_factory=lambda: int(os.getenv("USERS_MINIMUM_AGE", "21")))
    query_timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("USERS_QUERY_TIMEOUT_SECONDS", "5.0"))
    )

    # When enabled, a lookup with no match answers 404 instead of
    # ``{"user": null}`` with status 200.
    not_found_as_404: bool = field(default_factory=lambda: _env_bool("USERS_NOT_FOUND_AS_404"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Tests build their own
# ``Settings()`` after patching the environment.
settings = Settings()
