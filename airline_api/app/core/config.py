"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
application and the test-suite can run without any environment set
up.  In a production deployment you should override these via
environment variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass, field
from typing import Dict


def _default_pages() -> Dict[str, str]:
    """Destinations returned by commands, keyed by a logical page name."""
    return {
        "index": os.getenv("INDEX_PAGE", "/index"),
        "admin": os.getenv("ADMIN_PAGE", "/admin"),
        "user": os.getenv("USER_PAGE", "/user"),
        "confirm": os.getenv("CONFIRM_PAGE", "/user/confirm"),
        "error": os.getenv("ERROR_PAGE", "/error"),
    }


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Airline Booking API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  If a relative path is provided,
    # it will be resolved relative to the project root by the ``db``
    # module.
    database_url: str = os.getenv("DATABASE_URL", "airline.db")

    # Seconds a connection waits on a locked database before giving up.
    db_timeout: float = float(os.getenv("DB_TIMEOUT", "5.0"))

    # Upper bound on ticket number regeneration when a candidate is
    # already taken.
    ticket_number_max_attempts: int = int(os.getenv("TICKET_NUMBER_MAX_ATTEMPTS", "20"))

    pages: Dict[str, str] = field(default_factory=_default_pages)

    def page(self, name: str) -> str:
        """Return the destination for a logical page name."""
        return self.pages[name]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at import time, environment variables should be set
# before importing this module.
settings = Settings()
