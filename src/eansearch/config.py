"""Configuration management for eansearch.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_BASE_URL = "https://api.ean-search.org/api"


@dataclass
class Config:
    """Application configuration."""

    # API access
    token: Optional[str]
    base_url: str
    timeout: int  # seconds

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            token=os.environ.get("EAN_SEARCH_API_TOKEN") or None,
            base_url=os.environ.get("EAN_SEARCH_BASE_URL", DEFAULT_BASE_URL),
            timeout=int(os.environ.get("EAN_SEARCH_TIMEOUT", "10")),
            log_level=os.environ.get("EAN_SEARCH_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if not self.token:
            errors.append("EAN_SEARCH_API_TOKEN is not set")
        if self.timeout <= 0:
            errors.append(f"Timeout must be positive, got {self.timeout}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
