"""Configuration for the code search client."""

import os

from dotenv import load_dotenv

load_dotenv()


class ClientConfig:
    """Configuration for search client settings."""

    def __init__(self) -> None:
        """Initialize client configuration from environment variables."""
        self.search_backend = os.getenv("CODEGREP_BACKEND", "grepapp").lower()
        self.search_url = os.getenv("CODEGREP_SEARCH_URL", "https://grep.app/api/search")
        self.repo_host = os.getenv("CODEGREP_REPO_HOST", "github.com")

        # Request limits
        self.concurrency = self._get_int_env("CODEGREP_CONCURRENCY", "5")
        if self.concurrency < 1:
            raise ValueError("CODEGREP_CONCURRENCY must be at least 1")
        self.timeout = self._get_float_env("CODEGREP_TIMEOUT", "30")

        self.log_level = os.getenv("CODEGREP_LOG_LEVEL", "WARNING").upper()

    @staticmethod
    def _get_int_env(key: str, default: str) -> int:
        """Get integer environment variable or raise descriptive error."""
        value = os.getenv(key, default)
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Environment variable {key} must be an integer, got {value!r}")

    @staticmethod
    def _get_float_env(key: str, default: str) -> float:
        """Get numeric environment variable or raise descriptive error."""
        value = os.getenv(key, default)
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"Environment variable {key} must be a number, got {value!r}")

    def get_client_kwargs(self) -> dict:
        """Get keyword arguments for the search client factory."""
        return {"base_url": self.search_url, "timeout": self.timeout}
