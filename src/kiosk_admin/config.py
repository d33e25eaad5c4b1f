"""
Admin console configuration and settings.
"""

import os
from pathlib import Path
from typing import Optional


class ConfigurationError(Exception):
    pass


def _timeout(value, source: str) -> int:
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{source} must be a whole number of seconds, got {value!r}")
    if seconds <= 0:
        raise ConfigurationError(f"{source} must be positive, got {seconds}")
    return seconds


class AdminConfig:
    """Configuration for talking to the kiosk backend."""

    def __init__(
        self,
        api_base_url: Optional[str] = None,
        token_path: Optional[str] = None,
        timeout_seconds: int = 15,
    ):
        self.api_base_url = (api_base_url or "").rstrip("/")
        self.timeout_seconds = timeout_seconds

        # Default token location if not provided
        if token_path is None:
            self.token_path = str(Path.home() / ".kiosk_admin" / "token")
        else:
            self.token_path = token_path

    @classmethod
    def from_env(cls) -> "AdminConfig":
        """Create config from environment variables."""
        return cls(
            api_base_url=os.getenv("KIOSK_ADMIN_API_BASE_URL"),
            token_path=os.getenv("KIOSK_ADMIN_TOKEN_PATH"),
            timeout_seconds=_timeout(os.getenv("KIOSK_ADMIN_TIMEOUT", "15"), "KIOSK_ADMIN_TIMEOUT"),
        )

    @classmethod
    def from_config_file(cls, config_path: str = "kiosk_admin.conf") -> "AdminConfig":
        """Create config from configuration file."""
        config = {}
        if os.path.exists(config_path):
            with open(config_path, "r") as f:
                for lineno, line in enumerate(f, 1):
                    line = line.strip()
                    if line and not line.startswith("#"):
                        if "=" not in line:
                            raise ConfigurationError(f"{config_path}:{lineno}: expected 'key = value', got {line!r}")
                        key, value = line.split("=", 1)
                        config[key.strip()] = value.strip()

        return cls(
            api_base_url=config.get("api_base_url") or os.getenv("KIOSK_ADMIN_API_BASE_URL"),
            token_path=config.get("token_path"),
            timeout_seconds=_timeout(config.get("timeout_seconds", "15"), "timeout_seconds"),
        )
