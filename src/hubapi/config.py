"""Configuration and environment handling for the HubSpot adapter.

A ``HubSpotConfig`` value is passed to (or read by) a ``Connection``.
The module also keeps a process-wide default instance for callers that
do not want to thread a config through; write it only through
``configure()``/``reset()`` and do so before issuing requests.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.hubapi.com"
FORMS_BASE_URL = "https://forms.hubspot.com"

CONFIG_KEYS = (
    "api_key",
    "use_oauth2",
    "oauth2_access_token",
    "base_url",
    "portal_id",
    "logger",
)


def _discard_logger() -> logging.Logger:
    """Logger that drops everything written to it."""
    logger = logging.getLogger("hubapi.null")
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


DEFAULT_LOGGER = _discard_logger()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in ("1", "true", "yes")


@dataclass
class HubSpotConfig:
    """Central configuration object.

    Exactly one authentication strategy is meant to be active: either
    ``api_key``, or ``use_oauth2`` with ``oauth2_access_token``. The
    combination is validated per request, not here.
    """

    api_key: Optional[str] = None
    use_oauth2: bool = False
    oauth2_access_token: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    portal_id: Optional[str] = None
    logger: logging.Logger = field(default=DEFAULT_LOGGER, repr=False)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "HubSpotConfig":
        """Build a config from ``HUBSPOT_*`` environment variables.

        Args:
            env_file: Optional .env file to load first (defaults to ./.env)
        """
        env_path = env_file or Path.cwd() / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        return cls(
            api_key=os.getenv("HUBSPOT_API_KEY") or None,
            use_oauth2=_env_flag("HUBSPOT_USE_OAUTH2"),
            oauth2_access_token=os.getenv("HUBSPOT_OAUTH2_ACCESS_TOKEN") or None,
            base_url=os.getenv("HUBSPOT_BASE_URL") or DEFAULT_BASE_URL,
            portal_id=os.getenv("HUBSPOT_PORTAL_ID") or None,
        )

    def configure(self, **keys: Any) -> "HubSpotConfig":
        """Replace all settings; keys not given fall back to defaults.

        Raises:
            ConfigurationError: If an unknown key is passed
        """
        from hubapi.connectors.base import ConfigurationError

        unknown = set(keys) - set(CONFIG_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        self.reset()
        for key, value in keys.items():
            if value is None:
                continue
            setattr(self, key, value)
        self.use_oauth2 = bool(self.use_oauth2)
        return self

    def reset(self) -> None:
        """Restore every setting to its default."""
        defaults = HubSpotConfig()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))

    def ensure(self, *keys: str) -> None:
        """Raise ConfigurationError for the first key that is not set."""
        from hubapi.connectors.base import ConfigurationError

        for key in keys:
            if not getattr(self, key, None):
                raise ConfigurationError(f"'{key}' not configured")


# Global config instance
config = HubSpotConfig()


def configure(**keys: Any) -> HubSpotConfig:
    """Configure the process-wide default instance."""
    return config.configure(**keys)


def reset() -> None:
    """Reset the process-wide default instance."""
    config.reset()
