"""
Cookie Configuration Provider
Resolves per-cookie options from settings, falling back to the "default" entry.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from signed_cookies.core.config import Settings
from signed_cookies.models.cookie import CookieConfig
from signed_cookies.utils.errors import CookieConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENTRY = "default"


class CookieConfigProvider:
    """
    Looks up cookie options by name.

    ``cookies`` maps cookie names to option dicts (lifetime, path, domain,
    secure, httponly, serialize, encrypted). The "default" entry, if present,
    is layered on top of the global cookie_* settings.
    """

    def __init__(self, cookies: Mapping[str, Mapping[str, Any]], defaults: Optional[Dict[str, Any]] = None):
        self._cookies = {name: dict(options) for name, options in cookies.items()}
        self._defaults = dict(defaults or {})

    @classmethod
    def from_settings(cls, settings: Settings) -> "CookieConfigProvider":
        defaults = {
            "lifetime": settings.cookie_lifetime,
            "path": settings.cookie_path,
            "domain": settings.cookie_domain,
            "secure": settings.cookie_secure,
            "httponly": settings.cookie_httponly,
        }
        return cls(settings.cookies, defaults)

    def build(self, name: str, options: Mapping[str, Any]) -> CookieConfig:
        """Validate ``options`` for ``name`` on top of the global defaults."""
        merged = {**self._defaults, **options, "name": name}
        try:
            return CookieConfig(**merged)
        except ValidationError as e:
            logger.error(f"Invalid configuration for cookie '{name}': {e}")
            raise CookieConfigurationError(f"Invalid configuration for cookie '{name}'.") from e

    def get(self, name: str) -> Optional[CookieConfig]:
        """Return the explicit configuration for ``name``, or None."""
        options = self._cookies.get(name)
        if options is None:
            return None
        return self.build(name, options)

    def load(self, name: str) -> CookieConfig:
        """Return the configuration for ``name``, falling back to the default entry."""
        config = self.get(name)
        if config is None:
            config = self.build(name, self._cookies.get(DEFAULT_ENTRY, {}))
        return config
