"""
Cookie Encryption
Named Fernet providers used to encrypt cookie payloads.
"""

import logging
from typing import Dict, Mapping

from cryptography.fernet import Fernet

from signed_cookies.utils.errors import CookieConfigurationError, ErrorMessages

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "default"


class CookieCipher:
    """
    Symmetric encryption keyed by provider id.

    Each provider id maps to a urlsafe base64 Fernet key. Tokens produced by
    Fernet are urlsafe base64 as well, so they can travel in a cookie as is.
    """

    def __init__(self, keys: Mapping[str, str]):
        self._keys = dict(keys)
        self._fernets: Dict[str, Fernet] = {}

    def _fernet(self, provider_id: str) -> Fernet:
        fernet = self._fernets.get(provider_id)
        if fernet is None:
            key = self._keys.get(provider_id)
            if not key:
                raise CookieConfigurationError(
                    ErrorMessages.UNKNOWN_ENCRYPTION_PROVIDER.format(provider=provider_id)
                )
            fernet = Fernet(key.encode("ascii") if isinstance(key, str) else key)
            self._fernets[provider_id] = fernet
            logger.debug(f"Loaded encryption provider '{provider_id}'")
        return fernet

    def encrypt(self, provider_id: str, data: bytes) -> bytes:
        return self._fernet(provider_id).encrypt(data)

    def decrypt(self, provider_id: str, token: bytes) -> bytes:
        """Raises ``cryptography.fernet.InvalidToken`` when the token was not made with this key."""
        return self._fernet(provider_id).decrypt(token)

    def has_provider(self, provider_id: str) -> bool:
        return bool(self._keys.get(provider_id))
