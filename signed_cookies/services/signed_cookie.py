"""
Signed Cookie Service
Reads, verifies, decodes and writes single named cookies stored as ``signature~payload``.
"""

import logging
from urllib.parse import quote, unquote
from typing import Any, Dict, Mapping, Optional, Union

from cryptography.fernet import InvalidToken

from signed_cookies.core.cookie_config import CookieConfigProvider
from signed_cookies.models.cookie import CookieConfig, CookieState
from signed_cookies.services.cookie_context import BaseCookieContext
from signed_cookies.utils.cookies import SEPARATOR, CookieSigner
from signed_cookies.utils.encryption import CookieCipher
from signed_cookies.utils.errors import CookieConfigurationError, CookieReadError
from signed_cookies.utils.serialization import deserialize, serialize

logger = logging.getLogger(__name__)

# Lifetime used to expire a cookie on delete (one day in the past)
EXPIRED_LIFETIME = -86400

# Plain payloads keep printable ASCII that needs no cookie quoting; everything else is percent-encoded
PLAIN_SAFE_CHARS = "".join(chr(c) for c in range(0x21, 0x7f) if chr(c) not in "%\"\\,;")


class SignedCookie:
    """
    Accessor for one named, signed cookie.

    The cookie is read once, when the accessor is created:

    * no cookie, or no ``~`` right after the signature: treated as absent
    * signature mismatch: treated as absent and deleted
    * valid signature: decrypted and/or deserialized according to the config

    Use ``CookieRegistry.instance`` rather than creating accessors directly so
    that each cookie name is read once per request.
    """

    def __init__(
        self,
        config: CookieConfig,
        context: BaseCookieContext,
        signer: CookieSigner,
        cipher: Optional[CookieCipher] = None,
    ):
        self.config = config
        self.name = config.name
        self.strategy = config.strategy
        self.domain = config.domain if config.domain is not None else context.host
        self._context = context
        self._signer = signer
        self._cipher = cipher
        self._value: Any = None
        self._loaded = False
        self.state = CookieState.UNINITIALIZED

        if self.strategy.encrypts and cipher is None:
            raise CookieConfigurationError(f"Cookie '{self.name}' is encrypted but no cipher is configured.")

        self._read()

    def __repr__(self) -> str:
        return f"SignedCookie(name={self.name!r}, state={self.state.value}, strategy={self.strategy.value})"

    def _read(self) -> None:
        raw = self._context.get_raw_cookie(self.name)
        if raw is None:
            self._value = None
            self.state = CookieState.EMPTY
            return

        split = len(self._signer.sign(self.name, ""))
        if len(raw) <= split or raw[split] != SEPARATOR:
            logger.debug(f"Cookie '{self.name}' is not signed; ignoring it")
            self.state = CookieState.EMPTY
            return

        signature, payload = raw[:split], raw[split + 1:]
        if not self._signer.verify(self.name, payload, signature):
            logger.warning(f"Cookie '{self.name}' has an invalid signature; deleting it")
            self.delete()
            return

        try:
            value = self._decode(payload)
        except (InvalidToken, ValueError, TypeError) as e:
            # Only the exception type is logged; the payload and message stay out of the logs
            logger.warning(f"Cookie '{self.name}' could not be decoded ({type(e).__name__})")
            raise CookieReadError(self.name) from e

        self._value = value
        self._loaded = True
        self.state = CookieState.LOADED

    def _decode(self, payload: str) -> Any:
        if self.strategy.encrypts:
            payload = self._cipher.decrypt(self.config.encrypt_provider_id, payload.encode("ascii")).decode("utf-8")
        if self.strategy.serializes:
            return deserialize(payload)
        return unquote(payload)

    def render(self, value: Any) -> str:
        """Turn ``value`` into the unsigned payload written to the cookie."""
        if self.strategy.serializes:
            payload = serialize(value)
        else:
            payload = quote("" if value is None else str(value), safe=PLAIN_SAFE_CHARS)

        if self.strategy.encrypts:
            payload = self._cipher.encrypt(self.config.encrypt_provider_id, payload.encode("utf-8")).decode("ascii")
        return payload

    def value(self, default: Any = None) -> Any:
        """
        Return the cookie value, or ``default`` when there is none.

        A stored None counts as no value: a serialized cookie holding JSON
        ``null`` is loaded, yet still returns ``default``.
        """
        return self._value if self._value is not None else default

    def loaded(self) -> bool:
        """Whether the cookie was read and passed signature verification."""
        return self._loaded

    def set(self, value: Any, lifetime: Optional[int] = None) -> bool:
        """
        Sign and write ``value``.

        Args:
            value: Cookie value; converted to a string unless the cookie serializes
            lifetime: Seconds until expiry, defaults to the configured lifetime

        Returns:
            Whether the host accepted the cookie
        """
        self._value = value
        payload = self.render(value)

        if lifetime is None:
            lifetime = self.config.lifetime

        written = self._context.set_cookie(
            self.name,
            self._signer.dumps(self.name, payload),
            lifetime,
            self.config.path,
            self.domain,
            self.config.secure,
            self.config.httponly,
        )
        logger.debug(f"Set cookie '{self.name}' (lifetime={lifetime}, written={written})")
        return written

    def delete(self) -> bool:
        """Expire the cookie. The configured lifetime is not used."""
        self._context.unset_raw_cookie(self.name)
        self._value = None
        self._loaded = False
        self.state = CookieState.PURGED

        return self._context.set_cookie(
            self.name,
            "",
            EXPIRED_LIFETIME,
            self.config.path,
            self.domain,
            self.config.secure,
            self.config.httponly,
        )


class CookieRegistry:
    """
    Per-request table of signed cookie accessors, one per cookie name.

    The first ``instance`` call for a name creates and reads the cookie; later
    calls return the same accessor and ignore any config they pass.
    """

    def __init__(
        self,
        context: BaseCookieContext,
        provider: CookieConfigProvider,
        signer: CookieSigner,
        cipher: Optional[CookieCipher] = None,
    ):
        self.context = context
        self.provider = provider
        self.signer = signer
        self.cipher = cipher
        self._instances: Dict[str, SignedCookie] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def instance(
        self,
        name: str,
        config: Optional[Union[CookieConfig, Mapping[str, Any]]] = None,
    ) -> SignedCookie:
        cookie = self._instances.get(name)
        if cookie is not None:
            return cookie

        if config is None:
            config = self.provider.load(name)
        elif isinstance(config, CookieConfig):
            config = config.model_copy(update={"name": name})
        else:
            config = self.provider.build(name, config)

        cookie = SignedCookie(config, self.context, self.signer, self.cipher)
        self._instances[name] = cookie
        return cookie
