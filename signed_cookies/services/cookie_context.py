"""
Cookie Context
Request/response cookie primitives that signed cookies read from and write to.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class BaseCookieContext(ABC):
    """
    Abstract host interface for one HTTP exchange.

    ``host`` is the request host name (without port), used as the cookie
    domain when a cookie does not configure one.

    Lifetimes are relative seconds: 0 is a session cookie, a positive value
    expires that many seconds from now, a negative value is already expired.
    """

    host: Optional[str] = None

    @abstractmethod
    def get_raw_cookie(self, name: str) -> Optional[str]:
        """Return the raw request cookie, or None if it was not sent."""

    @abstractmethod
    def set_cookie(
        self,
        name: str,
        value: str,
        lifetime: int,
        path: str,
        domain: Optional[str],
        secure: bool,
        httponly: bool,
    ) -> bool:
        """Queue a Set-Cookie. Returns False when the cookie can no longer be sent."""

    @abstractmethod
    def unset_raw_cookie(self, name: str) -> None:
        """Forget the request-side value of a cookie."""


class StarletteCookieContext(BaseCookieContext):
    """
    Cookie context backed by a Starlette request and response.

    Request cookies are copied on creation. Writes update that copy, so later
    reads in the same request see them, and are queued until ``apply`` copies
    them onto the outgoing response. After that the context is committed and
    further writes are refused.
    """

    def __init__(
        self,
        cookies: Optional[Mapping[str, str]] = None,
        samesite: Optional[str] = "lax",
        host: Optional[str] = None,
    ):
        self.host = host or None
        self._cookies: Dict[str, str] = dict(cookies or {})
        self.samesite = samesite
        self.pending: Dict[str, Dict[str, Any]] = {}
        self.committed = False

    @classmethod
    def from_request(cls, request: Request, samesite: Optional[str] = "lax") -> "StarletteCookieContext":
        return cls(request.cookies, samesite=samesite, host=request.url.hostname)

    def get_raw_cookie(self, name: str) -> Optional[str]:
        return self._cookies.get(name)

    def set_cookie(
        self,
        name: str,
        value: str,
        lifetime: int,
        path: str,
        domain: Optional[str],
        secure: bool,
        httponly: bool,
    ) -> bool:
        if self.committed:
            logger.warning(f"Cookie '{name}' written after the response was sent; ignoring")
            return False

        try:
            # Starlette encodes headers as latin-1
            name.encode("latin-1")
            value.encode("latin-1")
        except UnicodeEncodeError:
            logger.warning(f"Cookie '{name}' contains characters that cannot be sent in a header; ignoring")
            return False

        if lifetime > 0:
            max_age, expires = lifetime, lifetime
        elif lifetime < 0:
            max_age, expires = 0, lifetime
        else:
            max_age, expires = None, None

        # One Set-Cookie per name: the last write wins
        self.pending[name] = {
            "value": value,
            "max_age": max_age,
            "expires": expires,
            "path": path,
            "domain": domain,
            "secure": secure,
            "httponly": httponly,
            "samesite": self.samesite,
        }

        if lifetime < 0:
            self._cookies.pop(name, None)
        else:
            self._cookies[name] = value
        return True

    def unset_raw_cookie(self, name: str) -> None:
        self._cookies.pop(name, None)

    def apply(self, response: Response) -> int:
        """Copy queued cookies onto ``response`` and commit. Returns how many were written."""
        for name, options in self.pending.items():
            response.set_cookie(name, **options)
        written = len(self.pending)
        self.pending.clear()
        self.committed = True
        return written
