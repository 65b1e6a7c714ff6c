"""
Signed Cookie Middleware
Gives every request its own cookie context and registry, and flushes
queued cookies onto the response.
"""

import logging
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from signed_cookies.core.config import Settings, settings as default_settings
from signed_cookies.core.cookie_config import CookieConfigProvider
from signed_cookies.services.cookie_context import StarletteCookieContext
from signed_cookies.services.signed_cookie import CookieRegistry
from signed_cookies.utils.cookies import CookieSigner
from signed_cookies.utils.encryption import CookieCipher

logger = logging.getLogger(__name__)


class SignedCookieMiddleware(BaseHTTPMiddleware):
    """
    Attaches ``request.state.cookies`` (a CookieRegistry) for the duration of a request.
    The signer, cipher and config provider are built once and shared by all requests.
    """

    def __init__(self, app, settings: Optional[Settings] = None):
        super().__init__(app)
        self.settings = settings or default_settings
        self.provider = CookieConfigProvider.from_settings(self.settings)
        self.signer = CookieSigner(self.settings.secret_key)
        self.cipher = CookieCipher(self.settings.encryption_keys)

    async def dispatch(self, request: Request, call_next):
        context = StarletteCookieContext.from_request(request, samesite=self.settings.cookie_samesite)
        request.state.cookie_context = context
        request.state.cookies = CookieRegistry(context, self.provider, self.signer, self.cipher)

        response = await call_next(request)

        written = context.apply(response)
        if written:
            logger.debug(f"Wrote {written} cookie(s) for {request.method} {request.url.path}")
        return response
