from typing import Callable

from fastapi import Request

from signed_cookies.services.signed_cookie import CookieRegistry, SignedCookie


def get_cookie_registry(request: Request) -> CookieRegistry:
    registry = getattr(request.state, "cookies", None)
    if registry is None:
        raise RuntimeError("SignedCookieMiddleware is not installed")
    return registry


def signed_cookie(name: str) -> Callable[[Request], SignedCookie]:
    """
    Dependency factory for a fixed cookie name.

        @router.get("/theme")
        async def theme(cookie: SignedCookie = Depends(signed_cookie("theme"))):
            return {"theme": cookie.value("light")}
    """
    def dependency(request: Request) -> SignedCookie:
        return get_cookie_registry(request).instance(name)

    return dependency
