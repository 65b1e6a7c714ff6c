from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from signed_cookies.dependencies import signed_cookie
from signed_cookies.middleware.cookie_middleware import SignedCookieMiddleware
from signed_cookies.services.signed_cookie import SignedCookie


def build_app(settings=None):
    app = FastAPI()
    if settings is not None:
        app.add_middleware(SignedCookieMiddleware, settings=settings)

    @app.get("/theme")
    async def get_theme(cookie: SignedCookie = Depends(signed_cookie("theme"))):
        return {"theme": cookie.value("light")}

    @app.post("/theme/{value}")
    async def set_theme(value: str, cookie: SignedCookie = Depends(signed_cookie("theme"))):
        return {"written": cookie.set(value)}

    return app


def test_dependency_reads_and_writes_cookie(settings):
    client = TestClient(build_app(settings), base_url="http://shop.example.com")

    assert client.get("/theme").json() == {"theme": "light"}
    assert client.post("/theme/dark").json() == {"written": True}
    assert client.get("/theme").json() == {"theme": "dark"}


def test_dependency_requires_middleware():
    client = TestClient(build_app(), raise_server_exceptions=False)
    assert client.get("/theme").status_code == 500
