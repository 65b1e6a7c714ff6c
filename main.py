# main.py
import os
import logging
from typing import Optional
from fastapi import FastAPI

from signed_cookies.core.config import Settings, settings
from signed_cookies.core.exception_handlers import setup_exception_handlers
from signed_cookies.middleware.cookie_middleware import SignedCookieMiddleware
from signed_cookies.middleware.logging_middleware import RequestLoggingMiddleware
from signed_cookies.models.common import HealthResponse
from signed_cookies.routers import cookies

logger = logging.getLogger("uvicorn.error")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Signed, optionally encrypted, single-cookie accessors",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=app_settings.debug,
    )

    setup_exception_handlers(app)

    # Cookies are flushed inside the logging middleware so it can count them
    app.add_middleware(SignedCookieMiddleware, settings=app_settings)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(cookies.router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(app_name=app_settings.app_name, version=app_settings.app_version, debug=app_settings.debug)

    if app_settings.secret_key == "your-secret-key-change-in-production":
        logger.warning("[Cookies] SECRET_KEY is not set; cookie signatures use the development key")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        log_level="debug" if settings.debug else "info",
    )
