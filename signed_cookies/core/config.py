"""
Application Configuration
Centralized configuration management with proper typing and validation.
"""

from pydantic_settings import BaseSettings
from typing import Any, Dict, Optional
import os
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings with proper validation and defaults."""

    # Application settings
    app_name: str = os.getenv("APP_NAME", "Signed Cookies")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"

    # Signing key shared by every cookie signature
    secret_key: str = os.getenv("SECRET_KEY", "your-secret-key-change-in-production")

    # Global cookie defaults, used when the "default" cookie entry leaves an option out
    cookie_lifetime: int = int(os.getenv("COOKIE_LIFETIME", "0"))
    cookie_path: str = os.getenv("COOKIE_PATH", "/")
    cookie_domain: Optional[str] = os.getenv("COOKIE_DOMAIN") or None
    cookie_secure: bool = os.getenv("COOKIE_SECURE", "False").lower() == "true"
    cookie_httponly: bool = os.getenv("COOKIE_HTTPONLY", "True").lower() == "true"
    cookie_samesite: str = os.getenv("COOKIE_SAMESITE", "lax")

    # Encryption providers: provider id -> Fernet key (ENCRYPTION_KEYS as JSON)
    encryption_keys: Dict[str, str] = {}

    # Per-cookie options keyed by cookie name (COOKIES as JSON), e.g.
    # {"theme": {"lifetime": 3600}, "cart": {"serialize": true, "encrypted": true}}
    cookies: Dict[str, Dict[str, Any]] = {}

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
