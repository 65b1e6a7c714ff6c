import pytest
from cryptography.fernet import Fernet
from fastapi.testclient import TestClient

from main import create_app
from signed_cookies.core.config import Settings
from signed_cookies.core.cookie_config import CookieConfigProvider
from signed_cookies.services.cookie_context import StarletteCookieContext
from signed_cookies.services.signed_cookie import CookieRegistry
from signed_cookies.utils.cookies import CookieSigner
from signed_cookies.utils.encryption import CookieCipher

SECRET = "test-secret"
BASE_URL = "http://shop.example.com"

DEFAULT_KEY = Fernet.generate_key().decode("ascii")
VAULT_KEY = Fernet.generate_key().decode("ascii")

COOKIES = {
    "default": {"lifetime": 600},
    "theme": {"lifetime": 3600},
    "cart": {"serialize": True, "lifetime": 3600},
    "token": {"encrypted": True},
    "profile": {"serialize": True, "encrypted": "vault"},
}


@pytest.fixture
def signer():
    return CookieSigner(SECRET)


@pytest.fixture
def cipher():
    return CookieCipher({"default": DEFAULT_KEY, "vault": VAULT_KEY})


@pytest.fixture
def provider():
    return CookieConfigProvider(COOKIES, {"path": "/", "httponly": True})


@pytest.fixture
def context():
    return StarletteCookieContext()


@pytest.fixture
def registry(context, provider, signer, cipher):
    return CookieRegistry(context, provider, signer, cipher)


@pytest.fixture
def settings():
    return Settings(
        secret_key=SECRET,
        encryption_keys={"default": DEFAULT_KEY, "vault": VAULT_KEY},
        cookies=COOKIES,
    )


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings), base_url=BASE_URL)
