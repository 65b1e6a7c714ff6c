from cryptography.fernet import Fernet
import pytest

from signed_cookies.models.cookie import CookieConfig, CookieState
from signed_cookies.services.cookie_context import StarletteCookieContext
from signed_cookies.services.signed_cookie import CookieRegistry
from signed_cookies.utils.encryption import CookieCipher
from signed_cookies.utils.errors import CookieConfigurationError


def test_instance_is_cached_per_name(registry):
    theme = registry.instance("theme")
    assert registry.instance("theme") is theme
    assert registry.instance("cart") is not theme
    assert "theme" in registry
    assert len(registry) == 2


def test_first_access_wins(registry):
    first = registry.instance("theme", {"lifetime": 10})
    second = registry.instance("theme", {"lifetime": 99})
    assert second is first
    assert second.config.lifetime == 10


def test_instance_loads_configured_options(registry):
    assert registry.instance("theme").config.lifetime == 3600
    assert registry.instance("cart").config.serialize is True
    assert registry.instance("unknown").config.lifetime == 600


def test_explicit_config_takes_registry_name(registry):
    cookie = registry.instance("layout", CookieConfig(name="other", lifetime=5))
    assert cookie.name == "layout"
    assert cookie.config.lifetime == 5


def test_instance_reads_cookie_once(provider, signer, cipher):
    context = StarletteCookieContext({"theme": signer.dumps("theme", "dark")})
    registry = CookieRegistry(context, provider, signer, cipher)

    cookie = registry.instance("theme")
    assert cookie.value() == "dark"
    assert cookie.state == CookieState.LOADED

    context.unset_raw_cookie("theme")
    assert registry.instance("theme").value() == "dark"


def test_cipher_unknown_provider():
    cipher = CookieCipher({"default": Fernet.generate_key().decode("ascii")})
    assert cipher.has_provider("default")
    assert not cipher.has_provider("vault")
    with pytest.raises(CookieConfigurationError):
        cipher.encrypt("vault", b"data")


def test_cipher_round_trip(cipher):
    token = cipher.encrypt("vault", b"data")
    assert token != b"data"
    assert cipher.decrypt("vault", token) == b"data"


def test_invalid_mapping_config_raises_configuration_error(registry):
    with pytest.raises(CookieConfigurationError):
        registry.instance("layout", {"lifetime": "forever"})
    assert "layout" not in registry
