"""
Cookie models: per-cookie configuration, encoding strategy and API payloads.
"""
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from signed_cookies.utils.encryption import DEFAULT_PROVIDER


class CookieStrategy(str, Enum):
    """How a cookie value is turned into its payload before signing."""
    PLAIN = "plain"
    SERIALIZED = "serialized"
    ENCRYPTED = "encrypted"
    SERIALIZED_AND_ENCRYPTED = "serialized_and_encrypted"

    @property
    def serializes(self) -> bool:
        # Encrypted payloads are always serialized first
        return self is not CookieStrategy.PLAIN

    @property
    def encrypts(self) -> bool:
        return self in (CookieStrategy.ENCRYPTED, CookieStrategy.SERIALIZED_AND_ENCRYPTED)


class CookieState(str, Enum):
    """Outcome of the read performed when a cookie accessor is created."""
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    EMPTY = "empty"
    PURGED = "purged"


class CookieConfig(BaseModel):
    """
    Options for a single named cookie.

    ``encrypted`` takes a provider id, or True for the default provider.
    ``domain`` left as None means the request host.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Cookie name")
    lifetime: int = Field(0, description="Seconds before the cookie expires, 0 for a session cookie")
    path: str = Field("/", description="Path the cookie is available to")
    domain: Optional[str] = Field(None, description="Domain the cookie is available to")
    secure: bool = Field(False, description="Only transmit over HTTPS")
    httponly: bool = Field(True, description="Hide the cookie from JavaScript")
    serialize: bool = Field(False, description="Store the value as JSON")
    encrypted: Optional[str] = Field(None, description="Encryption provider id")

    @field_validator("encrypted", mode="before")
    @classmethod
    def normalize_encrypted(cls, v: Union[bool, str, None]) -> Optional[str]:
        if v is True:
            return DEFAULT_PROVIDER
        if v is False or v is None or v == "":
            return None
        return str(v)

    @property
    def encrypt_provider_id(self) -> Optional[str]:
        return self.encrypted

    @property
    def strategy(self) -> CookieStrategy:
        if self.encrypted and self.serialize:
            return CookieStrategy.SERIALIZED_AND_ENCRYPTED
        if self.encrypted:
            return CookieStrategy.ENCRYPTED
        if self.serialize:
            return CookieStrategy.SERIALIZED
        return CookieStrategy.PLAIN


class CookieValueResponse(BaseModel):
    """Current value of a signed cookie."""
    name: str = Field(..., description="Cookie name")
    value: Any = Field(None, description="Decoded cookie value")
    loaded: bool = Field(False, description="Whether the cookie passed signature verification")
    state: CookieState = Field(CookieState.UNINITIALIZED, description="Outcome of the cookie read")


class SetCookieRequest(BaseModel):
    """Value to store in a signed cookie."""
    value: Any = Field(..., description="Value to store; must be a string unless the cookie serializes")
    lifetime: Optional[int] = Field(None, description="Override the configured lifetime in seconds")
