
import hmac, hashlib
from typing import Union

SEPARATOR = "~"


class CookieSigner:
    """
    HMAC-SHA256 signer for cookie values, keyed with the app secret_key.
    Not encryption, just tamper detection.

    Signatures are lowercase hex digests, so every signature has the same
    length (``signature_length``) and never contains the ``~`` separator.
    Readers rely on that to find the split between signature and payload.
    """
    def __init__(self, secret: Union[str, bytes]) -> None:
        self.secret = secret.encode("utf-8") if isinstance(secret, str) else secret

    def _mac(self, name: str, payload: str) -> str:
        # The name is length-prefixed so ("ab", "c") and ("a", "bc") sign differently
        message = f"{len(name)}:{name}{payload}".encode("utf-8")
        return hmac.new(self.secret, message, hashlib.sha256).hexdigest()

    @property
    def signature_length(self) -> int:
        return hashlib.sha256().digest_size * 2

    def sign(self, name: str, payload: str) -> str:
        return self._mac(name, payload or "")

    def verify(self, name: str, payload: str, signature: str) -> bool:
        return hmac.compare_digest(self.sign(name, payload).encode("ascii"), signature.encode("utf-8"))

    def dumps(self, name: str, payload: str) -> str:
        """Build the on-wire ``signature~payload`` string."""
        return f"{self.sign(name, payload)}{SEPARATOR}{payload}"
