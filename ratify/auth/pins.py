"""PIN hashing with PBKDF2-HMAC-SHA256"""
import base64
import hmac
import secrets
from typing import Optional
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

SCHEME = "pbkdf2_sha256"


class PinHasher:
    def __init__(self, iterations: int = 200000):
        self.iterations = iterations

    @staticmethod
    def _derive(pin: str, salt: str, iterations: int) -> str:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt.encode(),
            iterations=iterations,
        )
        return base64.b64encode(kdf.derive(pin.encode())).decode()

    def hash(self, pin: str, salt: Optional[str] = None) -> str:
        """Encode as scheme$iterations$salt$digest"""
        if salt is None:
            salt = secrets.token_hex(16)
        digest = self._derive(pin, salt, self.iterations)
        return f"{SCHEME}${self.iterations}${salt}${digest}"

    def verify(self, pin: str, encoded: str) -> bool:
        try:
            scheme, iterations, salt, digest = encoded.split("$")
            rounds = int(iterations)
        except ValueError:
            return False
        if scheme != SCHEME or rounds < 1:
            return False
        return hmac.compare_digest(digest, self._derive(pin, salt, rounds))
