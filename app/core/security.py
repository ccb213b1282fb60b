import secrets
from passlib.context import CryptContext
from passlib.exc import PasswordSizeError, PasswordValueError

from app.core.exceptions import ValidationError


class CredentialVerifier:
    """Salted bcrypt hashing with a fixed cost factor.

    Holds no per-request state, so one instance is shared by the whole app.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        """Hash a password for storage"""
        try:
            return self._context.hash(plaintext)
        except (PasswordSizeError, PasswordValueError) as e:
            # Over 4096 bytes, or contains a NUL byte
            raise ValidationError("Invalid password") from e

    def verify(self, digest: str, plaintext: str) -> bool:
        """Check a password against a stored digest"""
        if not digest:
            return False
        try:
            return self._context.verify(plaintext, digest)
        except ValueError:
            # Stored value is not a recognisable bcrypt digest
            return False


def generate_session_token() -> str:
    """Generate an opaque, URL-safe session token"""
    return secrets.token_urlsafe(32)
