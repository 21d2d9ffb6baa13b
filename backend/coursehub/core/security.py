import logging
from passlib.context import CryptContext

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    One-way password hashing backed by bcrypt.

    bcrypt generates a random salt on every call and embeds it in the hash,
    so the same password produces different hashes. verify() reads the salt
    back out of the stored hash and compares in constant time.
    """

    def __init__(self, rounds: int = 12):
        # 'deprecated="auto"' lets passlib flag hashes made with outdated settings
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt"""
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a hash using constant-time comparison"""
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Stored value is not a recognizable bcrypt hash
            logger.warning("Stored password hash could not be parsed")
            return False
