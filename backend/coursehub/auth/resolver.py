import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from coursehub.core.security import PasswordHasher
from coursehub.models.user import User
from coursehub.store.repository import UserRepository

logger = logging.getLogger(__name__)


class DenialReason(str, Enum):
    CREDENTIALS_MISSING = "credentials missing"
    IDENTITY_NOT_FOUND = "identity not found"
    BAD_CREDENTIAL = "bad credential"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolve(): exactly one of user / reason is set"""

    user: Optional[User] = None
    reason: Optional[DenialReason] = None

    @property
    def authenticated(self) -> bool:
        return self.user is not None


class IdentityResolver:
    """
    Turns an (email, password) pair into a User.

    Each failure is logged with its own reason so operators can tell them
    apart. Callers must not expose the reason to the client.
    """

    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    def resolve(self, identifier: Optional[str], secret: Optional[str]) -> Resolution:
        if not identifier:
            logger.warning("Authentication failure: no username supplied")
            return Resolution(reason=DenialReason.CREDENTIALS_MISSING)

        user = self.users.find_by_email(identifier)
        if user is None:
            logger.warning(f"Authentication failure: user not found for username: {identifier}")
            return Resolution(reason=DenialReason.IDENTITY_NOT_FOUND)

        if not self.hasher.verify(secret or "", user.password):
            logger.warning(f"Authentication failure: bad password for username: {user.email_address}")
            return Resolution(reason=DenialReason.BAD_CREDENTIAL)

        logger.info(f"Authentication successful for username: {user.email_address}")
        return Resolution(user=user)
