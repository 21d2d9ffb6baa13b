import logging
from typing import Any, Dict

from fastapi import HTTPException, status

from coursehub.auth.ownership import Decision, authorize_user_self
from coursehub.core.errors import ConflictFailure, ValidationFailure
from coursehub.core.security import PasswordHasher
from coursehub.models.user import User
from coursehub.store.repository import UserRepository

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email address is already registered"
USER_NOT_FOUND_MESSAGE = "User not found"


class UserService:
    @staticmethod
    def create_user(users: UserRepository, hasher: PasswordHasher, fields: Dict[str, Any]) -> User:
        """
        Sign up a new user.

        The password is hashed before anything is stored. The email pre-check
        gives a clear message in the common case; two signups racing with the
        same email are caught by the UNIQUE constraint and reported the same way.
        """
        fields = dict(fields)
        password = fields.get("password")
        # Blank passwords are left as-is so validation reports them
        if isinstance(password, str) and password.strip():
            fields["password"] = hasher.hash(password)

        email = fields.get("email_address")
        if email and users.find_by_email(email) is not None:
            logger.info(f"Signup rejected, email already registered: {email}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_EMAIL_MESSAGE)

        try:
            user = users.create(fields)
        except ValidationFailure as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_dict())
        except ConflictFailure:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_EMAIL_MESSAGE)

        logger.info(f"Created user {user.id} ({user.email_address})")
        return user

    @staticmethod
    def delete_user(users: UserRepository, current_user: User, user_id: int) -> None:
        """Delete a user account; only the account holder may do this"""
        user = users.find_by_pk(user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND_MESSAGE)

        if authorize_user_self(current_user, user) is Decision.DENY:
            logger.warning(f"User {current_user.id} tried to delete user {user_id}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You are not authorized to delete this user",
            )

        users.destroy(user)
        logger.info(f"Deleted user {user_id}")


user_service = UserService()
