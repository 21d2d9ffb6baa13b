import logging
from typing import Iterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from coursehub.auth.credentials import extract_credentials
from coursehub.auth.resolver import IdentityResolver
from coursehub.core.context import AppContext, get_context
from coursehub.core.security import PasswordHasher
from coursehub.models.user import User
from coursehub.store.repository import CourseRepository, UserRepository

logger = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE = "Access Denied"


def get_db(context: AppContext = Depends(get_context)) -> Iterator[Session]:
    """
    Dependency for getting a database session.

    Each request gets its own session, closed when the request completes
    even if the handler raised.
    """
    db = context.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_hasher(context: AppContext = Depends(get_context)) -> PasswordHasher:
    return context.hasher


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_course_repository(db: Session = Depends(get_db)) -> CourseRepository:
    return CourseRepository(db)


def get_current_user(
    request: Request,
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_hasher),
) -> User:
    """
    Authenticate the request from its Basic credentials.

    Used as a dependency on every protected route. Every call checks the
    credentials again; nothing is remembered between requests. Missing
    credentials, an unknown email and a wrong password all produce the same
    401 so the response does not reveal which emails are registered.
    """
    # Reusable exception so every failure looks identical to the client
    access_denied = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=ACCESS_DENIED_MESSAGE,
        headers={"WWW-Authenticate": "Basic"},
    )

    credentials = extract_credentials(request)
    if credentials is None:
        logger.warning("Authentication failure: Auth header not found")
        raise access_denied

    resolution = IdentityResolver(users, hasher).resolve(credentials.username, credentials.password)
    if not resolution.authenticated:
        raise access_denied

    # Request-scoped; gone when the request ends
    request.state.current_user = resolution.user
    return resolution.user
