from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from coursehub.core.config import Settings
from coursehub.core.database import build_engine, build_session_factory
from coursehub.core.security import PasswordHasher


@dataclass
class AppContext:
    """
    Everything a request handler needs from the application: configuration,
    the database handle and the password hasher.

    One context is built per app in create_app() and kept on app.state, so
    separate app instances (e.g. one per test) never share a database.
    """

    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    hasher: PasswordHasher

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        engine = build_engine(settings.DATABASE_URL)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        )


def get_context(request: Request) -> AppContext:
    return request.app.state.context
