from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from coursehub.core.database import Base


class User(Base):
    """
    User model representing an account that can authenticate.

    Email is the login identifier and must be unique.
    Passwords are stored as bcrypt hashes (never plaintext).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    # UNIQUE is the source of truth for email uniqueness; the signup
    # pre-check only exists to give a friendlier message
    email_address = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)

    # Deleting a user deletes the courses they own
    courses = relationship(
        "Course",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
