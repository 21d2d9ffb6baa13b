from sqlalchemy import Column, Integer, String, ForeignKey, Text
from sqlalchemy.orm import relationship
from coursehub.core.database import Base


class Course(Base):
    """Course owned by exactly one user; only the owner may change or delete it."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    estimated_time = Column(String, nullable=True)
    materials_needed = Column(String, nullable=True)

    owner = relationship("User", back_populates="courses")
