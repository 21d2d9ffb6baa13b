"""
Repository layer between the services and SQLAlchemy.

Services never call session.add/commit themselves: every write goes through
a Repository, which validates first and translates database errors into the
three store failure types from coursehub.core.errors.
"""

import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from coursehub.core.errors import ConflictFailure, FieldError, UnexpectedFault, ValidationFailure
from coursehub.models.course import Course
from coursehub.models.user import User
from coursehub.models.validation import validate_course, validate_user

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
Validator = Callable[[Dict[str, Any]], List[FieldError]]

_MIN_PK = -(2**63)
_MAX_PK = 2**63 - 1


class Repository(Generic[ModelT]):
    model: Type[ModelT]
    validator: Validator

    def __init__(self, db: Session):
        self.db = db

    def find_one(self, **filters) -> Optional[ModelT]:
        return self.db.query(self.model).filter_by(**filters).first()

    def find_all(self, filters: Optional[Dict[str, Any]] = None, include: Iterable[str] = ()) -> List[ModelT]:
        """All records matching filters, eager-loading the named relationships"""
        query = self.db.query(self.model).options(*self._eager(include))
        if filters:
            query = query.filter_by(**filters)
        return query.order_by(self.model.id).all()

    def find_by_pk(self, pk: int, include: Iterable[str] = ()) -> Optional[ModelT]:
        # Ids outside the 64-bit INTEGER range cannot exist; the driver would raise on them
        if not _MIN_PK <= pk <= _MAX_PK:
            return None
        return self.db.get(self.model, pk, options=self._eager(include))

    def create(self, fields: Dict[str, Any]) -> ModelT:
        errors = self.validator(fields)
        if errors:
            raise ValidationFailure(errors)

        record = self.model(**fields)
        self.db.add(record)
        self._commit()
        self.db.refresh(record)
        return record

    def update(self, record: ModelT, fields: Dict[str, Any]) -> ModelT:
        """Apply fields to record; validation sees the record as it would be after the update"""
        merged = {column: getattr(record, column) for column in self._columns()}
        merged.update(fields)
        errors = self.validator(merged)
        if errors:
            raise ValidationFailure(errors)

        for column, value in fields.items():
            setattr(record, column, value)
        self._commit()
        self.db.refresh(record)
        return record

    def destroy(self, record: ModelT) -> None:
        self.db.delete(record)
        self._commit()

    def _eager(self, include: Iterable[str]) -> list:
        return [selectinload(getattr(self.model, name)) for name in include]

    def _columns(self) -> List[str]:
        return list(self.model.__table__.columns.keys())

    def _commit(self) -> None:
        # Roll back on every failure so the session never holds a partial write
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info(f"Constraint rejected write to {self.model.__tablename__}: {exc.orig}")
            raise ConflictFailure(f"Constraint violation on {self.model.__tablename__}") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise UnexpectedFault(f"Database error on {self.model.__tablename__}") from exc


class UserRepository(Repository[User]):
    model = User
    validator = staticmethod(validate_user)

    def find_by_email(self, email_address: str) -> Optional[User]:
        return self.find_one(email_address=email_address)


class CourseRepository(Repository[Course]):
    model = Course
    validator = staticmethod(validate_course)
