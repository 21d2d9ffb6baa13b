import logging
from typing import Any, Dict, List

from fastapi import HTTPException, status

from coursehub.auth.ownership import Decision, authorize_course_owner, authorize_owner_id
from coursehub.core.errors import ConflictFailure, FieldError, ValidationFailure
from coursehub.models.course import Course
from coursehub.models.user import User
from coursehub.store.repository import CourseRepository

logger = logging.getLogger(__name__)

COURSE_NOT_FOUND_MESSAGE = "Course not found"


def _bad_request(exc: ValidationFailure) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_dict())


def _forbidden(action: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=f"You are not authorized to {action}",
    )


class CourseService:
    @staticmethod
    def list_courses(courses: CourseRepository) -> List[Course]:
        return courses.find_all(include=["owner"])

    @staticmethod
    def get_course(courses: CourseRepository, course_id: int) -> Course:
        course = courses.find_by_pk(course_id, include=["owner"])
        if course is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=COURSE_NOT_FOUND_MESSAGE)
        return course

    @staticmethod
    def create_course(courses: CourseRepository, current_user: User, fields: Dict[str, Any]) -> Course:
        """Create a course owned by the caller; ownerId must be the caller's own id"""
        owner_id = fields.get("owner_id")
        if owner_id is not None and authorize_owner_id(current_user, owner_id) is Decision.DENY:
            logger.warning(f"User {current_user.id} tried to create a course for user {owner_id}")
            raise _forbidden("create a course for another user")

        try:
            course = courses.create(fields)
        except ValidationFailure as exc:
            raise _bad_request(exc)
        except ConflictFailure:
            raise _bad_request(ValidationFailure([FieldError("ownerId", "Please enter a valid user ID")]))

        logger.info(f"User {current_user.id} created course {course.id}")
        return course

    @staticmethod
    def update_course(courses: CourseRepository, current_user: User, course_id: int, fields: Dict[str, Any]) -> Course:
        """Apply the supplied fields to a course; fields not supplied are left alone"""
        course = courses.find_by_pk(course_id)
        if course is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=COURSE_NOT_FOUND_MESSAGE)

        if authorize_course_owner(current_user, course) is Decision.DENY:
            logger.warning(f"User {current_user.id} tried to edit course {course_id}")
            raise _forbidden("edit this course")

        try:
            course = courses.update(course, fields)
        except ValidationFailure as exc:
            raise _bad_request(exc)

        logger.info(f"User {current_user.id} updated course {course_id}")
        return course

    @staticmethod
    def delete_course(courses: CourseRepository, current_user: User, course_id: int) -> None:
        course = courses.find_by_pk(course_id)
        if course is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=COURSE_NOT_FOUND_MESSAGE)

        if authorize_course_owner(current_user, course) is Decision.DENY:
            logger.warning(f"User {current_user.id} tried to delete course {course_id}")
            raise _forbidden("delete this course")

        courses.destroy(course)
        logger.info(f"User {current_user.id} deleted course {course_id}")


course_service = CourseService()
