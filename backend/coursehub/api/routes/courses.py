from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from coursehub.api.dependencies import get_course_repository, get_current_user
from coursehub.models.user import User
from coursehub.services.course_service import course_service
from coursehub.store.repository import CourseRepository

router = APIRouter(prefix="/courses", tags=["courses"])

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CourseCreate(BaseModel):
    owner_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    estimated_time: Optional[str] = None
    materials_needed: Optional[str] = None

    model_config = _camel


class CourseUpdate(BaseModel):
    # The owner cannot be changed; an ownerId in the body is ignored
    title: Optional[str] = None
    description: Optional[str] = None
    estimated_time: Optional[str] = None
    materials_needed: Optional[str] = None

    model_config = _camel


class CourseOwner(BaseModel):
    id: int
    first_name: str
    last_name: str
    email_address: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CourseResponse(BaseModel):
    id: int
    owner_id: int
    title: str
    description: str
    estimated_time: Optional[str]
    materials_needed: Optional[str]
    owner: CourseOwner

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


@router.get("", response_model=List[CourseResponse])
def list_courses(courses: CourseRepository = Depends(get_course_repository)):
    """List every course with a summary of its owner"""
    return [CourseResponse.model_validate(course) for course in course_service.list_courses(courses)]


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(course_id: int, courses: CourseRepository = Depends(get_course_repository)):
    return CourseResponse.model_validate(course_service.get_course(courses, course_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_course(
    course: CourseCreate,
    current_user: User = Depends(get_current_user),
    courses: CourseRepository = Depends(get_course_repository),
):
    """Create a course; responds 201 with a Location header and no body"""
    db_course = course_service.create_course(courses, current_user, course.model_dump())
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/courses/{db_course.id}"},
    )


@router.put("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def update_course(
    course_id: int,
    course_update: CourseUpdate,
    current_user: User = Depends(get_current_user),
    courses: CourseRepository = Depends(get_course_repository),
):
    # exclude_unset: only fields present in the request body are changed
    fields = course_update.model_dump(exclude_unset=True)
    course_service.update_course(courses, current_user, course_id, fields)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_course(
    course_id: int,
    current_user: User = Depends(get_current_user),
    courses: CourseRepository = Depends(get_course_repository),
):
    course_service.delete_course(courses, current_user, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
