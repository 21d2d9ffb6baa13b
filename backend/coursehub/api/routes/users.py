from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from coursehub.api.dependencies import get_current_user, get_hasher, get_user_repository
from coursehub.core.security import PasswordHasher
from coursehub.models.user import User
from coursehub.services.user_service import user_service
from coursehub.store.repository import UserRepository

router = APIRouter(prefix="/users", tags=["users"])


class UserCreate(BaseModel):
    # Every field is optional here so missing values reach the model
    # validation and come back with its field messages
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email_address: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


@router.get("", response_model=List[UserResponse])
def list_users(current_user: User = Depends(get_current_user)):
    """Return the authenticated user (never the password hash)"""
    return [UserResponse.model_validate(current_user)]


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_user(
    user: UserCreate,
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_hasher),
):
    """Sign up; responds 201 with a Location header and no body"""
    db_user = user_service.create_user(users, hasher, user.model_dump())
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/users/{db_user.id}"},
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Delete the authenticated user's own account"""
    user_service.delete_user(users, current_user, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
