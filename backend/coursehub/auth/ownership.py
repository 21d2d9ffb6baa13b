"""Ownership checks for mutating operations.

These only answer allow/deny. Turning a deny into a 403 is the caller's job,
which keeps "unknown caller" (401) and "wrong caller" (403) apart.
"""

from enum import Enum
from typing import Optional

from coursehub.models.course import Course
from coursehub.models.user import User


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


def authorize_user_self(current_user: User, target: User) -> Decision:
    # A user account is owned by whoever holds its email address
    if current_user.email_address == target.email_address:
        return Decision.ALLOW
    return Decision.DENY


def authorize_course_owner(current_user: User, course: Course) -> Decision:
    return authorize_owner_id(current_user, course.owner_id)


def authorize_owner_id(current_user: User, owner_id: Optional[int]) -> Decision:
    if owner_id is not None and current_user.id == owner_id:
        return Decision.ALLOW
    return Decision.DENY
