from coursehub.auth.ownership import (
    Decision,
    authorize_course_owner,
    authorize_owner_id,
    authorize_user_self,
)
from coursehub.models.course import Course
from coursehub.models.user import User

alice = User(id=1, email_address="alice@example.com")
bob = User(id=2, email_address="bob@example.com")


def test_user_may_act_on_own_account():
    assert authorize_user_self(alice, User(id=1, email_address="alice@example.com")) is Decision.ALLOW


def test_user_may_not_act_on_another_account():
    assert authorize_user_self(alice, bob) is Decision.DENY


def test_course_owner_is_allowed():
    assert authorize_course_owner(alice, Course(id=10, owner_id=1)) is Decision.ALLOW


def test_non_owner_is_denied():
    assert authorize_course_owner(bob, Course(id=10, owner_id=1)) is Decision.DENY


def test_missing_owner_id_is_denied():
    assert authorize_owner_id(alice, None) is Decision.DENY
