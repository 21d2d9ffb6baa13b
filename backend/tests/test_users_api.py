import base64

import pytest

from coursehub.models.course import Course
from coursehub.models.user import User

ACCESS_DENIED = {"message": "Access Denied"}


def _signup_payload(**overrides):
    payload = {
        "firstName": "Carol",
        "lastName": "White",
        "emailAddress": "carol@example.com",
        "password": "pa55word",
    }
    payload.update(overrides)
    return payload


def test_signup_returns_location_and_no_body(client):
    response = client.post("/api/users", json=_signup_payload())

    assert response.status_code == 201
    assert response.headers["location"].startswith("/api/users/")
    assert response.content == b""


def test_signup_stores_only_a_hash(client, db):
    client.post("/api/users", json=_signup_payload())

    stored = db.query(User).filter_by(email_address="carol@example.com").one()
    assert stored.password != "pa55word"
    assert stored.password.startswith("$2")


def test_signup_then_authenticate(client):
    client.post("/api/users", json=_signup_payload())

    ok = client.get("/api/users", auth=("carol@example.com", "pa55word"))
    wrong = client.get("/api/users", auth=("carol@example.com", "not-it"))

    assert ok.status_code == 200
    assert wrong.status_code == 401


def test_duplicate_email_is_rejected_without_insert(client, alice, db):
    response = client.post("/api/users", json=_signup_payload(emailAddress="alice@example.com"))

    assert response.status_code == 400
    assert response.json() == {"message": "Email address is already registered"}
    assert db.query(User).filter_by(email_address="alice@example.com").count() == 1


def test_signup_missing_fields_reports_each_field(client, db):
    response = client.post("/api/users", json={"emailAddress": "dave@example.com"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert {error["field"] for error in body["errors"]} == {"firstName", "lastName", "password"}
    assert db.query(User).count() == 0


def test_signup_invalid_email(client):
    response = client.post("/api/users", json=_signup_payload(emailAddress="not-an-email"))

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "emailAddress", "message": "Please enter a valid email address"}
    ]


def test_signup_wrong_field_type_is_bad_request(client):
    response = client.post("/api/users", json=_signup_payload(firstName=["Carol"]))

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "firstName"


def test_list_users_returns_only_the_caller(client, alice, bob):
    response = client.get("/api/users", auth=alice[1])

    assert response.status_code == 200
    assert response.json() == [
        {"id": alice[0], "firstName": "Alice", "lastName": "Smith", "emailAddress": "alice@example.com"}
    ]


def test_list_users_requires_authentication(client):
    response = client.get("/api/users")

    assert response.status_code == 401
    assert response.json() == ACCESS_DENIED
    assert response.headers["www-authenticate"] == "Basic"


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer token"},
        {"Authorization": "Basic %%%"},
        {"Authorization": "Basic " + base64.b64encode(b"nobody@example.com:correct-horse").decode()},
        {"Authorization": "Basic " + base64.b64encode(b"alice@example.com:wrong").decode()},
        {"Authorization": "Basic " + base64.b64encode(b":correct-horse").decode()},
    ],
    ids=["none", "bearer", "garbage", "unknown-user", "wrong-password", "empty-username"],
)
def test_every_authentication_failure_looks_the_same(client, alice, headers):
    response = client.get("/api/users", headers=headers)

    assert response.status_code == 401
    assert response.json() == ACCESS_DENIED


def test_user_can_delete_own_account(client, alice, db):
    user_id, auth = alice

    response = client.delete(f"/api/users/{user_id}", auth=auth)

    assert response.status_code == 204
    assert db.query(User).count() == 0
    # Credentials of a deleted account no longer authenticate
    assert client.get("/api/users", auth=auth).status_code == 401


def test_user_cannot_delete_someone_else(client, alice, bob, db):
    response = client.delete(f"/api/users/{bob[0]}", auth=alice[1])

    assert response.status_code == 403
    assert response.json() == {"message": "You are not authorized to delete this user"}
    assert db.query(User).filter_by(id=bob[0]).count() == 1


def test_delete_unknown_user_is_not_found(client, alice):
    response = client.delete("/api/users/9999", auth=alice[1])

    assert response.status_code == 404


def test_delete_user_requires_authentication(client, alice, db):
    response = client.delete(f"/api/users/{alice[0]}")

    assert response.status_code == 401
    assert db.query(User).count() == 1


def test_deleting_user_removes_their_courses(client, alice, bob, create_course, db):
    create_course(alice)
    create_course(bob)

    client.delete(f"/api/users/{alice[0]}", auth=alice[1])

    assert [course.owner_id for course in db.query(Course).all()] == [bob[0]]


def test_delete_out_of_range_user_id_is_not_found(client, alice):
    response = client.delete("/api/users/99999999999999999999", auth=alice[1])

    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}
