from datetime import timedelta

from jose import jwt

from app.shared.core.security import get_security_manager
from conftest import API, PASSWORD, bearer


def test_signup_returns_user_and_token(client, notifier):
    response = client.post(f"{API}/auth/signup", json={
        "name": "Jane Doe",
        "username": "jane",
        "email": "Jane@Example.com",
        "password": PASSWORD,
        "phoneNumber": "+15551234567",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["statusCode"] == 201
    assert body["message"] == "User created successfully"

    user = body["data"]["user"]
    assert user["email"] == "jane@example.com"
    assert user["phoneNumber"] == "+15551234567"
    assert user["roleId"]["slug"] == "user"
    assert "password" not in user
    assert "passwordHash" not in user
    assert body["data"]["token"]
    assert "userCreated" in notifier.names()


def test_signup_duplicate_username_conflicts(client, signup):
    signup("jane")
    response = client.post(f"{API}/auth/signup", json={
        "name": "Other Jane",
        "username": "jane",
        "email": "other@example.com",
        "password": PASSWORD,
    })
    assert response.status_code == 409
    assert response.json()["message"] == "Username already exists"


def test_signup_duplicate_email_is_case_insensitive(client, signup):
    signup("jane", email="jane@example.com")
    response = client.post(f"{API}/auth/signup", json={
        "name": "Jane Two",
        "username": "jane2",
        "email": "JANE@example.com",
        "password": PASSWORD,
    })
    assert response.status_code == 409
    assert response.json()["message"] == "Email already exists"


def test_signup_validation_errors_are_listed(client):
    response = client.post(f"{API}/auth/signup", json={"name": "X", "username": "Bad Name", "email": "nope"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    fields = {problem["field"] for problem in body["error"]}
    assert {"username", "email", "password"} <= fields


def test_signin_by_username_and_email(client, signup, notifier):
    signup("jane", email="jane@example.com")

    by_username = client.post(f"{API}/auth/signin", json={"usernameOrEmail": "jane", "password": PASSWORD})
    assert by_username.status_code == 200
    assert by_username.json()["message"] == "User signed in successfully"

    by_email = client.post(f"{API}/auth/signin", json={"usernameOrEmail": "JANE@example.com", "password": PASSWORD})
    assert by_email.status_code == 200
    assert by_email.json()["data"]["user"]["username"] == "jane"
    assert "userSignedIn" in notifier.names()


def test_signin_unknown_user_and_wrong_password(client, signup):
    signup("jane")

    unknown = client.post(f"{API}/auth/signin", json={"usernameOrEmail": "ghost", "password": PASSWORD})
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "User not found"

    wrong = client.post(f"{API}/auth/signin", json={"usernameOrEmail": "jane", "password": "not-it-at-all"})
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Invalid password"


def test_oauth_provisions_then_signs_in(client):
    first = client.post(f"{API}/auth/oauth", json={"email": "sam@example.com", "username": "Sam Smith 77"})
    assert first.status_code == 201
    user = first.json()["data"]["user"]
    assert user["name"] == "Sam Smith"
    assert user["username"].startswith("samsmith")
    assert len(user["username"]) == len("samsmith") + 4

    second = client.post(f"{API}/auth/oauth", json={"email": "sam@example.com", "username": "Sam Smith 77"})
    assert second.status_code == 200
    assert second.json()["data"]["user"]["id"] == user["id"]


def test_me_requires_a_token(client, user):
    missing = client.get(f"{API}/auth/me")
    assert missing.status_code == 401
    assert missing.json()["message"] == "Unauthorized, no token provided"

    invalid = client.get(f"{API}/auth/me", headers=bearer("garbage"))
    assert invalid.status_code == 401

    me = client.get(f"{API}/auth/me", headers=user.headers)
    assert me.status_code == 200
    assert me.json()["data"]["id"] == user.id


def test_bootstrapped_admin_can_sign_in(admin):
    assert admin.data["roleId"]["slug"] == "admin"


def test_expired_token_envelope(client, user):
    token = get_security_manager().create_access_token(user.id, expires_delta=timedelta(seconds=-5))
    response = client.get(f"{API}/auth/me", headers=bearer(token))

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 401
    assert body["message"] == "Unauthorized, token expired"


def test_invalid_token_envelope(client, user):
    forged = jwt.encode({"sub": user.id, "type": "access"}, "not-our-secret", algorithm="HS256")

    for token in ("garbage", forged):
        response = client.get(f"{API}/auth/me", headers=bearer(token))
        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["message"] == "Unauthorized, invalid token"


def test_token_of_deleted_user_is_not_found(client, user):
    assert client.delete(f"{API}/users/{user.id}", headers=user.headers).status_code == 200

    response = client.get(f"{API}/auth/me", headers=user.headers)
    assert response.status_code == 404
    assert response.json()["success"] is False
    assert response.json()["message"] == "User not found"
