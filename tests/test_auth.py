"""Tests for signup, login and profile routes."""

import pytest

from conftest import ADMIN_PASSWORD, USER_PASSWORD, admin_signup, auth_header, signup
from recipe_planner.models import Role, User
from recipe_planner.security import verify_token


def signup_body(**overrides):
    body = {
        "firstName": "Jane",
        "lastName": "Doe",
        "username": "janedoe",
        "password": USER_PASSWORD,
        "email": "jane@example.com",
    }
    body.update(overrides)
    return body


class TestSignup:
    def test_signup_stores_hashed_password_and_returns_token(self, client, db):
        response = client.post("/auth/signup", json=signup_body())
        assert response.status_code == 200
        assert response.json()["message"] == "Sign up successful"

        user = db.query(User).filter(User.username == "janedoe").one()
        assert user.password_hash != USER_PASSWORD
        assert user.role == Role.USER

        identity = verify_token(response.json()["token"])
        assert identity.id == user.id
        assert identity.role == "user"
        assert identity.claims["firstName"] == "Jane"

    def test_jane_doe_signup_token_carries_username(self, client):
        response = client.post(
            "/auth/signup",
            json={
                "firstName": "Jane",
                "lastName": "Doe",
                "username": "janedoe",
                "password": "secretpw",
                "email": "jane@example.com",
            },
        )
        assert response.status_code == 200
        assert verify_token(response.json()["token"]).claims["username"] == "janedoe"

    def test_duplicate_username_is_rejected_without_new_row(self, client, db):
        client.post("/auth/signup", json=signup_body())
        response = client.post("/auth/signup", json=signup_body(email="other@example.com"))
        assert response.status_code == 400
        assert response.json()["message"] == "Username already exists"
        assert db.query(User).count() == 1

    def test_duplicate_email_is_rejected(self, client):
        client.post("/auth/signup", json=signup_body())
        response = client.post("/auth/signup", json=signup_body(username="janedoe2"))
        assert response.status_code == 400
        assert response.json()["message"] == "Email already exists"

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"email": None}, "All fields are required"),
            ({"username": "jd"}, "Username must be between 3 and 20 characters"),
            ({"password": "abc"}, "Password must be at least 5 characters long"),
            ({"firstName": "J"}, "First name must be between 2 and 50 characters"),
            ({"lastName": "D0e"}, "Last name must contain only alphabets"),
            ({"email": "not-an-email"}, "Email is not valid"),
        ],
    )
    def test_invalid_signup(self, client, overrides, message):
        response = client.post("/auth/signup", json=signup_body(**overrides))
        assert response.status_code == 400
        assert response.json()["message"] == message


class TestAdminSignup:
    def test_first_admin_can_sign_up_anonymously(self, client):
        identity = verify_token(admin_signup(client))
        assert identity.is_admin

    def test_second_admin_requires_admin_token(self, client):
        first = admin_signup(client)
        response = client.post(
            "/auth/adminSignup",
            json=signup_body(username="another", email="another@example.com", password=ADMIN_PASSWORD),
        )
        assert response.status_code == 403

        second = admin_signup(client, username="another", token=first)
        assert verify_token(second).is_admin

    def test_regular_user_cannot_create_admin(self, client):
        admin_signup(client)
        response = client.post(
            "/auth/adminSignup",
            json=signup_body(username="sneaky", email="sneaky@example.com", password=ADMIN_PASSWORD),
            headers=auth_header(signup(client)),
        )
        assert response.status_code == 403

    def test_admin_password_needs_complexity(self, client):
        response = client.post(
            "/auth/adminSignup",
            json=signup_body(username="weakadmin", password="password1"),
        )
        assert response.status_code == 400
        assert "special character" in response.json()["message"]


class TestLogin:
    def test_login_returns_token(self, client):
        signup(client)
        response = client.post("/auth/login", json={"username": "janedoe", "password": USER_PASSWORD})
        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert verify_token(response.json()["token"]).claims["username"] == "janedoe"

    def test_wrong_password(self, client):
        signup(client)
        response = client.post("/auth/login", json={"username": "janedoe", "password": "nope!"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid username or password"

    def test_unknown_user(self, client):
        response = client.post("/auth/login", json={"username": "ghost", "password": "whatever"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid username or password"

    def test_missing_fields(self, client):
        response = client.post("/auth/login", json={"username": "janedoe"})
        assert response.status_code == 400
        assert response.json()["message"] == "Username and password are required"


class TestProfile:
    def test_get_profile(self, client, user_headers):
        response = client.get("/auth/profile", headers=user_headers)
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["username"] == "janedoe"
        assert user["firstName"] == "Jane"
        assert "password_hash" not in user

    def test_profile_requires_token(self, client):
        response = client.get("/auth/profile")
        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized: Invalid token."

    def test_update_profile(self, client, user_headers):
        response = client.put(
            "/auth/updateProfile",
            json={"firstName": "Janet", "location": "Cincinnati, OH"},
            headers=user_headers,
        )
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["firstName"] == "Janet"
        assert user["lastName"] == "Doe"
        assert user["location"] == "Cincinnati, OH"

    def test_update_profile_email_taken(self, client, user_headers):
        signup(client, username="johndoe", email="john@example.com", first_name="John")
        response = client.put("/auth/profile", json={"email": "john@example.com"}, headers=user_headers)
        assert response.status_code == 409

    def test_deleted_user_token_gets_404(self, client, db, user_headers):
        db.query(User).delete()
        db.commit()
        response = client.get("/auth/profile", headers=user_headers)
        assert response.status_code == 404
