"""Shared fixtures: in-memory database, API client, and account helpers."""

import os

# Settings are read at import time, so the environment must be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-recipe-planner"
os.environ["SPOONACULAR_API_KEY"] = ""
os.environ["KROGER_CLIENT_ID"] = ""
os.environ["KROGER_CLIENT_SECRET"] = ""

import pytest
from fastapi.testclient import TestClient

from recipe_planner import kroger_service
from recipe_planner.database import SessionLocal, create_tables, drop_tables
from recipe_planner.main import app

USER_PASSWORD = "secret1"
ADMIN_PASSWORD = "Adm1n!pass"


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""
    create_tables()
    kroger_service._client_token = None
    kroger_service._client_token_expiry = 0
    yield
    drop_tables()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def signup(client, username="janedoe", email=None, first_name="Jane", last_name="Doe", password=USER_PASSWORD):
    """Create a regular account and return its session token."""
    response = client.post(
        "/auth/signup",
        json={
            "firstName": first_name,
            "lastName": last_name,
            "username": username,
            "password": password,
            "email": email or f"{username}@example.com",
        },
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


def admin_signup(client, username="siteadmin", token=None):
    headers = auth_header(token) if token else {}
    response = client.post(
        "/auth/adminSignup",
        json={
            "firstName": "Site",
            "lastName": "Admin",
            "username": username,
            "password": ADMIN_PASSWORD,
            "email": f"{username}@example.com",
        },
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_token(client):
    return signup(client)


@pytest.fixture
def user_headers(user_token):
    return auth_header(user_token)


@pytest.fixture
def admin_headers(client):
    return auth_header(admin_signup(client))
