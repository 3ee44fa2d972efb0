"""
Shared fixtures.

Every API test gets a fresh application with its own in-memory
repositories, so tests never see each other's users, sessions or keys.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from launchpad.api.dependencies import (
    get_api_key_repository,
    get_authenticator,
    get_session_repository,
    get_user_repository,
)
from launchpad.main import create_app
from launchpad.models.user import Role, User
from launchpad.repository import InMemoryApiKeyRepository, InMemorySessionRepository, InMemoryUserRepository
from launchpad.services import Authenticator, StaticTokenVerifier

FEDERATION_TOKEN = "test-provider-token"


@pytest.fixture
def app():
    """Application wired to fresh repositories."""
    application = create_app()

    user_repo = InMemoryUserRepository()
    session_repo = InMemorySessionRepository()
    api_key_repo = InMemoryApiKeyRepository()
    authenticator = Authenticator(user_repo, session_repo, api_key_repo, StaticTokenVerifier([FEDERATION_TOKEN]))

    application.dependency_overrides[get_user_repository] = lambda: user_repo
    application.dependency_overrides[get_session_repository] = lambda: session_repo
    application.dependency_overrides[get_api_key_repository] = lambda: api_key_repo
    application.dependency_overrides[get_authenticator] = lambda: authenticator

    application.state.test_repos = {
        "users": user_repo,
        "sessions": session_repo,
        "api_keys": api_key_repo,
    }
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def route_table(app):
    """The application's route table."""
    return app.state.router


def federate(client: TestClient, email: str = "ada@example.com", session_key: str = None) -> dict:
    """Sign in through the federation endpoint; the cookie lands on the client."""
    response = client.post(
        "/auth/federate",
        json={
            "sessionKey": session_key or uuid.uuid4().hex,
            "email": email,
            "firstName": "Ada",
            "lastName": "Lovelace",
        },
        headers={"Authorization": f"Bearer {FEDERATION_TOKEN}"},
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def signed_in(client):
    """Client with a live session cookie, plus the federate response body."""
    body = federate(client)
    return client, body


def make_user(role: Role = Role.BASE, user_id: str = None, email: str = None) -> User:
    user_id = user_id or str(uuid.uuid4())
    return User(
        user_id=user_id,
        email=email or f"{user_id}@example.com",
        first_name="Test",
        last_name="User",
        role=role,
    )


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def sign_in():
    """The federate helper, for tests that need more than one session."""
    return federate


@pytest.fixture
def federation_token():
    return FEDERATION_TOKEN
