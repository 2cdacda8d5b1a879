"""Pytest configuration and fixtures."""

import pytest

from charity_backend.app_factory import create_app
from charity_backend.config import Config
from charity_backend.init_db import db as _db


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"


@pytest.fixture
def app():
    """A fresh application on its own in-memory database."""
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """POST /users with sensible defaults for every field."""

    def _register(name="alice", email="alice@example.com", password="secret1", **extra):
        return client.post(
            "/users",
            json={"name": name, "email": email, "password": password, **extra},
        )

    return _register


@pytest.fixture
def user(register):
    """Register a user through the API and return its JSON."""
    response = register()
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def auth_headers(user):
    return AuthHeaders({"Authorization": user["accessToken"]}, user_id=user["_id"])
