from __future__ import annotations

from http.cookies import SimpleCookie

import pytest

from fitness_api import create_app
from models import storage
from models.user import User


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    storage.close()


@pytest.fixture
def client(app):
    # Cookies are passed explicitly so tests control exactly which token is presented
    return app.test_client(use_cookies=False)


def response_cookies(response) -> dict[str, str]:
    cookies = {}
    for header in response.headers.getlist("Set-Cookie"):
        parsed = SimpleCookie()
        parsed.load(header)
        for key, morsel in parsed.items():
            cookies[key] = morsel.value
    return cookies


def register(client, name="Alice", email="alice@example.com", password="secret123", **extra):
    body = {"name": name, "email": email, "password": password, "height": 170, "weight": 65}
    body.update(extra)
    return client.post("/user/register", json=body)


def login(client, email="alice@example.com", password="secret123"):
    return client.post("/user/login", json={"email": email, "password": password})


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def make_admin(app, email: str) -> None:
    with app.app_context():
        user = storage.get_session().query(User).filter(User.email == email).first()
        user.is_admin = True
        user.save()


@pytest.fixture
def user_token(client):
    register(client)
    return login(client).get_json()["accessToken"]


@pytest.fixture
def user_headers(user_token):
    return bearer(user_token)


@pytest.fixture
def admin_headers(app, client):
    register(client, name="Root", email="root@example.com")
    make_admin(app, "root@example.com")
    token = login(client, email="root@example.com").get_json()["accessToken"]
    return bearer(token)
