import pytest

from app import create_app
from model import db


@pytest.fixture()
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///" + str(tmp_path / "tasks.db"),
        "SESSION_COOKIE_SECURE": False,
        "MAIL_DEFAULT_SENDER": "noreply@example.com",
        "GOOGLE_OAUTH_CLIENT_ID": "test-client-id",
        "GOOGLE_OAUTH_CLIENT_SECRET": "test-client-secret",
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def ctx(app):
    """An app context for calling the repository modules directly."""
    with app.app_context():
        yield app


def signup(client, name="Ann", email="ann@x.com", password="pw123"):
    return client.post("/signup", data={"name": name, "email": email, "password": password})


def login(client, email="ann@x.com", password="pw123"):
    return client.post("/login", data={"email": email, "password": password})


@pytest.fixture()
def ann(client):
    """Client logged in as Ann."""
    signup(client)
    login(client)
    return client
