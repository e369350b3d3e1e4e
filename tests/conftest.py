import pytest
from fastapi.testclient import TestClient

from user_directory.core.config import Settings
from user_directory.core.security import PasswordHasher
from user_directory.core.user_manager import UserManager
from user_directory.db.base import Database
from user_directory.main import create_app

# bcrypt's minimum work factor keeps the suite fast
TEST_ROUNDS = 4


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=TEST_ROUNDS)


@pytest.fixture
def database():
    """A fresh in-memory database per test."""
    db = Database("sqlite://")
    db.open()
    yield db
    db.close()


@pytest.fixture
def session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def manager(session, hasher):
    return UserManager(session, hasher=hasher)


@pytest.fixture
def client():
    app = create_app(Settings(database_url="sqlite://", bcrypt_rounds=TEST_ROUNDS))
    with TestClient(app) as test_client:  # entering the context runs the lifespan
        yield test_client


@pytest.fixture
def ankit():
    return {
        "username": "ankit",
        "email": "ankit@example.com",
        "password": "securepassword",
        "roles": {"isSeller": True},
    }
