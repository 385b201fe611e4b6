import pytest
from fastapi.testclient import TestClient

from authservice.auth.jwt import TokenService
from authservice.auth.passwords import PasswordHasher
from authservice.config import Settings
from authservice.main import create_app


@pytest.fixture
def jwt_secret():
    return "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings(jwt_secret):
    # Lowest bcrypt cost keeps the suite fast
    return Settings(_env_file=None, secret_key=jwt_secret, bcrypt_rounds=4)


@pytest.fixture
def hasher(settings):
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@pytest.fixture
def token_service(settings):
    return TokenService(settings)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)
