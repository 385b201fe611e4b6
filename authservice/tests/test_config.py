import pytest
from pydantic import ValidationError

from authservice.config import ConfigError, Settings, load_settings

ENV_NAMES = [
    "JWT_SECRET_KEY",
    "ACCESS_TOKEN_EXPIRE_MINUTES",
    "TOKEN_LEEWAY_SECONDS",
    "BCRYPT_ROUNDS",
    "HOST",
    "PORT",
    "ENVIRONMENT",
    "CORS_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "k" * 40)
    settings = load_settings(_env_file=None)
    assert settings.secret_key == "k" * 40
    assert settings.access_token_expire_minutes == 60
    assert settings.token_leeway_seconds == 0
    assert settings.bcrypt_rounds == 12
    assert settings.port == 3000
    assert settings.host == "0.0.0.0"
    assert settings.cors_origin_list == ["*"]
    assert not settings.is_production


def test_values_from_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "k" * 40)
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")
    monkeypatch.setenv("TOKEN_LEEWAY_SECONDS", "30")
    monkeypatch.setenv("BCRYPT_ROUNDS", "10")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    settings = load_settings(_env_file=None)
    assert settings.access_token_expire_minutes == 15
    assert settings.token_leeway_seconds == 30
    assert settings.bcrypt_rounds == 10
    assert settings.port == 8080
    assert settings.is_production
    assert settings.cors_origin_list == ["https://a.example", "https://b.example"]


def test_values_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("JWT_SECRET_KEY=from-the-dotenv-file-0123456789abcdef\nPORT=4000\nLOG_LEVEL=DEBUG\n")
    settings = load_settings(_env_file=env_file)
    assert settings.secret_key == "from-the-dotenv-file-0123456789abcdef"
    assert settings.port == 4000


def test_keyword_overrides_environment(monkeypatch):
    monkeypatch.setenv("BCRYPT_ROUNDS", "10")
    settings = load_settings(_env_file=None, secret_key="k" * 40, bcrypt_rounds=4)
    assert settings.bcrypt_rounds == 4


def test_missing_secret_in_development_generates_one():
    first = load_settings(_env_file=None)
    second = load_settings(_env_file=None)
    assert first.secret_key
    assert first.secret_key != second.secret_key


def test_missing_secret_in_production_fails(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    with pytest.raises(ConfigError):
        load_settings(_env_file=None)


@pytest.mark.parametrize("name, value", [
    ("ACCESS_TOKEN_EXPIRE_MINUTES", "0"),
    ("ACCESS_TOKEN_EXPIRE_MINUTES", "-5"),
    ("ACCESS_TOKEN_EXPIRE_MINUTES", "soon"),
    ("TOKEN_LEEWAY_SECONDS", "-1"),
    ("BCRYPT_ROUNDS", "3"),
    ("BCRYPT_ROUNDS", "32"),
    ("PORT", "http"),
])
def test_invalid_values_fail(monkeypatch, name, value):
    monkeypatch.setenv("JWT_SECRET_KEY", "k" * 40)
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        load_settings(_env_file=None)


def test_settings_are_immutable():
    settings = Settings(_env_file=None, secret_key="k" * 40)
    with pytest.raises(ValidationError):
        settings.secret_key = "other"
