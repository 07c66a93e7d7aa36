"""Unit tests for AuthConfig."""

from datetime import timedelta

import pytest

from nutrilens.core.config import Settings
from nutrilens.domain.entities import AuthConfig


def test_defaults():
    config = AuthConfig(access_secret="a", refresh_secret="b")

    assert config.access_ttl == timedelta(hours=1)
    assert config.refresh_ttl == timedelta(days=7)
    assert config.min_password_length == 8
    assert config.require_uppercase is False
    assert config.require_digit is False
    assert config.require_special_char is False
    assert config.access_ttl_seconds == 3600


def test_secrets_must_differ():
    with pytest.raises(ValueError):
        AuthConfig(access_secret="same", refresh_secret="same")


def test_secrets_required():
    with pytest.raises(ValueError):
        AuthConfig(access_secret="", refresh_secret="b")


def test_hash_cost_must_be_positive():
    with pytest.raises(ValueError):
        AuthConfig(access_secret="a", refresh_secret="b", hash_cost=0)


def test_is_immutable():
    config = AuthConfig(access_secret="a", refresh_secret="b")

    with pytest.raises(AttributeError):
        config.hash_cost = 5


def test_from_settings():
    settings = Settings(
        jwt_secret="access",
        jwt_refresh_secret="refresh",
        access_token_ttl_seconds=900,
        refresh_token_ttl_seconds=86400,
        password_min_length=10,
        password_require_uppercase=True,
        password_hash_cost=2,
    )

    config = AuthConfig.from_settings(settings)

    assert config.access_secret == "access"
    assert config.refresh_secret == "refresh"
    assert config.access_ttl == timedelta(minutes=15)
    assert config.refresh_ttl == timedelta(days=1)
    assert config.min_password_length == 10
    assert config.require_uppercase is True
    assert config.hash_cost == 2
