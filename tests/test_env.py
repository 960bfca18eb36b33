"""Configuration and client construction tests."""

from unittest.mock import MagicMock

import pytest

import utils.supabase_client as supabase_client
from utils.env import get_supabase_credentials, validate_env_vars
from utils.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("SUPABASE_URL", "SUPABASE_KEY", "SUPABASE_SERVICE_ROLE_KEY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_service_role_key_is_preferred(clean_env) -> None:
    clean_env.setenv("SUPABASE_URL", "https://demo.supabase.co")
    clean_env.setenv("SUPABASE_KEY", "anon-key")
    clean_env.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")

    assert get_supabase_credentials() == ("https://demo.supabase.co", "service-key")


def test_public_key_is_used_without_service_key(clean_env) -> None:
    clean_env.setenv("SUPABASE_URL", "https://demo.supabase.co")
    clean_env.setenv("SUPABASE_KEY", "anon-key")

    assert get_supabase_credentials() == ("https://demo.supabase.co", "anon-key")


@pytest.mark.parametrize(
    ("values", "missing"),
    [
        ({"SUPABASE_KEY": "anon-key"}, "SUPABASE_URL"),
        ({"SUPABASE_URL": "https://demo.supabase.co"}, "SUPABASE_KEY"),
        ({}, "SUPABASE_URL"),
    ],
)
def test_missing_settings_raise_configuration_error(clean_env, values, missing) -> None:
    for name, value in values.items():
        clean_env.setenv(name, value)

    with pytest.raises(ConfigurationError, match=missing):
        get_supabase_credentials()


def test_validate_env_vars_treats_blank_as_missing(clean_env) -> None:
    clean_env.setenv("SUPABASE_URL", "")

    with pytest.raises(ConfigurationError, match="SUPABASE_URL"):
        validate_env_vars(["SUPABASE_URL"])


def test_build_client_fails_before_creating_client(clean_env) -> None:
    factory = MagicMock()
    clean_env.setattr(supabase_client, "create_client", factory)

    with pytest.raises(ConfigurationError):
        supabase_client.build_client()

    factory.assert_not_called()


def test_build_client_uses_environment_credentials(clean_env) -> None:
    clean_env.setenv("SUPABASE_URL", "https://demo.supabase.co")
    clean_env.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
    factory = MagicMock()
    clean_env.setattr(supabase_client, "create_client", factory)

    client = supabase_client.build_client()

    assert client is factory.return_value
    args, kwargs = factory.call_args
    assert args == ("https://demo.supabase.co", "service-key")
    assert kwargs["options"].persist_session is False
