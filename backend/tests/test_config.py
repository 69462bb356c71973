"""
Tests for settings loading
"""
import pytest

from app.core.config import Settings, get_settings
from app.core.errors import StartupConfigurationError


@pytest.fixture
def no_env_file(monkeypatch):
    monkeypatch.setitem(Settings.model_config, "env_file", None)


def test_defaults(monkeypatch, no_env_file, fresh_settings):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("OPERATOR_EMAIL", raising=False)
    monkeypatch.delenv("EMAIL_FROM", raising=False)

    settings = get_settings()

    assert settings.port == 5000
    assert settings.smtp_host == "smtp.gmail.com"
    assert settings.smtp_port == 465
    assert settings.smtp_use_ssl is True
    assert settings.operator_address == settings.email_user
    assert settings.sender_address == settings.email_user
    assert settings.allowed_origins_list == ["*"]


def test_settings_are_cached(fresh_settings):
    assert get_settings() is get_settings()


def test_port_and_addresses_from_environment(monkeypatch, no_env_file, fresh_settings):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("OPERATOR_EMAIL", "inbox@example.com")
    monkeypatch.setenv("EMAIL_FROM", "noreply@example.com")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.example, http://b.example")

    settings = get_settings()

    assert settings.port == 8080
    assert settings.operator_address == "inbox@example.com"
    assert settings.sender_address == "noreply@example.com"
    assert settings.allowed_origins_list == ["http://a.example", "http://b.example"]


@pytest.mark.parametrize("variable", ["DATABASE_URL", "EMAIL_USER", "EMAIL_PASS"])
def test_missing_required_variable_is_fatal(monkeypatch, no_env_file, fresh_settings, variable):
    monkeypatch.delenv(variable, raising=False)

    with pytest.raises(StartupConfigurationError) as exc_info:
        get_settings()

    assert exc_info.value.fields == [variable]


def test_empty_value_counts_as_missing(monkeypatch, no_env_file, fresh_settings):
    monkeypatch.setenv("EMAIL_PASS", "")

    with pytest.raises(StartupConfigurationError) as exc_info:
        get_settings()

    assert "EMAIL_PASS" in exc_info.value.fields


def test_invalid_port_is_fatal(monkeypatch, no_env_file, fresh_settings):
    monkeypatch.setenv("PORT", "not-a-port")

    with pytest.raises(StartupConfigurationError) as exc_info:
        get_settings()

    assert exc_info.value.fields == ["PORT"]
