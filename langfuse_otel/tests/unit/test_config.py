import pytest
from pydantic import ValidationError

from langfuse_otel.core import config as config_module
from langfuse_otel.core.config import DEFAULT_BASE_URL, Settings
from langfuse_otel.core.errors import MissingCredentialsError
from langfuse_otel.services.client import LangfuseClient


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "pk-lf-env")
    monkeypatch.setenv("LANGFUSE_SECRET_KEY", "sk-lf-env")
    monkeypatch.setenv("LANGFUSE_RELEASE", "1.0.0")
    monkeypatch.setenv("LANGFUSE_ENVIRONMENT", "staging")
    monkeypatch.setenv("LANGFUSE_IS_PUBLIC", "true")
    config_module.get_settings.cache_clear()
    settings = config_module.get_settings()
    assert settings.public_key == "pk-lf-env"
    assert settings.secret_key == "sk-lf-env"
    assert settings.release == "1.0.0"
    assert settings.environment == "staging"
    assert settings.is_public is True
    config_module.get_settings.cache_clear()


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("LANGFUSE_BASE_URL", raising=False)
    settings = Settings(_env_file=None, public_key="pk", secret_key="sk")
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.release is None
    assert settings.is_public is False
    assert settings.tracing_enabled is True


def test_require_credentials_rejects_missing_keys():
    settings = Settings(_env_file=None, public_key="pk", secret_key="")
    with pytest.raises(MissingCredentialsError, match="public key and secret key are required"):
        settings.require_credentials()


def test_missing_credentials_is_a_value_error():
    with pytest.raises(ValueError):
        Settings(_env_file=None, public_key="", secret_key="sk").require_credentials()


def test_client_construction_requires_credentials():
    with pytest.raises(MissingCredentialsError):
        LangfuseClient(Settings(_env_file=None, public_key="", secret_key="", register_global_provider=False))


def test_flush_at_is_bounded_by_queue_size():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, public_key="pk", secret_key="sk", flush_at=5000)
