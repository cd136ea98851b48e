"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from pagesnap.config import Settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in (
        "RAPIDAPI_PROXY_SECRET", "RAPIDAPI_HOST", "PORT",
        "PAGESNAP_RAPIDAPI_PROXY_SECRET", "PAGESNAP_RAPIDAPI_HOST", "PAGESNAP_PORT",
        "PAGESNAP_NAVIGATION_TIMEOUT", "PAGESNAP_ENABLE_PUBLIC_ENDPOINT",
    ):
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the way
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings()

    assert settings.rapidapi_proxy_secret is None
    assert settings.rapidapi_host is None
    assert settings.host == "0.0.0.0"
    assert settings.port == 3000
    assert settings.navigation_timeout == 30.0
    assert settings.capture_timeout == 30.0
    assert settings.chromium_executable is None
    assert settings.enable_public_endpoint is True


def test_rapidapi_variables_without_prefix(clean_env):
    clean_env.setenv("RAPIDAPI_PROXY_SECRET", "s3cret")
    clean_env.setenv("RAPIDAPI_HOST", "pagesnap.p.rapidapi.com")
    clean_env.setenv("PORT", "8080")

    settings = Settings()

    assert settings.rapidapi_proxy_secret == "s3cret"
    assert settings.rapidapi_host == "pagesnap.p.rapidapi.com"
    assert settings.port == 8080


def test_prefixed_variables(clean_env):
    clean_env.setenv("PAGESNAP_NAVIGATION_TIMEOUT", "12.5")
    clean_env.setenv("PAGESNAP_ENABLE_PUBLIC_ENDPOINT", "false")

    settings = Settings()

    assert settings.navigation_timeout == 12.5
    assert settings.enable_public_endpoint is False


def test_dotenv_file(clean_env, tmp_path):
    (tmp_path / ".env").write_text("RAPIDAPI_PROXY_SECRET=from-dotenv\n")

    assert Settings().rapidapi_proxy_secret == "from-dotenv"


def test_timeouts_must_be_positive(clean_env):
    with pytest.raises(ValidationError):
        Settings(navigation_timeout=0)
