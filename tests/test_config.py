# tests/test_config.py

import pytest

from forum_server.config import Settings


def test_from_env_reads_values(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "s3cret")
    monkeypatch.setenv("STORE_TIMEOUT_SECONDS", "9")
    monkeypatch.setenv("REQUIRE_AUTHORSHIP", "false")

    settings = Settings.from_env()

    assert settings.jwt_secret_key == "s3cret"
    assert settings.store_timeout_seconds == 9
    assert settings.require_authorship is False


def test_missing_secret_is_refused(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "")
    with pytest.raises(RuntimeError):
        Settings.from_env()


@pytest.mark.parametrize("raw", ["abc", "0", "-3", "1.5"])
def test_invalid_integer_is_refused(monkeypatch, raw):
    monkeypatch.setenv("JWT_SECRET_KEY", "s3cret")
    monkeypatch.setenv("STORE_TIMEOUT_SECONDS", raw)
    with pytest.raises(RuntimeError, match="STORE_TIMEOUT_SECONDS"):
        Settings.from_env()
