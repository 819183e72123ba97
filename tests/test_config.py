"""Tests for environment-driven settings."""

from __future__ import annotations

from sfrest.config import Settings


def test_defaults(monkeypatch):
    for name in ("SALESFORCE_LOGIN_URL", "SALESFORCE_API_VERSION", "SALESFORCE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.login_url == "https://login.salesforce.com"
    assert s.api_version == ""
    assert s.timeout == 30.0
    assert s.log_format == "text"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("SALESFORCE_CLIENT_ID", "ID")
    monkeypatch.setenv("SALESFORCE_CLIENT_SECRET", "SECRET")
    monkeypatch.setenv("SALESFORCE_USERNAME", "me@example.com")
    monkeypatch.setenv("SALESFORCE_PASSWORD", "pw")
    monkeypatch.setenv("SALESFORCE_SECURITY_TOKEN", "TOK")
    monkeypatch.setenv("SALESFORCE_API_VERSION", "58.0")
    s = Settings(_env_file=None)
    creds = s.credentials()
    assert creds.client_id == "ID"
    assert creds.grant_password == "pwTOK"
    assert s.api_version == "58.0"


def test_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("SALESFORCE_USERNAME", raising=False)
    env = tmp_path / ".env"
    env.write_text("SALESFORCE_USERNAME=file@example.com\nUNRELATED=1\n")
    s = Settings(_env_file=env)
    assert s.username == "file@example.com"
