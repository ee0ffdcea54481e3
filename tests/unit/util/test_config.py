"""Unit tests for settings loading."""

from ledger.config import Settings


def test_nested_invitation_settings_from_env(monkeypatch):
    monkeypatch.setenv("INVITATIONS__MAX_ACTIVE_PER_ISSUER", "25")
    monkeypatch.setenv("INVITATIONS__DEFAULT_EMAIL_EXPIRATION_HOURS", "72")

    settings = Settings()

    assert settings.invitations.max_active_per_issuer == 25
    assert settings.invitations.default_email_expiration_hours == 72
    assert settings.invitations.default_code_expiration_hours == 24


def test_frontend_url(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("FRONTEND_HOST", "example.com")

    settings = Settings()

    assert settings.api.frontend_url == "https://example.com"
