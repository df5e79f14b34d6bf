import pytest

MAIL_ENV_VARS = [
    "SMTP_HOST", "SMTP_PORT", "SMTP_SECURE", "SMTP_USER", "SMTP_PASS",
    "EMAIL_USER", "EMAIL_PASS", "EMAIL_SERVICE", "EMAIL_FROM", "EMAIL_TO",
]


@pytest.fixture(autouse=True)
def _clean_mail_env(monkeypatch):
    """Keep the developer's shell/.env mail settings out of the tests."""
    for var in MAIL_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
