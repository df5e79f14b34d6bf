# backend/tests/test_health.py
import pytest
from fastapi.testclient import TestClient

from app.core.settings import Settings, get_settings
from app.main import app

client = TestClient(app)


@pytest.fixture
def mail_settings():
    def configure(**values):
        app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, **values)

    yield configure
    app.dependency_overrides.clear()


def test_health():
    """Basic health endpoint returns status ok."""
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_health_mail_reports_smtp_without_secrets(mail_settings):
    mail_settings(smtp_host="smtp.example.org", smtp_port="465", smtp_secure="true",
                  smtp_user="relay@example.org", smtp_pass="secret")
    resp = client.get("/health/mail")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "transport": "smtp", "host": "smtp.example.org", "port": 465, "secure": True}
    assert "secret" not in resp.text


def test_health_mail_reports_provider(mail_settings):
    mail_settings(email_user="me@gmail.com", email_pass="app-pass")
    assert client.get("/health/mail").json() == {"ok": True, "transport": "provider", "provider": "gmail"}


def test_health_mail_reports_unconfigured(mail_settings):
    mail_settings()
    assert client.get("/health/mail").json() == {"ok": False, "transport": "unconfigured"}


def test_health_mail_reports_invalid_port(mail_settings):
    mail_settings(smtp_host="h", smtp_user="u", smtp_port="abc")
    assert client.get("/health/mail").json() == {"ok": False, "transport": "invalid"}


def test_unknown_route_keeps_default_error_body():
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Not Found"}
