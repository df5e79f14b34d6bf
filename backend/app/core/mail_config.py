# app/core/mail_config.py
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from app.core.settings import Settings

DEFAULT_SMTP_PORT = 587
FALLBACK_SENDER = "no-reply@example.com"

# host, port, implicit TLS
KNOWN_PROVIDERS = {
    "gmail":   ("smtp.gmail.com", 465, True),
    "outlook": ("smtp-mail.outlook.com", 587, False),
    "hotmail": ("smtp-mail.outlook.com", 587, False),
    "yahoo":   ("smtp.mail.yahoo.com", 465, True),
    "icloud":  ("smtp.mail.me.com", 587, False),
}


class UnknownProviderError(ValueError):
    pass


@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int
    secure: bool
    username: str
    password: Optional[str] = None


@dataclass(frozen=True)
class ProviderConfig:
    provider: str
    username: str
    password: str


@dataclass(frozen=True)
class Unconfigured:
    pass


TransportConfig = Union[SmtpConfig, ProviderConfig, Unconfigured]


def provider_endpoint(name: str) -> Tuple[str, int, bool]:
    key = (name or "").strip().lower()
    if key not in KNOWN_PROVIDERS:
        raise UnknownProviderError(f"unknown email service: {name!r}")
    return KNOWN_PROVIDERS[key]


def resolve_transport_config(s: Settings) -> TransportConfig:
    """
    Pick the mail transport from settings. First match wins:
    explicit SMTP (host + user), then provider shortcut (user + pass), else nothing.

    SMTP_SECURE is taken literally: anything but "true" is plaintext/STARTTLS,
    whatever the port.
    """
    if s.smtp_host and s.smtp_user:
        return SmtpConfig(
            host=s.smtp_host,
            port=int(s.smtp_port or DEFAULT_SMTP_PORT),
            secure=(s.smtp_secure == "true"),
            username=s.smtp_user,
            password=s.smtp_pass,
        )
    if s.email_user and s.email_pass:
        return ProviderConfig(
            provider=s.email_service,
            username=s.email_user,
            password=s.email_pass,
        )
    return Unconfigured()


def resolve_addresses(s: Settings, config: TransportConfig) -> Tuple[str, Optional[str]]:
    username = getattr(config, "username", None)
    sender = s.email_from or s.email_user or username or FALLBACK_SENDER
    to = s.email_to or s.email_user or username
    return sender, to
