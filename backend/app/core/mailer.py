# app/core/mailer.py
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.errors import MessageError
from email.message import EmailMessage
from typing import Optional, Protocol

from fastapi.concurrency import run_in_threadpool

from app.core.mail_config import (
    ProviderConfig,
    SmtpConfig,
    TransportConfig,
    provider_endpoint,
)

log = logging.getLogger("uvicorn.error")


class MailTransportError(Exception):
    """Raised when the mail server can't be reached, rejects auth, or refuses a message."""


@dataclass
class OutboundMessage:
    sender: str
    to: Optional[str]
    subject: str
    text: str
    html: str


class MailTransport(Protocol):
    async def verify(self) -> None:
        ...

    async def send(self, message: OutboundMessage) -> None:
        ...


def _header(value: Optional[str]) -> str:
    return (value or "").replace("\r", "").replace("\n", "").strip()


def to_mime(message: OutboundMessage) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = _header(message.sender)
    msg["To"] = _header(message.to)
    msg["Subject"] = _header(message.subject)
    msg.set_content(message.text)
    msg.add_alternative(message.html, subtype="html")
    return msg


class SmtpTransport:
    """
    smtplib-backed transport. Every call opens its own connection:
    SMTP_SSL when secure, otherwise plain SMTP upgraded with STARTTLS
    if the server offers it. Login only happens with both user and password.
    """

    def __init__(self, host: str, port: int, secure: bool,
                 username: Optional[str] = None, password: Optional[str] = None):
        self.host = host
        self.port = port
        self.secure = secure
        self.username = username
        self.password = password

    def _open(self) -> smtplib.SMTP:
        if self.secure:
            return smtplib.SMTP_SSL(self.host, self.port, context=ssl.create_default_context())
        return smtplib.SMTP(self.host, self.port)

    def _handshake(self, conn: smtplib.SMTP) -> None:
        conn.ehlo()
        if not self.secure and conn.has_extn("starttls"):
            conn.starttls(context=ssl.create_default_context())
            conn.ehlo()
        if self.username and self.password:
            conn.login(self.username, self.password)

    def _verify_sync(self) -> None:
        with self._open() as conn:
            self._handshake(conn)

    def _send_sync(self, mime: EmailMessage) -> None:
        with self._open() as conn:
            self._handshake(conn)
            conn.send_message(mime)

    async def verify(self) -> None:
        try:
            await run_in_threadpool(self._verify_sync)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailTransportError(f"verify failed for {self.host}:{self.port}: {exc}") from exc
        log.info(f"[mailer] verified {self.host}:{self.port} secure={self.secure}")

    async def send(self, message: OutboundMessage) -> None:
        if not message.to:
            raise MailTransportError("no recipient configured")
        try:
            mime = to_mime(message)
            await run_in_threadpool(self._send_sync, mime)
        except (smtplib.SMTPException, OSError, ValueError, MessageError) as exc:
            raise MailTransportError(f"send failed via {self.host}:{self.port}: {exc}") from exc


def build_transport(config: TransportConfig) -> MailTransport:
    if isinstance(config, SmtpConfig):
        return SmtpTransport(
            config.host, config.port, config.secure,
            username=config.username, password=config.password,
        )
    if isinstance(config, ProviderConfig):
        host, port, secure = provider_endpoint(config.provider)
        return SmtpTransport(host, port, secure, username=config.username, password=config.password)
    raise ValueError("no mail transport configured")

__all__ = ["OutboundMessage", "MailTransport", "MailTransportError", "SmtpTransport", "build_transport"]
