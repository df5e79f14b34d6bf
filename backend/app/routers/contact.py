import logging
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from app.core.mail_config import (
    TransportConfig,
    Unconfigured,
    resolve_addresses,
    resolve_transport_config,
)
from app.core.mailer import MailTransport, OutboundMessage, build_transport
from app.core.settings import Settings, get_settings
from app.lib.html_escape import escape_html

router = APIRouter(prefix="/api", tags=["contact"])
SEND_EMAIL_PATH = "/api/send-email"
log = logging.getLogger("uvicorn.error")

MAX_MESSAGE_LENGTH = 10_000

MSG_METHOD_NOT_ALLOWED = "Método não permitido"
MSG_MISSING_FIELDS = "Campos obrigatórios ausentes"
MSG_MESSAGE_TOO_LARGE = "Mensagem inválida ou muito grande"
MSG_CONFIG_MISSING = "Configuração de e-mail ausente"
MSG_CONFIG_ERROR = "Erro na configuração de e-mail"
MSG_SENT = "E-mail enviado com sucesso"
MSG_SEND_ERROR = "Erro ao enviar e-mail"

# common methods reach the handler; anything else goes through method_not_allowed_handler
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class Submission(BaseModel):
    name: str
    email: str
    phone: str = ""
    message: str


class RelayResponse(BaseModel):
    message: str


TransportFactory = Callable[[TransportConfig], MailTransport]


def get_transport_factory() -> TransportFactory:
    return build_transport


def _reply(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=RelayResponse(message=message).model_dump())


async def _read_body(request: Request) -> Dict[str, Any]:
    ctype = (request.headers.get("content-type") or "").lower()
    try:
        if ctype.startswith("application/json"):
            data = await request.json()
        elif ctype.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
            form = await request.form()
            data = {k: v for k, v in form.items() if isinstance(v, str)}
        else:
            return {}
    except (ValueError, MultiPartException, StarletteHTTPException):
        return {}
    return data if isinstance(data, dict) else {}


def compose_message(sub: Submission, sender: str, to: Optional[str]) -> OutboundMessage:
    name = escape_html(sub.name)
    email = escape_html(sub.email)
    phone = escape_html(sub.phone)
    body = escape_html(sub.message).replace("\n", "<br/>")
    return OutboundMessage(
        sender=sender,
        to=to,
        subject=f"Nova mensagem de {sub.name}",
        text=(
            f"Nome: {sub.name}\nE-mail: {sub.email}\nTelefone: {sub.phone}\n\n"
            f"Mensagem:\n{sub.message}"
        ),
        html=(
            f"<p><strong>Nome:</strong> {name}</p>\n"
            f"<p><strong>E-mail:</strong> {email}</p>\n"
            f"<p><strong>Telefone:</strong> {phone}</p>\n"
            f"<hr/>\n"
            f"<p>{body}</p>"
        ),
    )


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405 and request.url.path == SEND_EMAIL_PATH:
        return _reply(405, MSG_METHOD_NOT_ALLOWED)
    return await http_exception_handler(request, exc)


@router.api_route("/send-email", methods=ALL_METHODS, response_model=RelayResponse)
async def send_email(
    request: Request,
    settings: Settings = Depends(get_settings),
    transport_factory: TransportFactory = Depends(get_transport_factory),
):
    if request.method != "POST":
        return _reply(405, MSG_METHOD_NOT_ALLOWED)

    data = await _read_body(request)
    name, email, message = data.get("name"), data.get("email"), data.get("message")
    phone = data.get("phone") or ""

    if not name or not email or not message:
        return _reply(400, MSG_MISSING_FIELDS)
    if not isinstance(message, str) or len(message) > MAX_MESSAGE_LENGTH:
        return _reply(413, MSG_MESSAGE_TOO_LARGE)

    sub = Submission(name=str(name), email=str(email), phone=str(phone), message=message)

    try:
        config = resolve_transport_config(settings)
        if isinstance(config, Unconfigured):
            log.error("[contact] no SMTP_* or EMAIL_* credentials configured")
            return _reply(500, MSG_CONFIG_MISSING)
        transport = transport_factory(config)
        await transport.verify()
    except Exception as e:
        log.exception(f"[contact] transport setup/verify failed: {e}")
        return _reply(500, MSG_CONFIG_ERROR)

    sender, to = resolve_addresses(settings, config)
    outbound = compose_message(sub, sender, to)

    try:
        await transport.send(outbound)
    except Exception as e:
        log.exception(f"[contact] send failed: {e}")
        return _reply(500, MSG_SEND_ERROR)

    log.info(f"[contact] relayed submission to {to}")
    return _reply(200, MSG_SENT)
