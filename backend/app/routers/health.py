# app/routers/health.py
from fastapi import APIRouter, Depends

from app.core.mail_config import ProviderConfig, SmtpConfig, resolve_transport_config
from app.core.settings import Settings, get_settings

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
async def health_root():
    return {"status": "ok"}

@router.get("/mail")
async def health_mail(settings: Settings = Depends(get_settings)):
    """Which transport a submission would use right now. No network call, no secrets."""
    try:
        config = resolve_transport_config(settings)
    except ValueError:
        return {"ok": False, "transport": "invalid"}

    if isinstance(config, SmtpConfig):
        return {"ok": True, "transport": "smtp", "host": config.host, "port": config.port, "secure": config.secure}
    if isinstance(config, ProviderConfig):
        return {"ok": True, "transport": "provider", "provider": config.provider}
    return {"ok": False, "transport": "unconfigured"}
