# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.core.settings import settings
from app.routers.contact import router as contact_router, method_not_allowed_handler
from app.routers.health import router as health_router

app = FastAPI(title=settings.api_title)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 405s on the relay endpoint keep the {"message": ...} body, whatever the method
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)

logging.getLogger("uvicorn.error").info(f"[main] cors_origins = {settings.cors_origins}")

# Routers
app.include_router(contact_router)
app.include_router(health_router)
