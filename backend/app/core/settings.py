# app/core/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    api_title: str = Field(default="Contact Relay API", alias="API_TITLE")
    cors_origins: str = Field(default="http://localhost:5173", alias="CORS_ORIGINS")

    # Explicit SMTP server; host + user together select this path
    smtp_host: Optional[str] = Field(default=None, alias="SMTP_HOST")
    smtp_port: Optional[str] = Field(default=None, alias="SMTP_PORT")
    # Only the exact string "true" means implicit TLS (port 465)
    smtp_secure: Optional[str] = Field(default=None, alias="SMTP_SECURE")
    smtp_user: Optional[str] = Field(default=None, alias="SMTP_USER")
    smtp_pass: Optional[str] = Field(default=None, alias="SMTP_PASS")

    # Well-known provider fallback; use an app password, not the account password
    email_user: Optional[str] = Field(default=None, alias="EMAIL_USER")
    email_pass: Optional[str] = Field(default=None, alias="EMAIL_PASS")
    email_service: str = Field(default="gmail", alias="EMAIL_SERVICE")

    email_from: Optional[str] = Field(default=None, alias="EMAIL_FROM")
    email_to: Optional[str] = Field(default=None, alias="EMAIL_TO")


def get_settings() -> Settings:
    return Settings()

settings = get_settings()
