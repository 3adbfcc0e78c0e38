# app/config/settings.py
from pydantic_settings import BaseSettings
from typing import List, Optional
import os

class Settings(BaseSettings):
    # App Info
    app_name: str = "Zap Shift API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database - sqlite por defecto, Postgres en Render
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./zapshift.db")

    # Identity provider (tokens firmados por el proveedor)
    identity_secret_key: str = os.getenv("IDENTITY_SECRET_KEY", "change-in-production")
    identity_algorithm: str = "HS256"
    identity_audience: Optional[str] = None
    identity_issuer: Optional[str] = None
    access_token_expire_minutes: int = 60

    # Payment processor
    payment_secret_key: Optional[str] = os.getenv("PAYMENT_SECRET_KEY")
    payment_api_base: str = "https://api.stripe.com"
    payment_currency: str = "usd"
    payment_timeout: int = 30

    # Server
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 5000))
    cors_origins: List[str] = ["*"]

    @property
    def database_url_with_ssl(self) -> str:
        """Driver psycopg para Postgres y SSL para conexiones de producción"""
        url = self.database_url
        for prefix in ("postgres://", "postgresql://"):
            if url.startswith(prefix):
                url = "postgresql+psycopg://" + url[len(prefix):]
        if "render" in url and "?sslmode=" not in url:
            return f"{url}?sslmode=require"
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'

settings = Settings()
