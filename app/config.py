"""Application configuration from environment."""
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

# Load .env from project root (parent of app/) so env vars are available everywhere
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


class Settings(BaseSettings):
    app_name: str = "EventPro API"
    app_env: str = "development"
    debug: bool = True

    database_url: str = "sqlite:///./eventpro.db"

    jwt_secret_key: str = "jwt-secret-change-me"
    jwt_algorithm: str = "HS256"

    @field_validator("jwt_secret_key")
    @classmethod
    def strip_jwt_secret(cls, v: str) -> str:
        return (v or "").strip()

    jwt_access_token_expire_minutes: int = 60 * 24 * 7

    # Comma-separated; the first origin is also the base of public booking links
    client_url: str = "http://localhost:5173"

    @field_validator("client_url", mode="before")
    @classmethod
    def strip_client_url(cls, v: str) -> str:
        return (v or "").strip()

    min_password_length: int = 6

    expiry_sweep_enabled: bool = True
    expiry_sweep_interval_seconds: int = 60

    class Config:
        env_file = str(_env_path)
        extra = "ignore"

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip().rstrip("/") for o in self.client_url.split(",") if o.strip()]

    @property
    def public_client_url(self) -> str:
        origins = self.allowed_origins
        return origins[0] if origins else "http://localhost:5173"


@lru_cache
def get_settings() -> Settings:
    return Settings()
