# Settings module
# - .env values are managed in one place
# - MONGODB_URI and JWT_SECRET_KEY have no default: the process refuses to start without them
# - one instance is built at startup and passed into create_app (no module-level singleton)

from pathlib import Path
from typing import List

from fastapi import Request
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# backend/fintrack/core/config.py -> project root is three levels above backend/
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    APP_NAME: str = "fintrack"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    MONGODB_URI: str = Field(..., description="MongoDB connection string including the default database name.")

    JWT_SECRET_KEY: str = Field(..., description="Secret used to sign access tokens. Use a long random string.")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    CORS_ALLOW_ORIGINS: str = "*"

    # When false, DELETE /income/{id} and /expense/{id} remove any entry by id regardless of owner.
    ENFORCE_ENTRY_OWNERSHIP: bool = False

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


def get_settings(request: Request) -> Settings:
    # FastAPI dependency: the instance handed to create_app
    return request.app.state.settings
