import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VAR = "STOREFRONT_ENV_FILE"


def _session_env_file() -> str | None:
    # explicit override, then the working directory, then the package's ancestors
    explicit = os.environ.get(ENV_FILE_VAR)
    if explicit:
        return explicit
    search = [Path.cwd(), *Path(__file__).resolve().parents]
    for folder in search:
        candidate = folder / ".env"
        if candidate.is_file():
            return str(candidate)
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_session_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # auth api
    AUTH_BASE_URL: str = "http://localhost:5000"
    HTTP_TIMEOUT_SEC: float = 8.0

    # durable store: "file" | "redis" | "memory"
    SESSION_STORE: str = "file"
    SESSION_FILE: str = "~/.storefront/session.json"
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_KEY_PREFIX: str = "storefront:"

    LOG_LEVEL: str = "INFO"


settings = Settings()
