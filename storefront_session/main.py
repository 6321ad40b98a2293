import logging

from .api import create_app
from .auth_client import AuthClient
from .config import Settings, settings
from .session import SessionManager
from .storage import FileStore, KeyValueStore, MemoryStore, RedisStore


def build_store(cfg: Settings) -> KeyValueStore:
    kind = cfg.SESSION_STORE.lower()
    if kind == "redis":
        return RedisStore(cfg.REDIS_HOST, cfg.REDIS_PORT, cfg.REDIS_KEY_PREFIX)
    if kind == "memory":
        return MemoryStore()
    if kind == "file":
        return FileStore(cfg.SESSION_FILE)
    raise ValueError(f"unknown SESSION_STORE: {cfg.SESSION_STORE!r}")


def build_manager(cfg: Settings) -> SessionManager:
    auth = AuthClient(cfg.AUTH_BASE_URL, cfg.HTTP_TIMEOUT_SEC)
    return SessionManager(build_store(cfg), auth)


logging.basicConfig(level=settings.LOG_LEVEL.upper())

manager = build_manager(settings)
app = create_app(manager)
