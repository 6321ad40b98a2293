"""Durable key-value stores backing the session.

Values are plain strings. The session layer owns encoding, so a store
never interprets what it holds.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol

import redis

from .errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set_many(self, items: Mapping[str, str]) -> None: ...

    def delete(self, *keys: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set_many(self, items: Mapping[str, str]) -> None:
        self.data.update(items)

    def delete(self, *keys: str) -> None:
        for key in keys:
            self.data.pop(key, None)


class FileStore:
    """All keys live in a single JSON object on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Session file unreadable, treating as empty. path=%s error=%s", self.path, e)
            return {}

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Session file is not valid JSON, treating as empty. path=%s", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".session-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            raise StorageError(f"cannot write {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_many(self, items: Mapping[str, str]) -> None:
        data = self._load()
        data.update(items)
        self._dump(data)

    def delete(self, *keys: str) -> None:
        data = self._load()
        if not any(k in data for k in keys):
            return
        for key in keys:
            data.pop(key, None)
        self._dump(data)


class RedisStore:
    def __init__(self, host: str, port: int, prefix: str = "storefront:", client: Optional[redis.Redis] = None):
        self.r = client or redis.Redis(host=host, port=port, decode_responses=True)
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            return self.r.get(self._key(key))
        except (redis.RedisError, UnicodeDecodeError) as e:
            raise StorageError(str(e)) from e

    def set_many(self, items: Mapping[str, str]) -> None:
        try:
            with self.r.pipeline(transaction=True) as pipe:
                for key, value in items.items():
                    pipe.set(self._key(key), value)
                pipe.execute()
        except redis.RedisError as e:
            raise StorageError(str(e)) from e

    def delete(self, *keys: str) -> None:
        if not keys:
            return
        try:
            self.r.delete(*(self._key(k) for k in keys))
        except redis.RedisError as e:
            raise StorageError(str(e)) from e
