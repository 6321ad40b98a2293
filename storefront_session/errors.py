from __future__ import annotations

from typing import Optional


class AuthApiError(Exception):
    """Auth API answered with a non-2xx status or could not be reached.

    ``message`` is the server-provided ``msg`` when there was one.
    """

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or "auth api request failed")
        self.message = message
        self.status_code = status_code


class StorageError(Exception):
    """Durable store backend failed to read or write."""
