from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from .errors import AuthApiError
from .models import Credentials, LoginResult, RegisterCandidate

logger = logging.getLogger(__name__)


class AuthClient:
    def __init__(
        self,
        base_url: str,
        timeout_sec: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout_sec
        self.transport = transport

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.base_url:
            raise AuthApiError()

        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            logger.warning("Auth API unreachable. url=%s error=%s", url, e)
            raise AuthApiError() from e

        try:
            data = r.json()
        except ValueError:
            data = None

        if r.status_code >= 400:
            msg = data.get("msg") if isinstance(data, dict) else None
            raise AuthApiError(msg if isinstance(msg, str) and msg else None, r.status_code)

        if not isinstance(data, dict):
            logger.warning("Auth API returned a non-object body. url=%s status=%s", url, r.status_code)
            raise AuthApiError(status_code=r.status_code)
        return data

    async def register(self, candidate: RegisterCandidate) -> Dict[str, Any]:
        data = await self._post("/auth/register", candidate.model_dump())
        user = data.get("user")
        if not isinstance(user, dict):
            logger.warning("Register response has no user record")
            raise AuthApiError()
        return user

    async def login(self, credentials: Credentials) -> LoginResult:
        data = await self._post("/auth/login", credentials.model_dump())
        try:
            return LoginResult.model_validate(data)
        except ValidationError as e:
            # user and token must arrive together
            logger.warning("Login response is missing user or token: %s", e.error_count())
            raise AuthApiError() from e
