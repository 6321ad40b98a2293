from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RegisterCandidate(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""


class Credentials(BaseModel):
    email: str = ""
    password: str = ""


class LoginResult(BaseModel):
    user: Dict[str, Any]
    token: str = Field(min_length=1)


class SessionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: Optional[Dict[str, Any]] = None
    token: Optional[str] = None
    status: AuthStatus = AuthStatus.IDLE
    error: Optional[str] = None
    registration_completed: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.token is not None

    @property
    def loading(self) -> bool:
        return self.status is AuthStatus.PENDING

    @property
    def display_name(self) -> Optional[str]:
        if not self.user:
            return None
        return self.user.get("username") or self.user.get("email") or None

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def as_public_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["is_authenticated"] = self.is_authenticated
        data["loading"] = self.loading
        data["display_name"] = self.display_name
        return data
