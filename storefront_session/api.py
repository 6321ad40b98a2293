from __future__ import annotations

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .models import Credentials, RegisterCandidate
from .session import SessionManager
from .validation import password_strength, validate_login, validate_registration


class PasswordIn(BaseModel):
    password: str = ""


def create_app(manager: SessionManager) -> FastAPI:
    app = FastAPI(title="Storefront Session")

    def _ensure_idle() -> None:
        # one submit at a time
        if manager.state.loading:
            raise HTTPException(status_code=409, detail="An authentication request is already in progress")

    @app.get("/session")
    async def session():
        return manager.state.as_public_dict()

    @app.post("/auth/register")
    async def register(inp: RegisterCandidate):
        errors = validate_registration(inp)
        if errors:
            raise HTTPException(status_code=422, detail={"errors": errors})
        _ensure_idle()
        await manager.register(inp)
        return manager.state.as_public_dict()

    @app.post("/auth/login")
    async def login(inp: Credentials):
        errors = validate_login(inp)
        if errors:
            raise HTTPException(status_code=422, detail={"errors": errors})
        _ensure_idle()
        await manager.login(inp)
        return manager.state.as_public_dict()

    @app.post("/auth/logout")
    async def logout():
        manager.logout()
        return manager.state.as_public_dict()

    @app.post("/auth/password-strength")
    async def strength(inp: PasswordIn):
        score, label = password_strength(inp.password)
        return {"score": score, "label": label}

    return app
