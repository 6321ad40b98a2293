"""Client-side authentication session.

``SessionManager`` owns the one ``SessionState`` of the process. It is
restored from the durable store on construction and changed only by
``register``, ``login`` and ``logout``. Every transition is published to
subscribers as an immutable snapshot.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List

from .auth_client import AuthClient
from .errors import AuthApiError, StorageError
from .models import AuthStatus, Credentials, RegisterCandidate, SessionState
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"

REGISTER_FALLBACK_ERROR = "Server error"
LOGIN_FALLBACK_ERROR = "Invalid credentials"

Listener = Callable[[SessionState], None]


def _read_persisted(store: KeyValueStore) -> SessionState:
    try:
        token = store.get(TOKEN_KEY)
        raw_user = store.get(USER_KEY)
    except StorageError as e:
        logger.warning("Session store unavailable on startup, starting logged out: %s", e)
        return SessionState()

    if not token or not raw_user:
        return SessionState()
    try:
        user = json.loads(raw_user)
    except ValueError:
        logger.warning("Stored user is not valid JSON, starting logged out")
        return SessionState()
    if not isinstance(user, dict):
        return SessionState()
    return SessionState(user=user, token=token)


class SessionManager:
    def __init__(self, store: KeyValueStore, client: AuthClient):
        self.store = store
        self.client = client
        self._state = _read_persisted(store)
        self._listeners: List[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state.model_copy(deep=True)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception:
                logger.exception("Session listener failed")

    def _begin(self, op: str) -> None:
        if self._state.loading:
            # callers are expected to debounce; the later completion wins
            logger.warning("%s started while another auth operation is pending", op)
        self._commit(status=AuthStatus.PENDING, error=None)

    async def register(self, candidate: RegisterCandidate) -> AuthStatus:
        self._begin("register")
        try:
            user = await self.client.register(candidate)
        except AuthApiError as e:
            logger.info("Registration failed. status_code=%s", e.status_code)
            self._commit(status=AuthStatus.FAILED, error=e.message or REGISTER_FALLBACK_ERROR)
            return AuthStatus.FAILED

        self._commit(user=user, status=AuthStatus.SUCCEEDED, registration_completed=True)
        return AuthStatus.SUCCEEDED

    async def login(self, credentials: Credentials) -> AuthStatus:
        self._begin("login")
        try:
            result = await self.client.login(credentials)
        except AuthApiError as e:
            logger.info("Login failed. status_code=%s", e.status_code)
            self._commit(status=AuthStatus.FAILED, error=e.message or LOGIN_FALLBACK_ERROR)
            return AuthStatus.FAILED

        self._persist({TOKEN_KEY: result.token, USER_KEY: json.dumps(result.user)})
        self._commit(user=result.user, token=result.token, status=AuthStatus.SUCCEEDED)
        return AuthStatus.SUCCEEDED

    def logout(self) -> None:
        try:
            self.store.delete(TOKEN_KEY, USER_KEY)
        except StorageError as e:
            logger.warning("Could not clear persisted session: %s", e)
        self._commit(user=None, token=None, registration_completed=False)

    def _persist(self, items: Dict[str, str]) -> None:
        try:
            self.store.set_many(items)
        except StorageError as e:
            logger.warning("Could not persist session, keeping it in memory only: %s", e)

