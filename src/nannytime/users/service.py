from __future__ import annotations

import logging
import secrets
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_utc
from ..common.validators import require_email, require_min_length
from ..core.constants import DEFAULT_SESSION_TTL_HOURS, MIN_PASSWORD_LENGTH
from ..core.enums import SessionEvent
from ..core.exceptions import AuthenticationError, ValidationError
from .model import Session
from .repository import UserRepository

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionEvent, Optional[Session]], None]


class AuthService:
    """Use case: sign up, sign in, sign out and resolve session tokens.

    Sessions live in memory and expire `session_ttl` after they were issued;
    expired tokens are dropped whenever a session is issued or looked up.
    """

    def __init__(
        self,
        users: UserRepository,
        *,
        session_ttl: timedelta = timedelta(hours=DEFAULT_SESSION_TTL_HOURS),
        clock: Callable[[], datetime] = now_utc,
    ):
        self._users = users
        self._session_ttl = session_ttl
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def _is_expired(self, session: Session, now: datetime) -> bool:
        return now - session.created_at >= self._session_ttl

    def _purge_expired_locked(self, now: datetime) -> None:
        expired = [t for t, s in self._sessions.items() if self._is_expired(s, now)]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.info("Expired %d session(s)", len(expired))

    def _issue(self, *, user_id: str, email: str) -> Session:
        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            email=email,
            created_at=self._clock(),
        )
        with self._lock:
            self._purge_expired_locked(session.created_at)
            self._sessions[session.token] = session
        return session

    def sign_up(self, email: str, password: str) -> Session:
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("User already registered")

        user = self._users.create_user(email=email, password_hash=generate_password_hash(password))
        logger.info("Registered user %s", user.user_id)
        return self._issue(user_id=user.user_id, email=user.email)

    def sign_in(self, email: str, password: str) -> Session:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("Invalid login credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid login credentials")
        return self._issue(user_id=user.user_id, email=user.email)

    def sign_out(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def get_session(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        with self._lock:
            self._purge_expired_locked(self._clock())
            return self._sessions.get(token)

    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)


class AuthGate:
    """Client-side holder of the current session.

    Publishes every transition to subscribers; on_session_change returns the
    matching unsubscribe callable.
    """

    def __init__(self, auth: AuthService, session: Optional[Session] = None):
        self._auth = auth
        self._session = session
        self._listeners: list[SessionListener] = []

    def current_session(self) -> Optional[Session]:
        return self._session

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: SessionEvent) -> None:
        logger.info("Session change: %s", event.value)
        for listener in list(self._listeners):
            listener(event, self._session)

    def sign_in(self, email: str, password: str) -> Session:
        self._session = self._auth.sign_in(email, password)
        self._publish(SessionEvent.SIGNED_IN)
        return self._session

    def sign_up(self, email: str, password: str) -> Session:
        self._session = self._auth.sign_up(email, password)
        self._publish(SessionEvent.SIGNED_IN)
        return self._session

    def sign_out(self) -> None:
        if self._session is None:
            return
        self._auth.sign_out(self._session.token)
        self._session = None
        self._publish(SessionEvent.SIGNED_OUT)
