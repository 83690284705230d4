"""Session helpers (issue tokens, cookies, validation)."""
from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Response
from sqlalchemy import delete

from shiptrack.core.config import get_settings
from shiptrack.db.models import User, UserSession
from shiptrack.db.session import get_session
from shiptrack.domain.activity import as_utc

SESSION_COOKIE_NAME = "session"


@dataclass(frozen=True)
class SessionContext:
    """Authenticated identity attached to a request."""

    token: str
    user_id: str
    user: dict = field(default_factory=dict)

    @property
    def role(self) -> str:
        return self.user.get("role", "")


def user_snapshot(user: User) -> dict:
    """Public view of an account; never carries the password hash."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "avatar": user.avatar,
    }


def purge_expired_sessions(now: datetime | None = None) -> int:
    """Delete sessions past their expiry; returns how many were removed."""
    now = now or datetime.now(timezone.utc)
    with get_session() as session:
        result = session.execute(delete(UserSession).where(UserSession.expires_at < now))
        session.commit()
        return int(result.rowcount or 0)


def issue_session(user: User) -> str:
    """Create a new session token bound to the user and persist it."""
    token = secrets.token_urlsafe(32)
    settings = get_settings()
    ttl = max(60, settings.session_ttl_seconds)
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(seconds=ttl)

    purge_expired_sessions(now)
    with get_session() as session:
        session.add(UserSession(token=token, user_id=user.id, user_snapshot=user_snapshot(user), expires_at=expires_at))
        session.commit()
    return token


def get_session_context(token: str | None) -> Optional[SessionContext]:
    """Resolve a token to its session; expired sessions are removed."""
    if not token:
        return None

    now = datetime.now(timezone.utc)
    with get_session() as session:
        db_session = session.get(UserSession, token)
        if not db_session:
            return None
        if db_session.expires_at and as_utc(db_session.expires_at) < now:
            session.delete(db_session)
            session.commit()
            return None
        return SessionContext(token=db_session.token, user_id=db_session.user_id, user=dict(db_session.user_snapshot or {}))


def refresh_session_snapshot(token: str, user: User) -> None:
    with get_session() as session:
        db_session = session.get(UserSession, token)
        if db_session:
            db_session.user_snapshot = user_snapshot(user)
            session.commit()


def delete_session(token: str | None) -> None:
    """Remove a session token from the store."""
    if not token:
        return
    with get_session() as session:
        entity = session.get(UserSession, token)
        if entity:
            session.delete(entity)
            session.commit()


def current_session(request: Request) -> Optional[SessionContext]:
    """FastAPI dependency returning the session for the request cookie, if any."""
    return get_session_context(request.cookies.get(SESSION_COOKIE_NAME))


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    secure_cookie = settings.app_env == "prod"
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=secure_cookie,
        samesite="lax",
        max_age=settings.session_ttl_seconds,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
