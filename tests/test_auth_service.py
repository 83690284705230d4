from __future__ import annotations

import pytest

from shiptrack.domain.roles import UserRole
from shiptrack.repositories.user_repository import UserRepository
from shiptrack.services.auth_service import (
    AccountExistsError,
    AuthService,
    InvalidCredentialsError,
    SessionMissingError,
    UserNotFoundError,
)
from shiptrack.services.session_service import get_session_context


def _signup(svc: AuthService, email: str = "ana@example.com", password: str = "s3cret-pass", role: str = "buyer"):
    return svc.signup(name="Ana", email=email, password=password, role=role)


def test_signup_creates_account_and_session(temp_db):
    svc = AuthService()
    result = _signup(svc, role="merchant")

    assert result.user["email"] == "ana@example.com"
    assert result.user["role"] == "merchant"
    assert "password" not in result.user
    assert "password_hash" not in result.user

    stored = UserRepository().get_user_by_email("ana@example.com")
    assert stored.role == UserRole.MERCHANT.value
    assert stored.password_hash != "s3cret-pass"

    context = get_session_context(result.session_token)
    assert context is not None
    assert context.user_id == stored.id
    assert svc.profile(context) == result.user


def test_signup_rejects_duplicate_email_across_roles(temp_db):
    svc = AuthService()
    _signup(svc, role="buyer")
    with pytest.raises(AccountExistsError):
        _signup(svc, email="ANA@example.com ", role="admin")


def test_login_checks_email_then_password(temp_db):
    svc = AuthService()
    _signup(svc)

    with pytest.raises(UserNotFoundError):
        svc.login("nobody@example.com", "s3cret-pass")
    with pytest.raises(InvalidCredentialsError):
        svc.login("ana@example.com", "wrong")

    result = svc.login("ana@example.com", "s3cret-pass")
    assert result.user["name"] == "Ana"
    assert get_session_context(result.session_token) is not None


def test_profile_and_change_password_require_session(temp_db):
    svc = AuthService()
    with pytest.raises(SessionMissingError):
        svc.profile(None)
    with pytest.raises(SessionMissingError):
        svc.change_password(None, "a", "b")


def test_logout_destroys_session(temp_db):
    svc = AuthService()
    result = _signup(svc)
    context = get_session_context(result.session_token)

    svc.logout(context)
    svc.logout(None)

    assert get_session_context(result.session_token) is None


def test_change_password_twice_in_same_session(temp_db):
    svc = AuthService()
    result = _signup(svc, role="admin")
    context = get_session_context(result.session_token)

    with pytest.raises(InvalidCredentialsError):
        svc.change_password(context, "not-it", "new-pass-1")

    svc.change_password(context, "s3cret-pass", "new-pass-1")
    svc.change_password(get_session_context(result.session_token), "new-pass-1", "new-pass-2")

    with pytest.raises(InvalidCredentialsError):
        svc.login("ana@example.com", "s3cret-pass")
    with pytest.raises(InvalidCredentialsError):
        svc.login("ana@example.com", "new-pass-1")
    assert svc.login("ana@example.com", "new-pass-2").user["role"] == "admin"


def test_new_session_purges_expired_rows(temp_db):
    from datetime import datetime, timedelta, timezone

    from shiptrack.db.models import UserSession
    from shiptrack.db.session import get_session

    svc = AuthService()
    first = _signup(svc)
    with get_session() as session:
        stale = session.get(UserSession, first.session_token)
        stale.expires_at = datetime.now(timezone.utc) - timedelta(minutes=5)
        session.commit()

    second = svc.login("ana@example.com", "s3cret-pass")

    with get_session() as session:
        assert session.get(UserSession, first.session_token) is None
        assert session.get(UserSession, second.session_token) is not None
