"""
Authentication and account use cases.

Signup, login, profile, logout and password change. Persistence errors are
not handled here; routers map them to 500 responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError

from shiptrack.core.logging import get_logger
from shiptrack.core.security import hash_password, verify_password
from shiptrack.domain.roles import UserRole
from shiptrack.repositories.user_repository import UserRepository
from shiptrack.services.session_service import (
    SessionContext,
    delete_session,
    issue_session,
    refresh_session_snapshot,
    user_snapshot,
)

logger = get_logger(__name__)


class AuthError(Exception):
    """Base class for authentication-related exceptions."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class AccountExistsError(AuthError):
    pass


class UserNotFoundError(AuthError):
    pass


class InvalidCredentialsError(AuthError):
    pass


class SessionMissingError(AuthError):
    pass


@dataclass
class AuthResult:
    user: dict
    session_token: str


@dataclass
class AuthService:
    """Orchestrates the account repository and the session store."""

    def __post_init__(self):
        self.repository = UserRepository()

    def _creator(self, role: UserRole):
        return {
            UserRole.BUYER: self.repository.create_buyer,
            UserRole.MERCHANT: self.repository.create_merchant,
            UserRole.ADMIN: self.repository.create_admin,
        }[role]

    def _updater(self, role: UserRole):
        return {
            UserRole.BUYER: self.repository.update_buyer,
            UserRole.MERCHANT: self.repository.update_merchant,
            UserRole.ADMIN: self.repository.update_admin,
        }[role]

    # -------------------------------------- signup --------------------------------------
    def signup(self, name: str, email: str, password: str, role: UserRole | str, avatar: str | None = None) -> AuthResult:
        role = UserRole(role)
        if self.repository.get_user_by_email(email):
            logger.info("Signup rejected, email taken", role=role.value)
            raise AccountExistsError("User with same email already exists")

        password_hash = hash_password(password)
        try:
            user = self._creator(role)(name=name, email=email, password_hash=password_hash, avatar=avatar)
        except IntegrityError as exc:
            # concurrent signup won the unique index
            raise AccountExistsError("User with same email already exists") from exc

        token = issue_session(user)
        logger.info("Account created", user_id=user.id, role=role.value)
        return AuthResult(user=user_snapshot(user), session_token=token)

    # -------------------------------------- login --------------------------------------
    def login(self, email: str, password: str) -> AuthResult:
        user = self.repository.get_user_by_email(email)
        if not user:
            logger.info("Login rejected, unknown email")
            raise UserNotFoundError("User does not exist")
        if not verify_password(password, user.password_hash):
            logger.info("Login rejected, wrong password", user_id=user.id)
            raise InvalidCredentialsError("Wrong password")

        token = issue_session(user)
        logger.info("Login succeeded", user_id=user.id, role=user.role)
        return AuthResult(user=user_snapshot(user), session_token=token)

    # -------------------------------------- session --------------------------------------
    def profile(self, context: Optional[SessionContext]) -> dict:
        if context is None:
            raise SessionMissingError("No active session")
        return dict(context.user)

    def logout(self, context: Optional[SessionContext]) -> None:
        if context is None:
            return
        delete_session(context.token)
        logger.info("Logged out", user_id=context.user_id)

    # -------------------------------------- password --------------------------------------
    def change_password(self, context: Optional[SessionContext], old_password: str, new_password: str) -> None:
        if context is None:
            raise SessionMissingError("No active session")

        # Check against the stored hash, not anything cached in the session.
        user = self.repository.get_user(context.user_id)
        if user is None:
            raise UserNotFoundError("User does not exist")
        if not verify_password(old_password, user.password_hash):
            raise InvalidCredentialsError("Incorrect old password")

        updated = self._updater(UserRole(context.role or user.role))(user.id, password_hash=hash_password(new_password))
        if updated is None:
            raise UserNotFoundError("User does not exist")
        refresh_session_snapshot(context.token, updated)
        logger.info("Password changed", user_id=user.id)
