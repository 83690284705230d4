"""Data access helpers for accounts (buyers, merchants and admins)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select

from shiptrack.db.models import User
from shiptrack.db.session import get_session
from shiptrack.domain.roles import UserRole

MUTABLE_FIELDS = {"name", "email", "password_hash", "avatar"}


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class UserRepository:
    """CRUD helpers wrapping the users table."""

    # -------------------------- create --------------------------
    def create_user(
        self,
        role: UserRole | str,
        *,
        name: str,
        email: str,
        password_hash: str,
        avatar: str | None = None,
    ) -> User:
        entity = User(
            name=(name or "").strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            role=UserRole(role).value,
            avatar=avatar,
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def create_buyer(self, **fields: Any) -> User:
        return self.create_user(UserRole.BUYER, **fields)

    def create_merchant(self, **fields: Any) -> User:
        return self.create_user(UserRole.MERCHANT, **fields)

    def create_admin(self, **fields: Any) -> User:
        return self.create_user(UserRole.ADMIN, **fields)

    # -------------------------- read --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        if not user_id:
            return None
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == normalize_email(email))
            return session.execute(stmt).scalar_one_or_none()

    # -------------------------- update --------------------------
    def update_user(self, role: UserRole | str, user_id: str, **fields: Any) -> Optional[User]:
        """Apply a partial update to an account of the given role."""
        values = {key: value for key, value in fields.items() if key in MUTABLE_FIELDS}
        if "email" in values:
            values["email"] = normalize_email(values["email"])
        with get_session() as session:
            entity = session.get(User, user_id) if user_id else None
            if not entity or entity.role != UserRole(role).value:
                return None
            for key, value in values.items():
                setattr(entity, key, value)
            entity.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(entity)
            return entity

    def update_buyer(self, user_id: str, **fields: Any) -> Optional[User]:
        return self.update_user(UserRole.BUYER, user_id, **fields)

    def update_merchant(self, user_id: str, **fields: Any) -> Optional[User]:
        return self.update_user(UserRole.MERCHANT, user_id, **fields)

    def update_admin(self, user_id: str, **fields: Any) -> Optional[User]:
        return self.update_user(UserRole.ADMIN, user_id, **fields)
