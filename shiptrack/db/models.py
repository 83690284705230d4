"""SQLAlchemy models for accounts, ship groups and sessions."""
from __future__ import annotations

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
    JSON,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    role = Column(String(16), nullable=False, index=True)  # buyer | merchant | admin
    avatar = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    sessions = relationship("UserSession", back_populates="user", cascade="all,delete-orphan")


class ShipGroup(Base):
    __tablename__ = "ship_groups"

    id = Column(String(32), primary_key=True, default=_new_id)
    tracking_number = Column(String(128), unique=True, index=True, nullable=False)
    leader = Column(String(255), index=True, nullable=True)
    ship_route = Column(String(128), nullable=False, default="")
    ship_end_date = Column(DateTime(timezone=True), nullable=True, index=True)
    status = Column(String(32), nullable=True)
    details = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    members = relationship(
        "ShipGroupMember",
        back_populates="ship_group",
        cascade="all,delete-orphan",
        lazy="selectin",
        order_by="ShipGroupMember.email",
    )


class ShipGroupMember(Base):
    __tablename__ = "ship_group_members"

    ship_group_id = Column(String(32), ForeignKey("ship_groups.id", ondelete="CASCADE"), primary_key=True)
    email = Column(String(255), primary_key=True, index=True)

    ship_group = relationship("ShipGroup", back_populates="members")


class UserSession(Base):
    __tablename__ = "sessions"

    token = Column(String(128), primary_key=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user_snapshot = Column(JSON, nullable=False, default=dict)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="sessions")
