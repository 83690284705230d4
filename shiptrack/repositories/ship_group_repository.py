"""Data access helpers for ship groups."""
from __future__ import annotations

from typing import Any, Iterable, Optional

from sqlalchemy import func, select

from shiptrack.db.models import ShipGroup, ShipGroupMember
from shiptrack.db.session import get_session
from shiptrack.domain.activity import as_utc
from shiptrack.repositories.user_repository import normalize_email

# Fields stored in their own columns; anything else lands in `details`.
COLUMN_FIELDS = {"tracking_number", "leader", "ship_route", "ship_end_date", "status"}
READ_ONLY_FIELDS = {"id", "created_at", "updated_at"}


def ship_group_to_dict(entity: ShipGroup) -> dict:
    return {
        "id": entity.id,
        "tracking_number": entity.tracking_number,
        "leader": entity.leader,
        "members": [member.email for member in entity.members],
        "ship_route": entity.ship_route,
        "ship_end_date": as_utc(entity.ship_end_date) if entity.ship_end_date else None,
        "status": entity.status,
        "details": dict(entity.details or {}),
        "created_at": entity.created_at,
        "updated_at": entity.updated_at,
    }


def normalize_members(members: Iterable[str] | None) -> list[str]:
    """Normalize, drop blanks and de-duplicate member e-mails."""
    return sorted({normalize_email(email) for email in (members or []) if normalize_email(email)})


def split_fields(fields: dict[str, Any]) -> tuple[dict, dict, Optional[list[str]]]:
    """Separate column values, extra detail fields and the member list."""
    columns: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    members = None
    for key, value in fields.items():
        if key in READ_ONLY_FIELDS:
            continue
        if key == "members":
            members = normalize_members(value)
        elif key == "details" and isinstance(value, dict):
            extra.update(value)
        elif key in COLUMN_FIELDS:
            if key == "ship_end_date" and value is not None:
                value = as_utc(value)
            elif key == "leader" and value is not None:
                value = normalize_email(value) or None
            columns[key] = value
        else:
            extra[key] = value
    return columns, extra, members


class ShipGroupRepository:
    """CRUD helpers for the ship_groups table."""

    def find_all(self) -> list[dict]:
        with get_session() as session:
            entities = session.execute(select(ShipGroup)).scalars().all()
            return [ship_group_to_dict(entity) for entity in entities]

    def find_by_id(self, ship_group_id: str) -> Optional[dict]:
        if not ship_group_id:
            return None
        with get_session() as session:
            entity = session.get(ShipGroup, ship_group_id)
            return ship_group_to_dict(entity) if entity else None

    def find_by_tracking_number(self, tracking_number: str) -> Optional[dict]:
        with get_session() as session:
            stmt = select(ShipGroup).where(ShipGroup.tracking_number == tracking_number).limit(1)
            entity = session.execute(stmt).scalars().first()
            return ship_group_to_dict(entity) if entity else None

    def create(self, record: dict[str, Any]) -> dict:
        columns, extra, members = split_fields(record)
        with get_session() as session:
            entity = ShipGroup(**columns, details=extra)
            entity.members = [ShipGroupMember(email=email) for email in members or []]
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return ship_group_to_dict(entity)

    def update(self, ship_group_id: str, fields: dict[str, Any]) -> Optional[dict]:
        """Overwrite the given fields only; returns the updated record."""
        columns, extra, members = split_fields(fields)
        with get_session() as session:
            entity = session.get(ShipGroup, ship_group_id) if ship_group_id else None
            if not entity:
                return None
            for key, value in columns.items():
                setattr(entity, key, value)
            if extra:
                entity.details = {**(entity.details or {}), **extra}
            if members is not None:
                current = {member.email: member for member in entity.members}
                entity.members = [current.get(email) or ShipGroupMember(email=email) for email in members]
            session.commit()
            session.refresh(entity)
            return ship_group_to_dict(entity)

    def delete(self, ship_group_id: str) -> Optional[dict]:
        with get_session() as session:
            entity = session.get(ShipGroup, ship_group_id) if ship_group_id else None
            if not entity:
                return None
            removed = ship_group_to_dict(entity)
            session.delete(entity)
            session.commit()
            return removed

    def count(self) -> int:
        with get_session() as session:
            return int(session.scalar(select(func.count()).select_from(ShipGroup)) or 0)
