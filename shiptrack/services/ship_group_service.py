"""Ship group use cases (CRUD and dashboard reports)."""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError

from shiptrack.core.logging import get_logger
from shiptrack.repositories.report_repository import ReportRepository
from shiptrack.repositories.ship_group_repository import ShipGroupRepository

logger = get_logger(__name__)


class ShipGroupError(Exception):
    """Base exception for ship group workflow."""


class ShipGroupNotFoundError(ShipGroupError):
    """Raised when no ship group matches the id or tracking number."""


class TrackingNumberTakenError(ShipGroupError):
    """Raised when another ship group already uses the tracking number."""


class ShipGroupService:
    """Wraps ship group persistence and reporting for the routers."""

    def __init__(self) -> None:
        self.repository = ShipGroupRepository()
        self.reports = ReportRepository()

    def list_all(self) -> list[dict]:
        return self.repository.find_all()

    def get(self, ship_group_id: str) -> dict:
        record = self.repository.find_by_id(ship_group_id)
        if record is None:
            raise ShipGroupNotFoundError(f"Ship group {ship_group_id} not found")
        return record

    def get_by_tracking_number(self, tracking_number: str) -> dict:
        record = self.repository.find_by_tracking_number(tracking_number)
        if record is None:
            raise ShipGroupNotFoundError(f"Tracking number {tracking_number} not found")
        return record

    def create(self, fields: dict[str, Any]) -> dict:
        try:
            record = self.repository.create(fields)
        except IntegrityError as exc:
            raise TrackingNumberTakenError("Tracking number already in use") from exc
        logger.info("Ship group created", ship_group_id=record["id"], tracking_number=record["tracking_number"])
        return record

    def update(self, ship_group_id: str, fields: dict[str, Any]) -> dict:
        try:
            record = self.repository.update(ship_group_id, fields)
        except IntegrityError as exc:
            raise TrackingNumberTakenError("Tracking number already in use") from exc
        if record is None:
            raise ShipGroupNotFoundError(f"Ship group {ship_group_id} not found")
        logger.info("Ship group updated", ship_group_id=ship_group_id, fields=sorted(fields))
        return record

    def delete(self, ship_group_id: str) -> dict:
        record = self.repository.delete(ship_group_id)
        if record is None:
            raise ShipGroupNotFoundError(f"Ship group {ship_group_id} not found")
        logger.info("Ship group deleted", ship_group_id=ship_group_id)
        return record

    def count(self) -> int:
        return self.repository.count()

    def recent_activity(self) -> dict[str, dict[str, int]]:
        return self.reports.recent_activity()

    def top_leaders(self) -> list[dict]:
        return self.reports.top_leaders()

    def top_members(self) -> list[dict]:
        return self.reports.top_members()
