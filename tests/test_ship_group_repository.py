"""
Smoke tests for the ShipGroupRepository against a temporary SQLite database.
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from shiptrack.repositories.ship_group_repository import ShipGroupRepository


def _record(**overrides):
    record = {
        "tracking_number": "TN-001",
        "leader": "lead@example.com",
        "members": ["b@example.com", "a@example.com", "a@example.com", " "],
        "ship_route": "Air",
        "ship_end_date": datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
    }
    record.update(overrides)
    return record


def test_create_and_find(temp_db):
    repo = ShipGroupRepository()
    created = repo.create(_record(weight_kg=12))

    assert created["id"]
    assert created["members"] == ["a@example.com", "b@example.com"]
    assert created["details"] == {"weight_kg": 12}
    assert created["ship_end_date"] == datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc)

    assert repo.find_by_id(created["id"])["tracking_number"] == "TN-001"
    assert repo.find_by_tracking_number("TN-001")["id"] == created["id"]
    assert [r["id"] for r in repo.find_all()] == [created["id"]]


def test_missing_or_malformed_ids_return_none(temp_db):
    repo = ShipGroupRepository()
    assert repo.find_by_id("does-not-exist") is None
    assert repo.find_by_id("") is None
    assert repo.find_by_tracking_number("nope") is None
    assert repo.update("does-not-exist", {"status": "x"}) is None
    assert repo.delete("does-not-exist") is None


def test_tracking_number_is_unique(temp_db):
    repo = ShipGroupRepository()
    repo.create(_record())
    with pytest.raises(IntegrityError):
        repo.create(_record(leader="other@example.com"))


def test_update_merges_fields(temp_db):
    repo = ShipGroupRepository()
    created = repo.create(_record(status="packing", carrier="DHL"))

    updated = repo.update(created["id"], {"status": "shipped", "note": "fragile", "members": ["c@example.com", "a@example.com"]})

    assert updated["status"] == "shipped"
    assert updated["ship_route"] == "Air"
    assert updated["leader"] == "lead@example.com"
    assert updated["details"] == {"carrier": "DHL", "note": "fragile"}
    assert updated["members"] == ["a@example.com", "c@example.com"]
    assert repo.find_by_id(created["id"])["members"] == ["a@example.com", "c@example.com"]


def test_delete_returns_removed_record_and_count(temp_db):
    repo = ShipGroupRepository()
    first = repo.create(_record())
    repo.create(_record(tracking_number="TN-002"))
    assert repo.count() == 2

    removed = repo.delete(first["id"])

    assert removed["tracking_number"] == "TN-001"
    assert repo.find_by_id(first["id"]) is None
    assert repo.count() == 1
