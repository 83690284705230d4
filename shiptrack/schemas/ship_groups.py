"""Ship group and report schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from shiptrack.schemas.users import CamelModel

# Columns that cannot be cleared with an explicit null.
_NOT_NULLABLE = ("tracking_number", "ship_route", "members", "details")


class ShipGroupCreate(CamelModel):
    """New ship group; unknown fields are kept in `details`."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    tracking_number: str = Field(..., min_length=1, max_length=128)
    leader: str | None = None
    members: list[str] = Field(default_factory=list)
    ship_route: str = ""
    ship_end_date: datetime | None = None
    status: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class ShipGroupUpdate(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    tracking_number: str | None = Field(None, min_length=1, max_length=128)
    leader: str | None = None
    members: list[str] | None = None
    ship_route: str | None = None
    ship_end_date: datetime | None = None
    status: str | None = None
    details: dict[str, Any] | None = None

    def changes(self) -> dict[str, Any]:
        """Fields sent by the client, minus nulls for required columns."""
        data = self.model_dump(exclude_unset=True)
        for key in _NOT_NULLABLE:
            if key in data and data[key] is None:
                data.pop(key)
        return data


class ShipGroupResponse(CamelModel):
    id: str
    tracking_number: str
    leader: str | None = None
    members: list[str] = Field(default_factory=list)
    ship_route: str = ""
    ship_end_date: datetime | None = None
    status: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CountResponse(CamelModel):
    total_ship_groups_number: int


class RecentActivityResponse(CamelModel):
    recent_activity: dict[str, dict[str, int]]


class LeaderboardEntry(CamelModel):
    email: str
    amount: int
    name: str
    avatar: str | None = None
    rank: str


class TopLeadersResponse(CamelModel):
    top_five_leaders: list[LeaderboardEntry]


class TopMembersResponse(CamelModel):
    top_five_users: list[LeaderboardEntry]
