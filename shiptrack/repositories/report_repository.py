"""Reporting queries over ship groups (weekly activity, leaderboards)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select

from shiptrack.core.config import get_settings
from shiptrack.db.models import ShipGroup, ShipGroupMember, User
from shiptrack.db.session import get_session
from shiptrack.domain.activity import activity_window, as_utc, bucket_by_week


class ReportRepository:
    """Aggregations that feed the dashboard widgets."""

    def __init__(self) -> None:
        self.settings = get_settings()

    def recent_activity(self, now: Optional[datetime] = None, weeks: Optional[int] = None) -> dict[str, dict[str, int]]:
        """
        Count finished shipments per week and route.

        Keys are weeks ago as strings ("0" is the current week); weeks
        without finished shipments are not present.
        """
        now = as_utc(now or datetime.now(timezone.utc))
        start, end = activity_window(now, weeks if weeks is not None else self.settings.activity_weeks)
        stmt = select(ShipGroup.ship_route, ShipGroup.ship_end_date).where(
            ShipGroup.ship_end_date >= start,
            ShipGroup.ship_end_date <= end,
        )
        with get_session() as session:
            rows = session.execute(stmt).all()
        return bucket_by_week(now, ((route or "", ended_at) for route, ended_at in rows))

    def top_leaders(self, limit: Optional[int] = None) -> list[dict]:
        return self._leaderboard(ShipGroup.leader, limit)

    def top_members(self, limit: Optional[int] = None) -> list[dict]:
        return self._leaderboard(ShipGroupMember.email, limit)

    def _leaderboard(self, email_column, limit: Optional[int]) -> list[dict]:
        """
        Rank e-mails by shipment count and attach the account name/avatar.

        The limit is applied before the account join, so e-mails without an
        account still take a slot and are then dropped. Ties are ordered by
        e-mail.
        """
        size = limit if limit is not None else self.settings.leaderboard_size
        amount = func.count().label("amount")
        ranked = (
            select(email_column.label("email"), amount)
            .where(email_column.is_not(None))
            .group_by(email_column)
            .order_by(func.count().desc(), email_column.asc())
            .limit(size)
            .subquery()
        )
        stmt = (
            select(ranked.c.email, ranked.c.amount, User.name, User.avatar)
            .join(User, User.email == ranked.c.email)
            .order_by(ranked.c.amount.desc(), ranked.c.email.asc())
        )
        with get_session() as session:
            rows = session.execute(stmt).all()
        return [
            {
                "email": row.email,
                "amount": int(row.amount),
                "name": row.name,
                "avatar": row.avatar,
                "rank": f"Top {index}",
            }
            for index, row in enumerate(rows, start=1)
        ]
