"""Calendar boundaries used by the statistics endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True)
class PeriodStarts:
    """Start instants (UTC) of the current day, ISO week and month."""

    today: datetime
    this_week: datetime
    this_month: datetime

    @classmethod
    def at(cls, now: datetime | None = None) -> PeriodStarts:
        now = now or datetime.now(UTC)
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return cls(
            today=today,
            this_week=today - timedelta(days=today.weekday()),
            this_month=today.replace(day=1),
        )
