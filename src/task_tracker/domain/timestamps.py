from __future__ import annotations
from datetime import datetime, timezone
from typing import Callable, Tuple

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands datetimes back naive; everything we store is UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Timestamper:
    """
    Stamps createdAt/updatedAt for every mutation the task store performs.

    Storage adapters never set these fields on their own, so there is exactly
    one place that decides what "now" means for a record.
    """

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock

    def now(self) -> datetime:
        return as_utc(self._clock())

    def for_create(self) -> Tuple[datetime, datetime]:
        now = self.now()
        return now, now

    def for_update(self, previous_updated_at: datetime) -> datetime:
        # A clock that steps backwards must not move updatedAt backwards.
        return max(self.now(), as_utc(previous_updated_at))
