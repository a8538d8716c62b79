from datetime import datetime, timedelta, timezone

from sqlalchemy import DateTime, event
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values read back from backends that drop the offset."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TimestampMixin(SQLModel):
    """
    created_at / updated_at columns maintained at flush time.

    Callers never assign these. Listeners registered with `track_timestamps`
    stamp both on insert and advance updated_at on every update. Values are
    timezone-aware UTC.
    """

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


def _next_timestamp(previous: datetime | None) -> datetime:
    now = utcnow()
    if previous is None:
        return now
    previous = as_utc(previous)
    # updated_at must strictly increase, even for updates within one clock tick
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def track_timestamps(model: type[TimestampMixin]) -> type[TimestampMixin]:
    """Register insert/update listeners that maintain the timestamp columns."""

    @event.listens_for(model, "before_insert")
    def _stamp_insert(mapper, connection, target):
        now = utcnow()
        target.created_at = now
        target.updated_at = now

    @event.listens_for(model, "before_update")
    def _stamp_update(mapper, connection, target):
        target.updated_at = _next_timestamp(target.updated_at)

    return model
