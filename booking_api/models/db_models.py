from typing import Optional
from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_storage(dt: datetime) -> datetime:
    """Normalize to aware UTC before binding. Naive input is taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def from_storage(dt: datetime) -> datetime:
    # SQLite hands back the UTC wall time without an offset
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)


class Booking(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    phone: Optional[str] = Field(default=None, index=True)
    email: Optional[str] = None
    service: str
    notes: str = ""
    start_at: datetime = Field(sa_type=DateTime(timezone=True), index=True)
    # Reserved; written on update, never interpreted
    status: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
