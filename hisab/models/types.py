# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy.types import String, TypeDecorator


D = lambda v: Decimal(str(v)) if v is not None else Decimal("0")


class DecimalText(TypeDecorator):
    """Decimal kept as text so SQLite never rounds it through a float."""

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(D(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


def utcnow() -> datetime:
    # naive UTC, SQLite drops tzinfo anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


def iso_timestamp(value: datetime | None) -> str | None:
    """2024-01-15T09:30:00.000Z, same shape as JavaScript toISOString()."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def iso_date(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None
