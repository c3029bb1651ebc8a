# -*- coding: utf-8 -*-
"""
Parsing of incoming JSON payloads into model attributes.

Every function raises ``ValidationError`` with a readable message; nothing here
touches the database, so a rejected payload never leaves a partial write.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import ValidationError
from .models import Advance, Worker

# JSON key -> model attribute
WORKER_FIELDS = {
    "name": "name",
    "designation": "designation",
    "salary": "salary",
    "joiningDate": "joining_date",
}
ADVANCE_FIELDS = {
    "workerId": "worker_id",
    "amount": "amount",
    "date": "date",
    "note": "note",
}


MONEY_LIMIT = Decimal("1000000000000000")
MONEY_PLACES = 6


def parse_money(value: Any, field: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number")
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not d.is_finite():
        raise ValidationError(f"{field} must be a number")
    if d < 0:
        raise ValidationError(f"{field} cannot be negative")
    if d >= MONEY_LIMIT:
        raise ValidationError(f"{field} is too large")
    if -d.as_tuple().exponent > MONEY_PLACES:
        raise ValidationError(f"{field} allows at most {MONEY_PLACES} decimal places")
    # plain notation: "3e4" is kept as 30000, "-0" as 0
    return Decimal(format(abs(d), "f"))


def parse_date(value: Any, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a date (YYYY-MM-DD)")
    # only the calendar part counts, "2024-05-31T23:00:00.000Z" is 31 May
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        raise ValidationError(f"{field} must be a date (YYYY-MM-DD)")


def parse_timestamp(value: Any, field: str) -> datetime:
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str) and value.strip():
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            ts = datetime.fromisoformat(s)
        except ValueError:
            raise ValidationError(f"{field} must be an ISO timestamp")
    else:
        raise ValidationError(f"{field} must be an ISO timestamp")
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


def parse_text(value: Any, field: str, required: bool = False) -> str:
    if value is None:
        value = ""
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ValidationError(f"{field} must be text")
    text = str(value).strip()
    if required and not text:
        raise ValidationError(f"{field} is required")
    return text


def _require_mapping(payload: Any, what: str) -> Mapping:
    if not isinstance(payload, Mapping):
        raise ValidationError(f"{what} must be a JSON object")
    return payload


def worker_fields(payload: Any, partial: bool = False) -> dict[str, Any]:
    """Model attributes for a worker create (all required) or update (subset)."""
    payload = _require_mapping(payload, "Worker")
    out: dict[str, Any] = {}
    for key, attr in WORKER_FIELDS.items():
        if key not in payload:
            if partial or key == "designation":
                continue
            raise ValidationError(f"{key} is required")
        value = payload[key]
        if key == "name":
            out[attr] = parse_text(value, key, required=True)
        elif key == "designation":
            out[attr] = parse_text(value, key)
        elif key == "salary":
            out[attr] = parse_money(value, key)
        else:
            out[attr] = parse_date(value, key)
    if not partial:
        out.setdefault("designation", "")
    return out


def advance_fields(payload: Any) -> dict[str, Any]:
    payload = _require_mapping(payload, "Advance")
    for key in ("workerId", "amount", "date"):
        if key not in payload:
            raise ValidationError(f"{key} is required")
    return {
        "worker_id": parse_text(payload["workerId"], "workerId", required=True),
        "amount": parse_money(payload["amount"], "amount"),
        "date": parse_date(payload["date"], "date"),
        "note": parse_text(payload.get("note"), "note"),
    }


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _record_identity(rec: Mapping, what: str, index: int, seen: set[str]) -> dict[str, Any]:
    rid = rec.get("id")
    if not isinstance(rid, str) or not rid.strip():
        raise ValidationError(f"{what}[{index}]: id is required")
    if rid in seen:
        raise ValidationError(f"{what}[{index}]: duplicate id {rid!r}")
    seen.add(rid)
    if rec.get("createdAt") in (None, ""):
        raise ValidationError(f"{what}[{index}]: createdAt is required")
    return {"id": rid, "created_at": parse_timestamp(rec["createdAt"], f"{what}[{index}].createdAt")}


def _require_export_form(rec: Mapping, exported: Mapping, where: str) -> None:
    """The record must read exactly as /export would write it back."""
    for key in rec:
        if key not in exported:
            raise ValidationError(f"{where}: unknown field {key!r}")
    for key, value in exported.items():
        if key not in rec:
            raise ValidationError(f"{where}: {key} is required")
        if type(rec[key]) is not type(value) or rec[key] != value:
            raise ValidationError(f"{where}: {key} must be written as {value!r}")


def import_payload(payload: Any) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """
    Validate a full backup; returns (workers, advances) as model attribute dicts.

    Records are accepted only in the form export produces (money as decimal
    strings, every field present, no extra keys), so that importing and then
    exporting gives back the same collections.
    """
    payload = _require_mapping(payload, "Import payload")
    raw_workers = payload.get("workers")
    raw_advances = payload.get("advances")
    if not _is_sequence(raw_workers) or not _is_sequence(raw_advances):
        raise ValidationError("Invalid data format: workers and advances must be arrays")

    workers: list[dict[str, Any]] = []
    seen: set[str] = set()
    for i, rec in enumerate(raw_workers):
        rec = _require_mapping(rec, f"workers[{i}]")
        try:
            fields = worker_fields(rec)
        except ValidationError as exc:
            raise ValidationError(f"workers[{i}]: {exc.message}")
        fields.update(_record_identity(rec, "workers", i, seen))
        _require_export_form(rec, Worker(**fields).to_dict(), f"workers[{i}]")
        workers.append(fields)

    advances: list[dict[str, Any]] = []
    seen = set()
    for i, rec in enumerate(raw_advances):
        rec = _require_mapping(rec, f"advances[{i}]")
        try:
            fields = advance_fields(rec)
        except ValidationError as exc:
            raise ValidationError(f"advances[{i}]: {exc.message}")
        fields.update(_record_identity(rec, "advances", i, seen))
        _require_export_form(rec, Advance(**fields).to_dict(), f"advances[{i}]")
        advances.append(fields)

    return workers, advances
