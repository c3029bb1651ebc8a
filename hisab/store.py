# -*- coding: utf-8 -*-
"""
Worker and advance collections.

Every mutation is one database transaction: a failed commit is rolled back and
reported as ``PersistenceFailure``. There is no version token, so two clients
editing at once get last-write-wins.
"""
from __future__ import annotations

import logging
import secrets
import time
from datetime import datetime, timezone
from typing import Any

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from .errors import NotFound, PersistenceFailure
from .extensions import db
from .models import Advance, Worker
from .models.types import iso_timestamp, utcnow
from .validation import advance_fields, import_payload, worker_fields

logger = logging.getLogger(__name__)

_B36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    out = ""
    while True:
        n, r = divmod(n, 36)
        out = _B36[r] + out
        if not n:
            return out


def new_id() -> str:
    """Millisecond timestamp plus 52 random bits, both base 36."""
    return _base36(int(time.time() * 1000)) + _base36(secrets.randbits(52))


def _fresh_id(model) -> str:
    rid = new_id()
    while db.session.get(model, rid) is not None:
        rid = new_id()
    return rid


def _next_seq(model) -> int:
    return (db.session.query(func.max(model.seq)).scalar() or 0) + 1


def _commit(action: str) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to %s", action)
        raise PersistenceFailure(f"Failed to {action}")


# ------------ workers ---------------------------------------------------------
def list_workers() -> list[Worker]:
    return db.session.query(Worker).order_by(Worker.seq.asc(), Worker.id.asc()).all()


def get_worker(worker_id: str) -> Worker:
    w = db.session.get(Worker, worker_id)
    if w is None:
        raise NotFound("Worker not found")
    return w


def create_worker(payload: Any) -> Worker:
    # id / createdAt from the client are ignored
    fields = worker_fields(payload)
    w = Worker(id=_fresh_id(Worker), created_at=utcnow(), seq=_next_seq(Worker), **fields)
    db.session.add(w)
    _commit("save worker")
    logger.info("Worker %s created (%s)", w.id, w.name)
    return w


def update_worker(worker_id: str, payload: Any) -> Worker:
    w = get_worker(worker_id)
    fields = worker_fields(payload, partial=True)
    for attr, value in fields.items():
        setattr(w, attr, value)
    _commit("update worker")
    logger.info("Worker %s updated: %s", w.id, ", ".join(sorted(fields)) or "no changes")
    return w


def delete_worker(worker_id: str) -> int:
    """Delete a worker and its advances in one transaction; returns advances removed."""
    w = get_worker(worker_id)
    removed = (
        db.session.query(Advance)
        .filter(Advance.worker_id == worker_id)
        .delete()
    )
    db.session.delete(w)
    _commit("delete worker")
    logger.info("Worker %s deleted with %d advance(s)", worker_id, removed)
    return removed


# ------------ advances --------------------------------------------------------
def list_advances(worker_id: str | None = None) -> list[Advance]:
    q = db.session.query(Advance)
    if worker_id:
        q = q.filter(Advance.worker_id == worker_id)
    return q.order_by(Advance.seq.asc(), Advance.id.asc()).all()


def create_advance(payload: Any) -> Advance:
    fields = advance_fields(payload)
    a = Advance(id=_fresh_id(Advance), created_at=utcnow(), seq=_next_seq(Advance), **fields)
    db.session.add(a)
    _commit("save advance")
    logger.info("Advance %s of %s recorded for worker %s", a.id, a.amount, a.worker_id)
    return a


def delete_advance(advance_id: str) -> None:
    a = db.session.get(Advance, advance_id)
    if a is None:
        raise NotFound("Advance not found")
    db.session.delete(a)
    _commit("delete advance")
    logger.info("Advance %s deleted", advance_id)


# ------------ export / import -------------------------------------------------
def export_data() -> dict[str, Any]:
    return {
        "workers": [w.to_dict() for w in list_workers()],
        "advances": [a.to_dict() for a in list_advances()],
        "exportDate": iso_timestamp(datetime.now(timezone.utc)),
        "version": current_app.config.get("HISAB_EXPORT_VERSION", "1.0"),
    }


def import_data(payload: Any) -> tuple[int, int]:
    """Replace both collections; validation happens before anything is deleted."""
    workers, advances = import_payload(payload)
    now = utcnow()

    db.session.query(Advance).delete()
    db.session.query(Worker).delete()
    for i, fields in enumerate(workers, start=1):
        fields.setdefault("created_at", now)
        db.session.add(Worker(seq=i, **fields))
    for i, fields in enumerate(advances, start=1):
        fields.setdefault("created_at", now)
        db.session.add(Advance(seq=i, **fields))
    _commit("import data")
    logger.info("Imported %d worker(s) and %d advance(s)", len(workers), len(advances))
    return len(workers), len(advances)
