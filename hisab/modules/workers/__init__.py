# -*- coding: utf-8 -*-
from __future__ import annotations

from flask import Blueprint, jsonify, request

from ... import store
from ...payroll import filter_workers, worker_rows
from .. import json_body, selected_month

bp = Blueprint("workers", __name__, url_prefix="/workers")


@bp.get("")
def index():
    workers = filter_workers(store.list_workers(), request.args.get("q"))
    return jsonify([w.to_dict() for w in workers])


@bp.post("")
def create():
    w = store.create_worker(json_body())
    return jsonify(w.to_dict()), 201


@bp.put("/<worker_id>")
def update(worker_id: str):
    w = store.update_worker(worker_id, json_body())
    return jsonify(w.to_dict())


@bp.delete("/<worker_id>")
def delete(worker_id: str):
    removed = store.delete_worker(worker_id)
    return jsonify({
        "ok": True,
        "message": "Worker and related advances deleted successfully",
        "advancesDeleted": removed,
    })


@bp.get("/summary")
def summary():
    """Worker list view: each row with this month's advances and remaining salary."""
    y, m = selected_month()
    rows = worker_rows(store.list_workers(), store.list_advances(), y, m, request.args.get("q"))
    return jsonify([r.to_dict() for r in rows])
