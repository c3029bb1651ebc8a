# -*- coding: utf-8 -*-
from __future__ import annotations

from flask import Blueprint, jsonify, request

from ... import store
from .. import json_body

bp = Blueprint("advances", __name__, url_prefix="/advances")


@bp.get("")
def index():
    advances = store.list_advances(worker_id=(request.args.get("workerId") or "").strip() or None)
    return jsonify([a.to_dict() for a in advances])


@bp.post("")
def create():
    a = store.create_advance(json_body())
    return jsonify(a.to_dict()), 201


@bp.delete("/<advance_id>")
def delete(advance_id: str):
    store.delete_advance(advance_id)
    return jsonify({"ok": True, "message": "Advance deleted successfully"})
