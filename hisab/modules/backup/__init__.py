# -*- coding: utf-8 -*-
from __future__ import annotations

from flask import Blueprint, jsonify

from ... import store
from .. import json_body

bp = Blueprint("backup", __name__)


@bp.get("/export")
def export():
    return jsonify(store.export_data())


@bp.post("/import")
def import_():
    workers, advances = store.import_data(json_body())
    return jsonify({
        "ok": True,
        "message": "Data imported successfully",
        "workers": workers,
        "advances": advances,
    })
