# -*- coding: utf-8 -*-
from __future__ import annotations

from flask import request

from ..errors import ValidationError
from ..payroll import month_from_query


def json_body():
    payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationError("Request body must be JSON")
    return payload


def selected_month() -> tuple[int, int]:
    """?m=YYYY-MM, current month by default."""
    return month_from_query(request.args.get("m"))
