# -*- coding: utf-8 -*-
from __future__ import annotations

import io
import logging
import zipfile
from datetime import datetime

from flask import Blueprint, Response, current_app, render_template, request, send_file

from ... import store
from ...errors import NotFound, ValidationError
from ...payroll import SalarySlip, salary_slip
from .. import selected_month

logger = logging.getLogger(__name__)

bp = Blueprint("slips", __name__)


def render_slip_html(slip: SalarySlip) -> str:
    return render_template(
        "slips/slip.html",
        slip=slip,
        company=current_app.config["HISAB_COMPANY"],
        generated_at=datetime.now().strftime("%d %b %Y %H:%M"),
    )


def html_to_pdf(html: str) -> bytes:
    from weasyprint import HTML

    return HTML(string=html).write_pdf()


@bp.get("/workers/<worker_id>/slip")
def slip(worker_id: str):
    fmt = (request.args.get("format") or "pdf").lower()
    if fmt not in ("pdf", "html"):
        raise ValidationError("format must be pdf or html")
    y, m = selected_month()
    worker = store.get_worker(worker_id)
    s = salary_slip(worker, store.list_advances(worker_id=worker_id), y, m)
    html = render_slip_html(s)
    if fmt == "html":
        return Response(html, mimetype="text/html")
    logger.info("Salary slip %s for worker %s", s.period_label, worker_id)
    return send_file(
        io.BytesIO(html_to_pdf(html)),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=s.filename,
    )


@bp.get("/slips")
def all_slips():
    """Every worker's slip for the month, zipped."""
    y, m = selected_month()
    workers = store.list_workers()
    if not workers:
        raise NotFound("No workers found")
    advances = store.list_advances()

    buf = io.BytesIO()
    used: set[str] = set()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for w in workers:
            s = salary_slip(w, advances, y, m)
            name = s.filename
            if name in used:
                name = f"{name[:-4]}_{w.id}.pdf"
            used.add(name)
            zf.writestr(name, html_to_pdf(render_slip_html(s)))
    logger.info("Built %d salary slip(s) for %04d-%02d", len(workers), y, m)
    buf.seek(0)
    return send_file(
        buf,
        mimetype="application/zip",
        as_attachment=True,
        download_name=f"salary_slips_{y:04d}-{m:02d}.zip",
    )
