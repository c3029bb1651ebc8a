# -*- coding: utf-8 -*-
from __future__ import annotations

import io
import logging

from flask import Blueprint, current_app, jsonify, send_file

from ... import store
from ...payroll import dashboard_summary, format_money, month_label, worker_rows
from .. import selected_month

logger = logging.getLogger(__name__)

bp = Blueprint("dashboard", __name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@bp.get("/dashboard")
def index():
    y, m = selected_month()
    s = dashboard_summary(store.list_workers(), store.list_advances(), y, m)
    cur = current_app.config["HISAB_CURRENCY"]
    payload = s.to_dict()
    payload["currency"] = cur
    payload["formatted"] = {
        "totalSalaries": f"{cur} {format_money(s.total_salaries)}",
        "totalAdvancesAmount": f"{cur} {format_money(s.total_advances_amount)}",
        "netPayableOverall": f"{cur} {format_money(s.net_payable_overall)}",
    }
    return jsonify(payload)


def build_register(rows, year: int, month: int, currency: str) -> bytes:
    """Monthly payroll register: one row per worker plus a totals row."""
    import openpyxl
    from openpyxl.styles import Font

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = f"{year:04d}-{month:02d}"
    ws.append([f"Payroll register, {month_label(year, month)}"])
    ws["A1"].font = Font(bold=True, size=13)
    headers = ["Name", "Designation", f"Salary ({currency})", f"Advances ({currency})", f"Net payable ({currency})"]
    ws.append(headers)
    for c in ws[2]:
        c.font = Font(bold=True)

    for r in rows:
        ws.append([
            r.worker.name,
            r.worker.designation or "",
            r.worker.salary,
            r.monthly_advance_total,
            r.net_payable,
        ])

    first, last = 3, 2 + len(rows)
    total_row = last + 1
    ws.cell(row=total_row, column=1, value="Total").font = Font(bold=True)
    for col in ("C", "D", "E"):
        cell = ws[f"{col}{total_row}"]
        cell.value = f"=SUM({col}{first}:{col}{last})" if rows else 0
        cell.font = Font(bold=True)
    for row in ws.iter_rows(min_row=first, max_row=total_row, min_col=3, max_col=5):
        for cell in row:
            cell.number_format = "#,##0"

    for col, width in zip("ABCDE", (28, 22, 16, 16, 18)):
        ws.column_dimensions[col].width = width

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@bp.get("/payroll/register.xlsx")
def register():
    y, m = selected_month()
    rows = worker_rows(store.list_workers(), store.list_advances(), y, m)
    content = build_register(rows, y, m, current_app.config["HISAB_CURRENCY"])
    logger.info("Payroll register %04d-%02d built for %d worker(s)", y, m, len(rows))
    return send_file(
        io.BytesIO(content),
        mimetype=XLSX_MIME,
        as_attachment=True,
        download_name=f"payroll_register_{y:04d}-{m:02d}.xlsx",
    )
