# -*- coding: utf-8 -*-
"""
Monthly payroll figures.

Pure functions over already-loaded workers and advances. An advance counts
toward a month when its calendar date falls in that month and year; net
payable is ``salary - advances`` and is allowed to go negative.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from .models import Advance, Worker
from .models.types import D, iso_date

ZERO = Decimal("0")


# ------------ helpers ---------------------------------------------------------
def month_from_query(qs: str | None, today: date | None = None) -> tuple[int, int]:
    """'YYYY-MM' -> (year, month); missing or malformed falls back to today."""
    today = today or date.today()
    if qs:
        try:
            y, m = map(int, qs.split("-"))
            date(y, m, 1)
            return y, m
        except Exception:
            pass
    return today.year, today.month


def month_label(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def in_month(d: date, year: int, month: int) -> bool:
    return d.year == year and d.month == month


def format_money(value) -> str:
    """Whole units with comma thousands separators; display only."""
    # exact at any magnitude, unlike quantize under the 28-digit context
    q = D(value).to_integral_value(rounding=ROUND_HALF_UP)
    return f"{q:,.0f}"


# ------------ per worker ------------------------------------------------------
def advances_for_month(advances: Iterable[Advance], worker_id: str, year: int, month: int) -> list[Advance]:
    return [
        a for a in advances
        if a.worker_id == worker_id and in_month(a.date, year, month)
    ]


def monthly_advance_total(advances: Iterable[Advance], worker_id: str, year: int, month: int) -> Decimal:
    return sum((D(a.amount) for a in advances_for_month(advances, worker_id, year, month)), ZERO)


def net_payable(worker: Worker, advances: Iterable[Advance], year: int, month: int) -> Decimal:
    return D(worker.salary) - monthly_advance_total(advances, worker.id, year, month)


def filter_workers(workers: Iterable[Worker], term: str | None) -> list[Worker]:
    term = (term or "").strip().lower()
    if not term:
        return list(workers)
    return [
        w for w in workers
        if term in (w.name or "").lower() or term in (w.designation or "").lower()
    ]


@dataclass
class WorkerRow:
    worker: Worker
    monthly_advance_total: Decimal
    net_payable: Decimal

    def to_dict(self) -> dict:
        out = self.worker.to_dict()
        out.update({
            "monthlyAdvanceTotal": str(self.monthly_advance_total),
            "netPayable": str(self.net_payable),
            "isNegative": self.net_payable < 0,
        })
        return out


def worker_rows(
    workers: Iterable[Worker],
    advances: Sequence[Advance],
    year: int,
    month: int,
    term: str | None = None,
) -> list[WorkerRow]:
    rows = []
    for w in filter_workers(workers, term):
        total = monthly_advance_total(advances, w.id, year, month)
        rows.append(WorkerRow(worker=w, monthly_advance_total=total, net_payable=D(w.salary) - total))
    return rows


# ------------ dashboard -------------------------------------------------------
@dataclass
class DashboardSummary:
    year: int
    month: int
    total_workers: int
    total_salaries: Decimal
    total_advances_amount: Decimal

    @property
    def net_payable_overall(self) -> Decimal:
        return self.total_salaries - self.total_advances_amount

    def to_dict(self) -> dict:
        return {
            "month": f"{self.year:04d}-{self.month:02d}",
            "totalWorkers": self.total_workers,
            "totalSalaries": str(self.total_salaries),
            "totalAdvancesAmount": str(self.total_advances_amount),
            "netPayableOverall": str(self.net_payable_overall),
        }


def dashboard_summary(
    workers: Sequence[Worker],
    advances: Iterable[Advance],
    year: int,
    month: int,
) -> DashboardSummary:
    # salaries are monthly and not date-bound; advances of deleted workers still count
    return DashboardSummary(
        year=year,
        month=month,
        total_workers=len(workers),
        total_salaries=sum((D(w.salary) for w in workers), ZERO),
        total_advances_amount=sum((D(a.amount) for a in advances if in_month(a.date, year, month)), ZERO),
    )


# ------------ salary slip -----------------------------------------------------
@dataclass
class SalarySlip:
    worker: Worker
    year: int
    month: int
    advances: list[Advance] = field(default_factory=list)

    @property
    def base_salary(self) -> Decimal:
        return D(self.worker.salary)

    @property
    def total_advances(self) -> Decimal:
        return sum((D(a.amount) for a in self.advances), ZERO)

    @property
    def net_payable(self) -> Decimal:
        return self.base_salary - self.total_advances

    @property
    def period_label(self) -> str:
        return month_label(self.year, self.month)

    @property
    def filename(self) -> str:
        name = "_".join((self.worker.name or "worker").split())
        name = "".join(ch for ch in name if ch.isalnum() or ch in "_-") or "worker"
        return f"{name}_Salary_{calendar.month_name[self.month]}_{self.year}.pdf"

    def to_dict(self) -> dict:
        return {
            "worker": self.worker.to_dict(),
            "month": f"{self.year:04d}-{self.month:02d}",
            "baseSalary": str(self.base_salary),
            "advances": [
                {"date": iso_date(a.date), "note": a.note or "", "amount": str(a.amount)}
                for a in self.advances
            ],
            "totalAdvances": str(self.total_advances),
            "netPayable": str(self.net_payable),
        }


def salary_slip(worker: Worker, advances: Iterable[Advance], year: int, month: int) -> SalarySlip:
    items = sorted(advances_for_month(advances, worker.id, year, month), key=lambda a: (a.date, a.seq or 0))
    return SalarySlip(worker=worker, year=year, month=month, advances=items)
