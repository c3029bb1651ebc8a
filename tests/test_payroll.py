from datetime import date
from decimal import Decimal

from hisab.models import Advance, Worker
from hisab.payroll import (
    dashboard_summary,
    filter_workers,
    format_money,
    month_from_query,
    monthly_advance_total,
    net_payable,
    salary_slip,
    worker_rows,
)


def _worker(wid="w1", name="Ali", designation="Mason", salary="30000"):
    return Worker(id=wid, name=name, designation=designation, salary=Decimal(salary),
                  joining_date=date(2024, 1, 15), seq=1)


def _advance(aid, worker_id, amount, d, note="", seq=1):
    return Advance(id=aid, worker_id=worker_id, amount=Decimal(amount), date=d, note=note, seq=seq)


def test_net_payable_subtracts_only_that_months_advances():
    ali = _worker()
    advances = [
        _advance("a1", "w1", "5000", date(2026, 10, 3)),
        _advance("a2", "w1", "1500", date(2026, 10, 31)),
        _advance("a3", "w1", "9999", date(2026, 9, 30)),   # previous month
        _advance("a4", "w1", "7000", date(2025, 10, 10)),  # same month, previous year
        _advance("a5", "w2", "4000", date(2026, 10, 10)),  # another worker
    ]

    assert monthly_advance_total(advances, "w1", 2026, 10) == Decimal("6500")
    assert net_payable(ali, advances, 2026, 10) == Decimal("23500")
    assert net_payable(ali, advances, 2026, 9) == Decimal("20001")


def test_net_payable_is_not_clamped_when_advances_exceed_salary():
    w = _worker(salary="10000")
    advances = [_advance("a1", "w1", "8000", date(2026, 3, 1)), _advance("a2", "w1", "4500", date(2026, 3, 2))]

    assert net_payable(w, advances, 2026, 3) == Decimal("-2500")


def test_sums_keep_decimal_precision():
    advances = [_advance("a1", "w1", "0.1", date(2026, 1, 1)), _advance("a2", "w1", "0.2", date(2026, 1, 2))]

    assert monthly_advance_total(advances, "w1", 2026, 1) == Decimal("0.3")


def test_month_without_advances_pays_full_salary():
    assert net_payable(_worker(salary="12345.67"), [], 2026, 2) == Decimal("12345.67")


def test_dashboard_summary_totals():
    workers = [_worker("w1", salary="30000"), _worker("w2", name="Bilal", salary="20000")]
    advances = [
        _advance("a1", "w1", "5000", date(2026, 10, 1)),
        _advance("a2", "w2", "2500", date(2026, 10, 20)),
        _advance("a3", "gone", "1000", date(2026, 10, 5)),  # worker deleted, still counted
        _advance("a4", "w1", "9999", date(2026, 9, 5)),
    ]

    s = dashboard_summary(workers, advances, 2026, 10)

    assert s.total_workers == 2
    assert s.total_salaries == Decimal("50000")
    assert s.total_advances_amount == Decimal("8500")
    assert s.net_payable_overall == Decimal("41500")
    assert s.to_dict() == {
        "month": "2026-10",
        "totalWorkers": 2,
        "totalSalaries": "50000",
        "totalAdvancesAmount": "8500",
        "netPayableOverall": "41500",
    }


def test_dashboard_summary_of_empty_store():
    s = dashboard_summary([], [], 2026, 1)

    assert s.total_workers == 0
    assert s.net_payable_overall == Decimal("0")


def test_filter_workers_matches_name_or_designation_case_insensitively():
    workers = [
        _worker("w1", name="Ali Khan", designation="Mason"),
        _worker("w2", name="Bilal", designation="Electrician"),
        _worker("w3", name="Sana", designation="Accountant"),
    ]

    assert [w.id for w in filter_workers(workers, "KHAN")] == ["w1"]
    assert [w.id for w in filter_workers(workers, "elec")] == ["w2"]
    assert [w.id for w in filter_workers(workers, "an")] == ["w1", "w2", "w3"]
    assert [w.id for w in filter_workers(workers, "   ")] == ["w1", "w2", "w3"]
    assert filter_workers(workers, "plumber") == []


def test_worker_rows_filter_before_aggregating():
    workers = [_worker("w1", name="Ali"), _worker("w2", name="Bilal", salary="20000")]
    advances = [_advance("a1", "w2", "2000", date(2026, 5, 5))]

    rows = worker_rows(workers, advances, 2026, 5, term="bil")

    assert len(rows) == 1
    row = rows[0].to_dict()
    assert row["id"] == "w2"
    assert row["monthlyAdvanceTotal"] == "2000"
    assert row["netPayable"] == "18000"
    assert row["isNegative"] is False


def test_format_money_rounds_for_display_only():
    value = Decimal("1234.5")

    assert format_money(Decimal("30000")) == "30,000"
    assert format_money(value) == "1,235"
    assert format_money("2.5") == "3"
    assert format_money(Decimal("-5000.4")) == "-5,000"
    assert format_money(1234567) == "1,234,567"
    assert value == Decimal("1234.5")


def test_month_from_query_falls_back_to_current_month():
    today = date(2026, 10, 19)

    assert month_from_query("2025-02", today) == (2025, 2)
    assert month_from_query(None, today) == (2026, 10)
    assert month_from_query("2025-13", today) == (2026, 10)
    assert month_from_query("garbage", today) == (2026, 10)


def test_salary_slip_lists_month_advances_by_date():
    w = _worker(name="Ali Khan")
    advances = [
        _advance("a2", "w1", "700", date(2026, 4, 20), note="fuel", seq=2),
        _advance("a1", "w1", "300", date(2026, 4, 2), note="", seq=1),
        _advance("a3", "w1", "999", date(2026, 5, 1), seq=3),
    ]

    slip = salary_slip(w, advances, 2026, 4)

    assert [a.id for a in slip.advances] == ["a1", "a2"]
    assert slip.total_advances == Decimal("1000")
    assert slip.net_payable == Decimal("29000")
    assert slip.period_label == "April 2026"
    assert slip.filename == "Ali_Khan_Salary_April_2026.pdf"
    assert slip.to_dict()["advances"][1] == {"date": "2026-04-20", "note": "fuel", "amount": "700"}


def test_format_money_handles_values_past_decimal_context():
    assert format_money(Decimal("1e30")) == "1," + ",".join(["000"] * 10)
    assert format_money(Decimal("123456789012345678901234567890.5")) == "123,456,789,012,345,678,901,234,567,891"
