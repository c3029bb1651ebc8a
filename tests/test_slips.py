import io
import zipfile
from datetime import date

import pytest

from hisab.modules import slips


@pytest.fixture
def fake_pdf(monkeypatch):
    rendered = []

    def to_pdf(html):
        rendered.append(html)
        return b"%PDF-1.7 fake"

    monkeypatch.setattr(slips, "html_to_pdf", to_pdf)
    return rendered


def _setup(client, salary="30000"):
    ali = client.post("/api/workers", json={
        "name": "Ali Khan", "designation": "Mason", "salary": salary, "joiningDate": "2024-01-15",
    }).get_json()
    for amount, d, note in (("5000", "2026-04-02", "Eid"), ("1234.6", "2026-04-20", ""), ("999", "2026-05-01", "")):
        client.post("/api/advances", json={"workerId": ali["id"], "amount": amount, "date": d, "note": note})
    return ali


def test_slip_html_lists_month_figures(client):
    ali = _setup(client)

    res = client.get(f"/api/workers/{ali['id']}/slip?m=2026-04&format=html")

    html = res.get_data(as_text=True)
    assert res.status_code == 200
    assert "April 2026" in html
    assert "Name: Ali Khan" in html
    assert "Designation: Mason" in html
    assert "Joining Date: 15 Jan 2024" in html
    assert "PKR 30,000" in html
    assert "02 Apr 2026 - Eid" in html
    assert "- PKR 1,235" in html
    assert "- PKR 6,235" in html
    assert "PKR 23,765" in html
    assert "999" not in html


def test_slip_flags_negative_net_payable(client):
    ali = _setup(client, salary="1000")

    html = client.get(f"/api/workers/{ali['id']}/slip?m=2026-04&format=html").get_data(as_text=True)

    assert 'class="net negative"' in html
    assert "PKR -5,235" in html


def test_slip_pdf_download(client, fake_pdf):
    ali = _setup(client)

    res = client.get(f"/api/workers/{ali['id']}/slip?m=2026-04")

    assert res.status_code == 200
    assert res.mimetype == "application/pdf"
    assert res.data == b"%PDF-1.7 fake"
    assert "Ali_Khan_Salary_April_2026.pdf" in res.headers["Content-Disposition"]
    assert "Net Payable Salary" in fake_pdf[0]


def test_slip_for_missing_worker(client, fake_pdf):
    res = client.get("/api/workers/nope/slip")

    assert res.status_code == 404
    assert fake_pdf == []


def test_slip_rejects_unknown_format(client):
    ali = _setup(client)

    assert client.get(f"/api/workers/{ali['id']}/slip?format=docx").status_code == 400


def test_all_slips_zip(client, fake_pdf):
    _setup(client)
    client.post("/api/workers", json={"name": "Bilal", "salary": "20000", "joiningDate": "2025-03-01"})

    res = client.get("/api/slips?m=2026-04")

    assert res.status_code == 200
    names = zipfile.ZipFile(io.BytesIO(res.data)).namelist()
    assert names == ["Ali_Khan_Salary_April_2026.pdf", "Bilal_Salary_April_2026.pdf"]
    assert len(fake_pdf) == 2


def test_all_slips_without_workers(client, fake_pdf):
    res = client.get(f"/api/slips?m={date.today():%Y-%m}")

    assert res.status_code == 404
    assert res.get_json()["error"] == "No workers found"
