from __future__ import annotations

import io

import pytest

from dtr_payroll.main import create_app

HEADER = "employee_id,entry_date,time_in,time_out,month,hours_worked,overtime_hrs,absent"


@pytest.fixture()
def client(container):
    app = create_app(container=container, settings_module="config.testing")
    return app.test_client()


def test_import_upload_returns_summary(client, records):
    data = {
        "file": (io.BytesIO(f"{HEADER}\n1001,8/1/2024,8:00,17:00,AUGUST,8,2,No\n".encode()), "dtr.csv"),
        "actor_id": "7",
    }
    resp = client.post("/api/dtr/import", data=data, content_type="multipart/form-data")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["imported"] == 1
    assert len(records.rows) == 1


def test_import_rejects_non_csv_upload(client):
    data = {"file": (io.BytesIO(b"x"), "dtr.xlsx")}
    resp = client.post("/api/dtr/import", data=data, content_type="multipart/form-data")

    assert resp.status_code == 400


def test_import_raw_body(client):
    resp = client.post(
        "/api/dtr/import",
        data=f"{HEADER}\n9999,8/1/2024,8:00,17:00,AUGUST,8,0,No\n",
        content_type="text/csv",
    )

    body = resp.get_json()
    assert body["success"] is False
    assert body["failed"] == 1
    assert body["errors"][0]["row"] == 2


def test_list_dtr_with_date_range(client, records, make_record):
    records.rows += [make_record(day=1), make_record(day=20)]

    resp = client.get("/api/dtr/1001?start=2024-08-10&end=2024-08-31")

    body = resp.get_json()
    assert [r["entry_date"] for r in body["records"]] == ["2024-08-20"]


def test_list_dtr_bad_date(client):
    assert client.get("/api/dtr/1001?start=08/01/2024").status_code == 400


def test_generate_list_and_delete_payslips(client, records, make_record):
    records.rows.append(make_record(day=1, hours="08:00:00", overtime="02:00:00"))

    resp = client.post(
        "/api/payslips/generate",
        json={"employee_ids": [1001, 1002], "month": "August", "year": 2024, "actor_id": 3},
    )
    body = resp.get_json()
    assert body["generated_count"] == 1
    assert body["error_count"] == 1

    listed = client.get("/api/payslips/1001").get_json()["payslips"]
    assert listed[0]["net_pay"] == "817.50"
    assert listed[0]["status_name"] == "PENDING"

    earnings = client.get("/api/payslips/1001/earnings").get_json()
    assert earnings["total_net_pay"] == "817.50"

    assert client.delete(f"/api/payslips/report/{listed[0]['report_id']}").status_code == 200
    assert client.delete(f"/api/payslips/report/{listed[0]['report_id']}").status_code == 404


def test_generate_requires_period(client):
    resp = client.post("/api/payslips/generate", json={"employee_ids": [1001]})
    assert resp.status_code == 400
