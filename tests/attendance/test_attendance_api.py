from __future__ import annotations

from datetime import date


def test_check_in_and_out(client, employee):
    resp = client.post("/api/attendance/checkin", headers=employee.headers)
    assert resp.status_code == 201
    assert resp.get_json()["check_out"] is None

    resp = client.post("/api/attendance/checkin", headers=employee.headers)
    assert resp.status_code == 409
    assert resp.get_json()["error"]["code"] == "DUPLICATE_CHECKIN"

    resp = client.post("/api/attendance/checkout", headers=employee.headers)
    assert resp.status_code == 200
    assert resp.get_json()["check_out"] is not None

    resp = client.post("/api/attendance/checkout", headers=employee.headers)
    assert resp.status_code == 409
    assert resp.get_json()["error"]["code"] == "ALREADY_CHECKEDOUT"


def test_checkout_without_checkin(client, employee):
    resp = client.post("/api/attendance/checkout", headers=employee.headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "NO_CHECKIN"


def test_daily_and_weekly(client, employee):
    client.post("/api/attendance/checkin", headers=employee.headers)
    today = date.today().isoformat()

    daily = client.get(f"/api/attendance/daily?date={today}", headers=employee.headers)
    assert daily.status_code == 200
    assert [r["date"] for r in daily.get_json()] == [today]

    weekly = client.get(f"/api/attendance/weekly?startDate={today}", headers=employee.headers)
    assert len(weekly.get_json()) == 1

    resp = client.get("/api/attendance/daily", headers=employee.headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "MISSING_DATE"


def test_user_history_is_admin_only(client, admin_headers, employee):
    client.post("/api/attendance/checkin", headers=employee.headers)

    resp = client.get(f"/api/attendance/user/{employee.id}", headers=employee.headers)
    assert resp.status_code == 403

    resp = client.get(f"/api/attendance/user/{employee.id}", headers=admin_headers)
    assert resp.status_code == 200
    assert len(resp.get_json()) == 1


def test_attendance_requires_token(client):
    resp = client.post("/api/attendance/checkin")
    assert resp.status_code == 401
