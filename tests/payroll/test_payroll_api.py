from __future__ import annotations


def test_payroll_endpoints(client, admin_headers, employee):
    payload = {"user_id": employee.id, "month": 3, "year": 2026, "base_salary": 5000, "deductions": 500}

    resp = client.post("/api/payroll", json=payload, headers=employee.headers)
    assert resp.status_code == 403

    resp = client.post("/api/payroll", json=payload, headers=admin_headers)
    assert resp.status_code == 201
    entry = resp.get_json()
    assert entry["net_salary"] == "4500.00"

    resp = client.post("/api/payroll", json=payload, headers=admin_headers)
    assert resp.status_code == 409
    assert resp.get_json()["error"]["code"] == "DUPLICATE_PAYROLL"

    mine = client.get("/api/payroll/my-payroll", headers=employee.headers).get_json()
    assert [e["id"] for e in mine] == [entry["id"]]

    assert len(client.get("/api/payroll", headers=admin_headers).get_json()) == 1
    assert len(client.get(f"/api/payroll/user/{employee.id}", headers=admin_headers).get_json()) == 1

    resp = client.put(f"/api/payroll/{entry['id']}", json={"base_salary": 6000}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()["net_salary"] == "5500.00"

    resp = client.delete(f"/api/payroll/{entry['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert client.get("/api/payroll/my-payroll", headers=employee.headers).get_json() == []


def test_invalid_month_over_http(client, admin_headers, employee):
    resp = client.post(
        "/api/payroll",
        json={"user_id": employee.id, "month": 0, "year": 2026, "base_salary": 10},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_MONTH"
