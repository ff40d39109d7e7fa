from __future__ import annotations


def test_leave_workflow(client, admin_headers, employee):
    resp = client.post(
        "/api/leave/request",
        json={"leave_type": "PAID", "start_date": "2026-04-01", "end_date": "2026-04-03"},
        headers=employee.headers,
    )
    assert resp.status_code == 201
    request_id = resp.get_json()["id"]

    resp = client.get("/api/leave/pending", headers=employee.headers)
    assert resp.status_code == 403

    pending = client.get("/api/leave/pending", headers=admin_headers).get_json()
    assert [r["id"] for r in pending] == [request_id]

    resp = client.put(
        f"/api/leave/{request_id}/approve",
        json={"admin_comments": "ok"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "APPROVED"

    resp = client.put(f"/api/leave/{request_id}/reject", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_STATUS"

    mine = client.get("/api/leave/my-requests", headers=employee.headers).get_json()
    assert [(r["id"], r["status"]) for r in mine] == [(request_id, "APPROVED")]
    assert len(client.get("/api/leave/all", headers=admin_headers).get_json()) == 1


def test_employee_cannot_approve(client, employee):
    resp = client.put("/api/leave/1/approve", headers=employee.headers)
    assert resp.status_code == 403


def test_unknown_request_is_not_found(client, admin_headers):
    resp = client.put("/api/leave/999/approve", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "LEAVE_NOT_FOUND"


def test_non_string_admin_comments_are_stored_as_text(client, admin_headers, employee):
    request_id = client.post(
        "/api/leave/request",
        json={"leave_type": "UNPAID", "start_date": "2026-05-04", "end_date": "2026-05-04"},
        headers=employee.headers,
    ).get_json()["id"]

    resp = client.put(f"/api/leave/{request_id}/reject", json={"admin_comments": 7}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()["admin_comments"] == "7"
