from __future__ import annotations

import pytest

from dayflow.company.service import split_full_name

SETUP = {
    "company_name": "Acme",
    "company_code": "acme",
    "admin_name": "Jane Doe",
    "admin_email": "Jane@Acme.com",
    "admin_password": "s3cretpass",
}


def test_setup_creates_company_and_admin(client):
    assert client.get("/api/company/exists").get_json() == {"exists": False}

    resp = client.post("/api/company/setup", json=SETUP)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["company"]["name"] == "Acme"
    assert body["company"]["code"] == "ACME"
    assert body["admin"]["email"] == "jane@acme.com"
    assert body["admin"]["role"] == "ADMIN"

    assert client.get("/api/company/exists").get_json() == {"exists": True}
    assert client.get("/api/company").get_json()["code"] == "ACME"


def test_admin_profile_gets_split_name(client, repos):
    body = client.post("/api/company/setup", json=SETUP).get_json()
    employee = repos.users.get_employee(body["admin"]["id"])
    assert employee.profile.first_name == "Jane"
    assert employee.profile.last_name == "Doe"
    assert employee.user.password_change_required is False


def test_second_setup_is_rejected(client):
    client.post("/api/company/setup", json=SETUP)

    resp = client.post("/api/company/setup", json=dict(SETUP, company_code="OTHER", admin_email="x@other.com"))
    assert resp.status_code == 409
    assert resp.get_json()["error"]["code"] == "COMPANY_EXISTS"
    assert client.get("/api/company").get_json()["code"] == "ACME"


@pytest.mark.parametrize("field", sorted(SETUP))
def test_setup_requires_every_field(client, field):
    resp = client.post("/api/company/setup", json=dict(SETUP, **{field: "  "}))
    assert resp.status_code == 400
    error = resp.get_json()["error"]
    assert error["code"] == "MISSING_REQUIRED_FIELDS"
    assert field in error["details"]["required"]
    assert client.get("/api/company/exists").get_json() == {"exists": False}


def test_company_not_found_before_setup(client):
    resp = client.get("/api/company")
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "COMPANY_NOT_FOUND"


def test_non_object_body_is_rejected(client):
    resp = client.post("/api/company/setup", json=["Acme"])
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_BODY"


@pytest.mark.parametrize(
    "full_name, expected",
    [
        ("Jane Doe", ("Jane", "Doe")),
        ("Mary Ann  Smith", ("Mary", "Ann Smith")),
        ("Cher", ("Cher", "Cher")),
    ],
)
def test_split_full_name(full_name, expected):
    assert split_full_name(full_name) == expected


@pytest.mark.parametrize("field", ["admin_name", "admin_email", "company_code"])
def test_setup_rejects_non_string_fields(client, field):
    resp = client.post("/api/company/setup", json=dict(SETUP, **{field: 123}))
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "MISSING_REQUIRED_FIELDS"
    assert client.get("/api/company/exists").get_json() == {"exists": False}


def test_setup_coerces_logo(client):
    resp = client.post("/api/company/setup", json=dict(SETUP, company_logo=42))
    assert resp.status_code == 201
    assert resp.get_json()["company"]["logo_url"] == "42"
