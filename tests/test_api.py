from __future__ import annotations

import pytest

from src.shop_payroll.shop_payroll.core.enums import Role
from src.shop_payroll.shop_payroll.main import create_app


@pytest.fixture
def app():
    app = create_app("config.testing")
    container = app.extensions["shop_payroll"]
    auth = container.auth_service
    auth.register_account(username="admin", password="admin123", role=Role.ADMIN)
    auth.register_account(username="boss", password="boss123", role=Role.MANAGER)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, password):
    return client.post("/login", json={"username": username, "password": password})


def test_requires_login(client):
    assert client.get("/employees/1/entries").status_code == 401


def test_bad_credentials(client):
    resp = login(client, "admin", "nope")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "authentication-error"


def test_full_flow(app, client):
    assert login(client, "admin", "admin123").status_code == 200

    resp = client.post("/employees", json={"full_name": "Anna", "position": "seller"})
    assert resp.status_code == 201
    employee_id = resp.get_json()["employee_id"]

    resp = client.post(
        f"/employees/{employee_id}/entries",
        json={"date": "2020-01-01", "shop": "Main", "sales": "1000", "penalties": "50"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["version"] == 1

    client.post(f"/employees/{employee_id}/entries", json={"date": "2020-01-02"})

    resp = client.get(f"/employees/{employee_id}/compensation?start=2020-01-01&end=2020-01-31")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["worked_days"] == 2
    assert body["gross_pay"] == "1050.00"

    resp = client.get(f"/employees/{employee_id}/entries?start=2020-01-01&end=2020-01-31")
    assert [e["date"] for e in resp.get_json()] == ["2020-01-01", "2020-01-02"]


def test_status_codes_for_domain_errors(app, client):
    login(client, "admin", "admin123")
    employee_id = client.post("/employees", json={"full_name": "B", "position": "seller"}).get_json()["employee_id"]
    url = f"/employees/{employee_id}/entries"

    assert client.post(url, json={"date": "2020-01-01", "sales": -5}).status_code == 400
    assert client.post(url, json={"date": "2020-01-01"}).status_code == 201
    assert client.post(url, json={"date": "2020-01-01"}).get_json()["error"] == "duplicate-date"

    resp = client.patch(f"{url}/2020-01-01", json={"sales": 3, "version": 1})
    assert resp.status_code == 200
    resp = client.patch(f"{url}/2020-01-01", json={"sales": 4, "version": 1})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "conflict"

    assert client.patch(f"{url}/2020-01-05", json={"sales": 1}).status_code == 404
    assert client.get("/employees/999/compensation").status_code == 404


def test_manager_denied_admin_actions(app, client):
    login(client, "boss", "boss123")
    resp = client.post("/employees", json={"full_name": "C", "position": "seller"})
    assert resp.status_code == 403
    assert resp.get_json()["reason"] == "insufficient-role"


def test_employee_sees_only_own_ledger(app, client):
    container = app.extensions["shop_payroll"]
    login(client, "admin", "admin123")
    mine = client.post("/employees", json={"full_name": "Me", "position": "courier"}).get_json()["employee_id"]
    other = client.post("/employees", json={"full_name": "Other", "position": "courier"}).get_json()["employee_id"]
    client.post("/logout")

    container.auth_service.register_account(username="me", password="me1234", role=Role.EMPLOYEE, employee_id=mine)
    login(client, "me", "me1234")

    assert client.get(f"/employees/{mine}/entries").status_code == 200
    resp = client.get(f"/employees/{other}/entries")
    assert resp.status_code == 403
    assert resp.get_json()["reason"] == "not-owner"
    assert client.post(f"/employees/{mine}/entries", json={"date": "2020-01-01"}).status_code == 403


def test_rules_admin_only(app, client):
    login(client, "admin", "admin123")
    resp = client.put("/rules/manager", json={"base_rate": "900", "sales_percentage": "0.05"})
    assert resp.status_code == 200
    positions = [r["position"] for r in client.get("/rules").get_json()]
    assert "manager" in positions


def test_employee_reads_rules_but_cannot_change_them(app, client):
    container = app.extensions["shop_payroll"]
    login(client, "admin", "admin123")
    mine = client.post("/employees", json={"full_name": "Me", "position": "seller"}).get_json()["employee_id"]
    client.post("/logout")

    container.auth_service.register_account(username="me", password="me1234", role=Role.EMPLOYEE, employee_id=mine)
    login(client, "me", "me1234")

    resp = client.get("/rules")
    assert resp.status_code == 200
    assert "seller" in [r["position"] for r in resp.get_json()]
    assert client.put("/rules/seller", json={"base_rate": "1", "sales_percentage": "0"}).status_code == 403


def test_missing_rule_is_server_fault(app, client):
    login(client, "admin", "admin123")
    container = app.extensions["shop_payroll"]
    employee_id = client.post("/employees", json={"full_name": "D", "position": "admin"}).get_json()["employee_id"]
    container.rules_repo._rules.clear()

    resp = client.get(f"/employees/{employee_id}/compensation")
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "missing-rule"
