"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong , David White Jr
Date: October 2025

Description:
Staff API tests: order listing, detail, status updates, customers and catalog.
"""

from sqlalchemy import event

from conftest import cart_line, order_payload
from models import Customer, db


def _place(client, **overrides):
    r = client.post("/api/orders", json=order_payload(**overrides))
    assert r.status_code == 201
    return r.get_json()["order"]


def test_staff_endpoints_require_login(client):
    for path in ("/api/orders", "/api/orders/1", "/api/customers"):
        assert client.get(path).status_code == 401
    assert client.patch("/api/orders/1", json={"status": "ready"}).status_code == 401


def test_list_orders_with_filters_and_counts(client, auth_headers):
    _place(client)
    _place(client, type="delivery", delivery_address="1 Broad St", items=[cart_line(), cart_line(name="Eba")])
    _place(client, type="reservation", scheduled_date_time="2025-12-24T19:00:00")

    data = client.get("/api/orders", headers=auth_headers).get_json()
    assert len(data["orders"]) == 3
    assert data["status_counts"]["all"] == 3
    assert data["status_counts"]["pending"] == 3
    assert data["status_counts"]["cancelled"] == 0

    delivery = client.get("/api/orders?type=delivery", headers=auth_headers).get_json()["orders"]
    assert [(o["type"], o["items_count"], o["total"]) for o in delivery] == [("delivery", 2, "357.00")]

    assert client.get("/api/orders?status=ready", headers=auth_headers).get_json()["orders"] == []
    assert len(client.get("/api/orders?status=all&type=all", headers=auth_headers).get_json()["orders"]) == 3


def test_order_detail_includes_customer_and_admin_fields(client, auth_headers):
    order = _place(client, notes="Ring the bell")
    detail = client.get(f"/api/orders/{order['id']}", headers=auth_headers).get_json()
    assert detail["reference"] == order["reference"]
    assert detail["notes"] == "Ring the bell"
    assert detail["admin_notes"] is None
    assert detail["customer"]["email"] == "tolu@lagosmail.com"
    assert len(detail["items"]) == 1
    assert client.get("/api/orders/999", headers=auth_headers).status_code == 404


def test_staff_status_update_stamps_ready_at(client, auth_headers):
    order = _place(client)
    r = client.patch(f"/api/orders/{order['id']}", json={"status": "confirmed", "admin_notes": "VIP"},
                     headers=auth_headers)
    assert r.status_code == 200
    assert r.get_json()["status"] == "confirmed"
    assert r.get_json()["admin_notes"] == "VIP"
    assert r.get_json()["ready_at"] is None

    r = client.patch(f"/api/orders/{order['id']}", json={"status": "ready"}, headers=auth_headers)
    body = r.get_json()
    assert body["status"] == "ready"
    assert body["ready_at"] is not None
    assert body["admin_notes"] == "VIP"


def test_invalid_status_rejected(client, auth_headers):
    order = _place(client)
    r = client.patch(f"/api/orders/{order['id']}", json={"status": "eaten"}, headers=auth_headers)
    assert r.status_code == 422
    assert "status" in r.get_json()["errors"]


def test_customers_listing(app, client, auth_headers):
    _place(client)
    _place(client, type="delivery", delivery_address="1 Broad St")
    with app.app_context():
        db.session.add(Customer(name="Window Shopper", email="browse@lagosmail.com", password_hash="x"))
        db.session.commit()

    rows = client.get("/api/customers", headers=auth_headers).get_json()
    by_email = {row["email"]: row for row in rows}
    assert by_email["tolu@lagosmail.com"]["orders_count"] == 2
    assert by_email["tolu@lagosmail.com"]["total_spent"] == "357.00"
    assert by_email["tolu@lagosmail.com"]["last_order_date"] is not None
    assert by_email["browse@lagosmail.com"]["orders_count"] == 0
    assert by_email["browse@lagosmail.com"]["total_spent"] == "0.00"

    found = client.get("/api/customers?search=window", headers=auth_headers).get_json()
    assert [row["email"] for row in found] == ["browse@lagosmail.com"]


def test_catalog_grouped_by_category(client, catalog):
    data = client.get("/api/foods").get_json()
    assert set(data) == {"Rice", "Fufu"}
    jollof = next(f for f in data["Rice"] if f["name"] == "Jollof Rice")
    assert jollof["portion_sizes"]["Full Pan"] == "80.00"

    fufu_only = client.get("/api/foods?category=Fufu").get_json()
    assert list(fufu_only) == ["Fufu"]


def test_order_listing_loads_items_in_one_query(app, client, auth_headers):
    for _ in range(4):
        _place(client)
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    with app.app_context():
        engine = db.engine
    event.listen(engine, "before_cursor_execute", record)
    try:
        data = client.get("/api/orders", headers=auth_headers).get_json()
    finally:
        event.remove(engine, "before_cursor_execute", record)
    assert [o["items_count"] for o in data["orders"]] == [1, 1, 1, 1]
    item_selects = [s for s in statements if "FROM order_item" in s]
    assert len(item_selects) == 1
