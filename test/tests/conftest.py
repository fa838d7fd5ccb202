"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong , David White Jr
Date: October 2025

Description:
Shared fixtures: a fresh in-memory app per test, a test client, a staff
session, the seeded food catalog, and order payload builders.
"""

import os, sys

import pytest
from werkzeug.security import generate_password_hash

# --- Make sure project root is importable ---
TESTS_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(TESTS_DIR, os.pardir, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app import create_app  # noqa: E402
from models import User, db  # noqa: E402
from seed import seed_catalog  # noqa: E402


@pytest.fixture
def app():
    app = create_app(testing=True)
    with app.app_context():
        db.drop_all()
        db.create_all()
        admin = User(username="admin", password_hash=generate_password_hash("password"), role="admin")
        db.session.add(admin)
        db.session.commit()
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(client):
    # Session cookie flow: the client keeps the cookie, no header needed
    resp = client.post("/login", json={"username": "admin", "password": "password"})
    assert resp.status_code == 200
    return {}


@pytest.fixture
def catalog(app):
    with app.app_context():
        seed_catalog()
        db.session.commit()


@pytest.fixture
def mailer(app):
    return app.extensions["mailer"]


def cart_line(name="Jollof Rice", size="Full Pan", unit_price=80.00, quantity=2):
    return {"name": name, "size": size, "unitPrice": unit_price, "quantity": quantity}


def order_payload(**overrides):
    payload = {
        "items": [cart_line()],
        "type": "pickup",
        "customer_name": "Tolu Adeyemi",
        "customer_email": "tolu@lagosmail.com",
        "customer_phone": "555-0101",
    }
    payload.update(overrides)
    return payload
