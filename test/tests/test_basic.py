"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong , David White Jr
Date: October 2025

Description:
Health check and public order endpoint smoke tests.
"""

def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok"}


def test_order_submission_is_public(client):
    # no login; an empty body is a validation problem, not an auth one
    r = client.post("/api/orders", json={})
    assert r.status_code == 422
    assert r.get_json()["message"] == "Validation failed"
