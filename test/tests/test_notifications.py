"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong , David White Jr
Date: October 2025

Description:
Notification tests: mail outbox, SMTP delivery and failure isolation.
"""

import logging
from unittest import mock

import pytest

from conftest import order_payload
from models import Order
from notifications import Mailer, NotificationDispatcher


class BrokenMailer(Mailer):
    def send(self, to, subject, body):
        raise ConnectionRefusedError("smtp down")


@pytest.fixture
def placed_order(app, client):
    client.post("/api/orders", json=order_payload(notes="Extra plantain"))
    with app.app_context():
        yield Order.query.one()


def test_dispatch_sends_all_channels(app, placed_order):
    mailer = Mailer(suppress=True, sender="orders@srms.test")
    broadcast = mock.Mock()
    result = NotificationDispatcher(mailer, "kitchen@srms.test", broadcast=broadcast).dispatch(placed_order)
    assert result == {"customer": True, "staff": True, "dashboard": True}
    assert [m["To"] for m in mailer.outbox] == ["tolu@lagosmail.com", "kitchen@srms.test"]
    assert "Extra plantain" in mailer.outbox[1].get_content()
    event, payload = broadcast.call_args.args
    assert event == "event"
    assert payload["type"] == "order.created"
    assert payload["order"]["reference"] == placed_order.reference


def test_failures_are_isolated_and_logged(app, placed_order, caplog):
    broadcast = mock.Mock()
    dispatcher = NotificationDispatcher(BrokenMailer(), "kitchen@srms.test", broadcast=broadcast)
    with caplog.at_level(logging.ERROR):
        result = dispatcher.dispatch(placed_order)
    assert result == {"customer": False, "staff": False, "dashboard": True}
    broadcast.assert_called_once()
    assert "customer notification" in caplog.text
    assert "staff notification" in caplog.text


def test_missing_staff_address_only_skips_staff(app, placed_order):
    mailer = Mailer(suppress=True)
    result = NotificationDispatcher(mailer, staff_address=None).dispatch(placed_order)
    assert result == {"customer": True, "staff": False, "dashboard": True}
    assert len(mailer.outbox) == 1


def test_mailer_uses_smtp_when_not_suppressed():
    mailer = Mailer(host="mail.srms.test", port=587, sender="orders@srms.test",
                    username="u", password="p", use_tls=True, timeout=3)
    with mock.patch("notifications.smtplib.SMTP") as smtp_cls:
        mailer.send("tolu@lagosmail.com", "Hi", "Body")
    smtp_cls.assert_called_once_with("mail.srms.test", 587, timeout=3)
    smtp = smtp_cls.return_value.__enter__.return_value
    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("u", "p")
    smtp.send_message.assert_called_once()
    assert mailer.outbox == []
