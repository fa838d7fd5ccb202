"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Order notifications: customer confirmation email, staff notification email
and the live dashboard event. Each is attempted once and independently; a
failure is logged and never reaches the customer or the order transaction.
"""

import smtplib
from email.message import EmailMessage

from flask import current_app, render_template

from errors import NotificationError


class Mailer:
    """Small SMTP client. With suppress=True messages go to ``outbox``."""

    def __init__(self, host="localhost", port=25, sender=None, username=None, password=None,
                 use_tls=False, timeout=10, suppress=False):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout
        self.suppress = suppress
        self.outbox = []

    @classmethod
    def from_config(cls, config):
        return cls(
            host=config["MAIL_SERVER"],
            port=config["MAIL_PORT"],
            sender=config["MAIL_DEFAULT_SENDER"],
            username=config.get("MAIL_USERNAME"),
            password=config.get("MAIL_PASSWORD"),
            use_tls=config["MAIL_USE_TLS"],
            timeout=config["MAIL_TIMEOUT"],
            suppress=config["MAIL_SUPPRESS_SEND"],
        )

    def send(self, to, subject, body):
        msg = EmailMessage()
        if self.sender:
            msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(body)
        if self.suppress:
            self.outbox.append(msg)
            return msg
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(msg)
        return msg


class NotificationDispatcher:
    def __init__(self, mailer, staff_address=None, broadcast=None, logger=None):
        self.mailer = mailer
        self.staff_address = staff_address
        self.broadcast = broadcast
        self.logger = logger or current_app.logger

    def send_customer_confirmation(self, order):
        body = render_template("emails/order_confirmation_customer.txt", order=order)
        self.mailer.send(order.customer_email, f"Order Confirmation - {order.reference}", body)

    def send_staff_notification(self, order):
        if not self.staff_address:
            raise RuntimeError("no staff notification address configured")
        body = render_template("emails/order_notification_staff.txt", order=order)
        self.mailer.send(self.staff_address, f"New {order.type} order {order.reference}", body)

    def publish_dashboard_event(self, order):
        if self.broadcast is None:
            return
        self.broadcast("event", {"type": "order.created", "order": order.to_summary()})

    def _attempt(self, channel, send, order):
        try:
            send(order)
        except Exception as exc:
            error = NotificationError(channel, order.reference, exc)
            self.logger.exception("%s", error)
            return False
        return True

    def dispatch(self, order):
        """Must only be called after the order has been committed."""
        return {
            "customer": self._attempt("customer", self.send_customer_confirmation, order),
            "staff": self._attempt("staff", self.send_staff_notification, order),
            "dashboard": self._attempt("dashboard", self.publish_dashboard_event, order),
        }
