"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Application configuration. Values are read from the environment (and a local
.env file when present) and loaded into Flask with app.config.from_object.
"""

import os
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()


def _flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    DEBUG = _flag("FLASK_DEBUG")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///srms.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DB_TIMEOUT_SECONDS = float(os.getenv("DB_TIMEOUT_SECONDS", "5"))

    # Pricing
    TAX_RATE = Decimal(os.getenv("TAX_RATE", "0.10"))
    DELIVERY_FLAT_FEE = Decimal(os.getenv("DELIVERY_FLAT_FEE", "5.00"))

    # Orders
    ORDER_REFERENCE_PREFIX = os.getenv("ORDER_REFERENCE_PREFIX", "ORD")
    ORDER_REFERENCE_MAX_ATTEMPTS = int(os.getenv("ORDER_REFERENCE_MAX_ATTEMPTS", "5"))
    CUSTOMER_EMAIL_CASE_INSENSITIVE = _flag("CUSTOMER_EMAIL_CASE_INSENSITIVE", True)
    ENFORCE_CATALOG_PRICES = _flag("ENFORCE_CATALOG_PRICES")

    # Notifications
    STAFF_NOTIFICATION_ADDRESS = os.getenv("ADMIN_EMAIL", "admin@example.com")
    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "25"))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_USE_TLS = _flag("MAIL_USE_TLS")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "orders@example.com")
    MAIL_TIMEOUT = float(os.getenv("MAIL_TIMEOUT", "10"))
    MAIL_SUPPRESS_SEND = _flag("MAIL_SUPPRESS_SEND")

    # None lets Flask-SocketIO pick eventlet when it is installed
    SOCKETIO_ASYNC_MODE = os.getenv("SOCKETIO_ASYNC_MODE") or None
