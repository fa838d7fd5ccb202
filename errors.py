"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Error types raised by the ordering workflow and the Flask handlers that turn
them into JSON responses.
"""

from flask import current_app, jsonify

GENERIC_FAILURE = "Failed to place order. Please try again."


class OrderError(Exception):
    """Base class for ordering workflow failures."""


class ValidationError(OrderError):
    """Malformed or out-of-range input. Carries a field -> messages map."""

    def __init__(self, errors):
        super().__init__("Validation failed")
        self.errors = {field: list(messages) for field, messages in errors.items()}

    @classmethod
    def single(cls, field, message):
        return cls({field: [message]})


class ConflictError(OrderError):
    """A uniqueness violation that could not be resolved by retrying."""


class PersistenceError(OrderError):
    """The store failed or timed out. Nothing was committed; safe to retry."""


class NotificationError(OrderError):
    def __init__(self, channel, reference, cause):
        super().__init__(f"{channel} notification for order {reference} failed: {cause}")
        self.channel = channel
        self.reference = reference
        self.cause = cause


def failure_response(exc, status):
    body = {
        "success": False,
        "message": GENERIC_FAILURE,
        "errors": {"general": GENERIC_FAILURE},
        "error": str(exc) if current_app.debug else None,
    }
    return jsonify(body), status


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation(exc):
        return jsonify({"success": False, "message": "Validation failed", "errors": exc.errors}), 422

    # ConflictError and PersistenceError: nothing was committed, so retrying is safe
    @app.errorhandler(OrderError)
    def handle_retryable(exc):
        current_app.logger.error("Order request failed: %s", exc)
        return failure_response(exc, 503)
