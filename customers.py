"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Maps whoever submitted an order to a Customer row: the signed-in customer,
an existing customer with the same email, or a newly created one.
"""

import secrets

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from errors import ConflictError
from models import Customer, db


def normalize_email(email, case_insensitive=True):
    email = email.strip()
    return email.lower() if case_insensitive else email


def find_customer_by_email(email, case_insensitive=True):
    key = normalize_email(email, case_insensitive)
    if case_insensitive:
        return Customer.query.filter(func.lower(Customer.email) == key).first()
    return Customer.query.filter_by(email=key).first()


def unusable_password_hash():
    # Nobody knows this secret; the customer sets a real password via reset
    return generate_password_hash(secrets.token_urlsafe(32))


def _apply_contact(customer, contact):
    customer.name = contact.name
    if contact.phone:
        customer.phone = contact.phone


def resolve_customer(contact, customer_id=None, case_insensitive=True):
    """Return the Customer an order should belong to.

    Must run first in the unit of work: a lost creation race rolls back the
    session, which is only harmless while nothing else is pending.
    """
    if customer_id is not None:
        customer = db.session.get(Customer, customer_id)
        if customer is not None:
            return customer
        current_app.logger.warning("Session customer %s no longer exists; treating as guest", customer_id)

    customer = find_customer_by_email(contact.email, case_insensitive)
    if customer is not None:
        _apply_contact(customer, contact)
        return customer

    customer = Customer(
        name=contact.name,
        email=normalize_email(contact.email, case_insensitive),
        phone=contact.phone,
        password_hash=unusable_password_hash(),
    )
    db.session.add(customer)
    try:
        db.session.flush()
    except IntegrityError:
        # Another request created this email between our lookup and insert
        db.session.rollback()
        current_app.logger.warning("Customer creation race for %s; using existing row", customer.email)
        customer = find_customer_by_email(contact.email, case_insensitive)
        if customer is None:
            raise ConflictError(f"Could not resolve customer for {contact.email}")
        _apply_contact(customer, contact)
    return customer
