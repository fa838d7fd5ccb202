"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Database models for staff users, customers, the food catalog, and orders.
Money columns are fixed-point (2 decimals) and serialized as strings.
"""

import sqlite3
from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()

ORDER_STATUSES = ("pending", "confirmed", "preparing", "ready", "completed", "cancelled")
FULFILLMENT_TYPES = ("pickup", "delivery", "reservation")

Money = db.Numeric(10, 2)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _money(value):
    return None if value is None else f"{value:.2f}"


def _stamp(value):
    return value.isoformat() if value else None


def _in(column, values):
    return "{} IN ({})".format(column, ", ".join(f"'{v}'" for v in values))


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), default="admin")


class Customer(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    phone = db.Column(db.String(20))
    address = db.Column(db.Text)
    city = db.Column(db.String(100))
    state = db.Column(db.String(100))
    postal_code = db.Column(db.String(20))
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    orders = db.relationship("Order", back_populates="customer", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "created_at": _stamp(self.created_at),
        }


class Food(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, index=True)
    description = db.Column(db.Text)
    image = db.Column(db.String(255))
    category = db.Column(db.String(80), nullable=False, default="General")
    is_active = db.Column(db.Boolean, default=True)
    sort_order = db.Column(db.Integer, default=0)
    portion_sizes = db.relationship(
        "FoodPortionSize",
        backref="food",
        cascade="all, delete-orphan",
        order_by="FoodPortionSize.sort_order",
        lazy=True,
    )

    def price_for(self, size_name):
        for size in self.portion_sizes:
            if size.size_name == size_name:
                return size.price
        return None

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "category": self.category,
            "portion_sizes": {s.size_name: _money(s.price) for s in self.portion_sizes},
        }


class FoodPortionSize(db.Model):
    __table_args__ = (db.UniqueConstraint("food_id", "size_name"),)

    id = db.Column(db.Integer, primary_key=True)
    food_id = db.Column(db.Integer, db.ForeignKey("food.id", ondelete="CASCADE"), nullable=False)
    size_name = db.Column(db.String(120), nullable=False)
    price = db.Column(Money, nullable=False)
    sort_order = db.Column(db.Integer, default=0)


class Order(db.Model):
    __table_args__ = (
        db.CheckConstraint(_in("status", ORDER_STATUSES), name="ck_order_status"),
        db.CheckConstraint(_in("type", FULFILLMENT_TYPES), name="ck_order_type"),
        db.CheckConstraint("type = 'delivery' OR delivery_fee = 0", name="ck_order_delivery_fee"),
    )

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customer.id"), nullable=False)
    reference = db.Column(db.String(40), unique=True, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending")
    type = db.Column(db.String(20), nullable=False, default="pickup")

    subtotal = db.Column(Money, nullable=False)
    tax = db.Column(Money, nullable=False, default=0)
    delivery_fee = db.Column(Money, nullable=False, default=0)
    total = db.Column(Money, nullable=False)

    # Contact details as submitted, independent of the customer record
    customer_name = db.Column(db.String(255), nullable=False)
    customer_email = db.Column(db.String(255), nullable=False)
    customer_phone = db.Column(db.String(20))

    delivery_address = db.Column(db.Text)
    delivery_city = db.Column(db.String(100))
    delivery_state = db.Column(db.String(100))
    delivery_postal_code = db.Column(db.String(20))

    scheduled_at = db.Column(db.DateTime)
    ready_at = db.Column(db.DateTime)
    notes = db.Column(db.Text)
    admin_notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = db.relationship("Customer", back_populates="orders")
    items = db.relationship(
        "OrderItem",
        backref="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy=True,
    )

    def to_summary(self):
        return {
            "id": self.id,
            "reference": self.reference,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "status": self.status,
            "type": self.type,
            "subtotal": _money(self.subtotal),
            "tax": _money(self.tax),
            "delivery_fee": _money(self.delivery_fee),
            "total": _money(self.total),
            "items_count": len(self.items),
            "created_at": _stamp(self.created_at),
            "scheduled_date_time": _stamp(self.scheduled_at),
        }

    def to_dict(self, include_admin=False):
        data = self.to_summary()
        data.update({
            "delivery_address": self.delivery_address,
            "delivery_city": self.delivery_city,
            "delivery_state": self.delivery_state,
            "delivery_postal_code": self.delivery_postal_code,
            "ready_at": _stamp(self.ready_at),
            "notes": self.notes,
            "items": [i.to_dict() for i in self.items],
        })
        if include_admin:
            data["admin_notes"] = self.admin_notes
            data["updated_at"] = _stamp(self.updated_at)
            data["customer"] = self.customer.to_dict() if self.customer else None
        return data


class OrderItem(db.Model):
    __table_args__ = (db.CheckConstraint("quantity > 0", name="ck_order_item_quantity"),)

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("order.id", ondelete="CASCADE"), nullable=False)
    # Provenance only; the snapshot columns below are authoritative
    food_id = db.Column(db.Integer, db.ForeignKey("food.id", ondelete="SET NULL"), nullable=True)
    food_name = db.Column(db.String(120), nullable=False)
    size_name = db.Column(db.String(120), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(Money, nullable=False)
    total_price = db.Column(Money, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    food = db.relationship("Food")

    def to_dict(self):
        return {
            "id": self.id,
            "food_id": self.food_id,
            "food_name": self.food_name,
            "size_name": self.size_name,
            "quantity": self.quantity,
            "unit_price": _money(self.unit_price),
            "total_price": _money(self.total_price),
        }
