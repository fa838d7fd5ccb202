"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Server-side order pricing. Totals are always derived from line unit prices
and quantities; totals sent by the client are never used.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from errors import ValidationError
from models import FULFILLMENT_TYPES

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value):
    """Quantize to cents using half-up rounding (0.005 -> 0.01)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity):
    return to_money(Decimal(str(unit_price)) * quantity)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    total: Decimal

    def as_dict(self):
        return {
            "subtotal": f"{self.subtotal:.2f}",
            "tax": f"{self.tax:.2f}",
            "delivery_fee": f"{self.delivery_fee:.2f}",
            "total": f"{self.total:.2f}",
        }


def _check_line(index, line, errors):
    quantity = line.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        errors[f"items.{index}.quantity"] = ["Quantity must be a whole number of at least 1."]
    try:
        price = Decimal(str(line.unit_price))
    except (InvalidOperation, TypeError):
        errors[f"items.{index}.unit_price"] = ["Unit price must be a number."]
        return
    if not price.is_finite() or price < 0:
        errors[f"items.{index}.unit_price"] = ["Unit price must be zero or more."]


def calculate_totals(lines, fulfillment_type, tax_rate, delivery_flat_fee):
    """Price a cart.

    ``lines`` is a sequence of objects with ``unit_price`` and ``quantity``.
    Each line total is rounded once, the subtotal is the exact sum of those,
    and tax is rounded half-up on the subtotal.
    """
    lines = list(lines)
    errors = {}
    if not lines:
        errors["items"] = ["The order must contain at least one item."]
    if fulfillment_type not in FULFILLMENT_TYPES:
        errors["type"] = ["Type must be one of: {}.".format(", ".join(FULFILLMENT_TYPES))]
    for index, line in enumerate(lines):
        _check_line(index, line, errors)
    if errors:
        raise ValidationError(errors)

    subtotal = to_money(sum((line_total(line.unit_price, line.quantity) for line in lines), ZERO))
    tax = to_money(subtotal * Decimal(str(tax_rate)))
    delivery_fee = to_money(Decimal(str(delivery_flat_fee))) if fulfillment_type == "delivery" else ZERO
    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        delivery_fee=delivery_fee,
        total=subtotal + tax + delivery_fee,
    )
