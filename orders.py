"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Order placement. An order, its items and the customer reconciliation are
written in one transaction: afterwards either all of it exists or none of it.
Notifications are sent by the caller once place_order has returned.
"""

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from customers import resolve_customer
from errors import ConflictError, PersistenceError, ValidationError
from models import Food, Order, OrderItem, db
from pricing import calculate_totals, line_total
from references import generate_order_reference


def _catalog_food(name):
    return Food.query.filter_by(name=name).first()


def _check_catalog_price(index, line, food):
    if food is None:
        return
    price = food.price_for(line.size)
    if price is not None and price != line.unit_price:
        raise ValidationError.single(
            f"items.{index}.unit_price",
            f"The price of {line.name} ({line.size}) is now {price:.2f}.",
        )


def _attach_items(order, lines, enforce_prices=False):
    for index, line in enumerate(lines):
        food = _catalog_food(line.name)
        if enforce_prices:
            _check_catalog_price(index, line, food)
        order.items.append(OrderItem(
            food_id=food.id if food else None,
            food_name=line.name,
            size_name=line.size,
            quantity=line.quantity,
            unit_price=line.unit_price,
            total_price=line_total(line.unit_price, line.quantity),
        ))
    db.session.flush()


def write_order(customer, totals, reference, submission, enforce_prices=False):
    """Stage the order and its items in the current transaction.

    The order row is flushed before any item so a duplicate reference raises
    IntegrityError right here. Nothing is committed.
    """
    order = Order(
        customer=customer,
        reference=reference,
        status="pending",
        type=submission.type,
        subtotal=totals.subtotal,
        tax=totals.tax,
        delivery_fee=totals.delivery_fee,
        total=totals.total,
        customer_name=submission.customer_name,
        customer_email=submission.customer_email,
        customer_phone=submission.customer_phone,
        delivery_address=submission.delivery_address,
        delivery_city=submission.delivery_city,
        delivery_state=submission.delivery_state,
        delivery_postal_code=submission.delivery_postal_code,
        scheduled_at=submission.scheduled_date_time,
        notes=submission.notes,
    )
    db.session.add(order)
    db.session.flush()
    _attach_items(order, submission.items, enforce_prices)
    return order


def _reference_taken(reference):
    return db.session.query(Order.id).filter_by(reference=reference).first() is not None


def place_order(submission, customer_id=None):
    config = current_app.config
    totals = calculate_totals(
        submission.items,
        submission.type,
        tax_rate=config["TAX_RATE"],
        delivery_flat_fee=config["DELIVERY_FLAT_FEE"],
    )

    attempts = max(1, config["ORDER_REFERENCE_MAX_ATTEMPTS"])
    for attempt in range(1, attempts + 1):
        reference = generate_order_reference(prefix=config["ORDER_REFERENCE_PREFIX"])
        try:
            customer = resolve_customer(
                submission.contact,
                customer_id=customer_id,
                case_insensitive=config["CUSTOMER_EMAIL_CASE_INSENSITIVE"],
            )
            order = write_order(
                customer,
                totals,
                reference,
                submission,
                enforce_prices=config["ENFORCE_CATALOG_PRICES"],
            )
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            if not _reference_taken(reference):
                raise PersistenceError("Order could not be saved") from exc
            current_app.logger.warning(
                "Order reference %s already used (attempt %d of %d)", reference, attempt, attempts
            )
            continue
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError("Order could not be saved") from exc
        except Exception:
            db.session.rollback()
            raise
        current_app.logger.info("Order %s placed for customer %s, total %s", order.reference, customer.id, totals.total)
        return order

    raise ConflictError(f"No free order reference after {attempts} attempts")
