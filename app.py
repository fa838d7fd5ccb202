"""
Project: Smart Restaurant Management System (SRMS)
School: University of Maryland Global Campus (UMGC)
Dept: Software Development and Security - Capstone Project
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: September-October 2025

Description:
Main application entry point. Initializes Flask, database, and Socket.IO.
Registers the storefront ordering API and the staff order/customer API.
"""

from datetime import datetime

from flask import Flask, current_app, jsonify, request, session
from flask_socketio import SocketIO
from sqlalchemy import func, or_
from werkzeug.security import check_password_hash

from config import Config
from errors import OrderError, failure_response, register_error_handlers
from models import ORDER_STATUSES, Customer, Food, Order, User, db
from notifications import Mailer, NotificationDispatcher
from orders import place_order
from schemas import parse_submission, parse_update

# Create SocketIO once (no app yet), then bind inside factory
socketio = SocketIO(cors_allowed_origins="*")


def _engine_options(config):
    timeout = config["DB_TIMEOUT_SECONDS"]
    if config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
        return {"connect_args": {"timeout": timeout}}
    return {"pool_timeout": timeout, "pool_pre_ping": True}


def create_app(testing: bool = False):
    app = Flask(__name__)
    app.config.from_object(Config)

    if testing:
        app.config["TESTING"] = True
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
        app.config["MAIL_SUPPRESS_SEND"] = True
        app.config["SOCKETIO_ASYNC_MODE"] = "threading"

    app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", _engine_options(app.config))
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    socketio.init_app(app, async_mode=app.config["SOCKETIO_ASYNC_MODE"])  # <-- bind socketio to this app
    app.extensions["mailer"] = Mailer.from_config(app.config)
    register_error_handlers(app)

    # --------- helpers ---------
    def require_login():
        if not session.get("user_id"):
            return jsonify({"error": "login_required"}), 401

    def require_admin():
        if not session.get("user_id"):
            return jsonify({"error": "login_required"}), 401
        u = db.session.get(User, session["user_id"])
        if not u or getattr(u, "role", "") != "admin":
            return jsonify({"error": "admin_only"}), 403

    def notification_dispatcher():
        return NotificationDispatcher(
            app.extensions["mailer"],
            staff_address=app.config["STAFF_NOTIFICATION_ADDRESS"],
            broadcast=socketio.emit,
            logger=app.logger,
        )

    # --------- auth ---------
    @app.post("/login")
    def login():
        data = request.form if request.form else (request.get_json(silent=True) or {})
        username = (data.get("username") or "").strip()
        password = data.get("password") or ""
        user = User.query.filter_by(username=username).first()
        if user and check_password_hash(user.password_hash, password):
            session["user_id"] = user.id
            session["username"] = user.username
            return jsonify({"ok": True})
        return jsonify({"ok": False, "error": "Invalid credentials"}), 401

    @app.post("/logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    # ---------- CATALOG ----------
    @app.get("/api/foods")
    def list_foods():
        query = Food.query.filter_by(is_active=True).order_by(Food.category, Food.sort_order, Food.id)
        if request.args.get("category"):
            query = query.filter_by(category=request.args["category"])
        grouped = {}
        for food in query.all():
            grouped.setdefault(food.category, []).append(food.to_dict())
        return jsonify(grouped)

    # ---------- ORDERS ----------
    @app.post("/api/orders")
    def create_order():
        submission = parse_submission(request.get_json(silent=True) or {})
        try:
            order = place_order(submission, customer_id=session.get("customer_id"))
        except OrderError:
            raise
        except Exception as exc:
            current_app.logger.exception("Unexpected failure while placing order")
            return failure_response(exc, 500)

        # Committed; notification trouble is logged and never fails the request
        notification_dispatcher().dispatch(order)
        return jsonify({
            "success": True,
            "order": order.to_dict(),
            "message": "Order placed successfully!",
        }), 201

    @app.get("/api/orders")
    def list_orders():
        resp = require_login()
        if resp:
            return resp
        query = (
            Order.query.options(db.selectinload(Order.items))
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        for key in ("status", "type"):
            value = request.args.get(key)
            if value and value != "all":
                query = query.filter(getattr(Order, key) == value)

        counts = dict(db.session.query(Order.status, func.count(Order.id)).group_by(Order.status).all())
        status_counts = {"all": sum(counts.values())}
        status_counts.update({s: counts.get(s, 0) for s in ORDER_STATUSES})
        return jsonify({
            "orders": [o.to_summary() for o in query.all()],
            "status_counts": status_counts,
        })

    @app.get("/api/orders/<int:order_id>")
    def show_order(order_id):
        resp = require_login()
        if resp:
            return resp
        order = db.get_or_404(Order, order_id)
        return jsonify(order.to_dict(include_admin=True))

    @app.patch("/api/orders/<int:order_id>")
    def update_order(order_id):
        resp = require_admin()
        if resp:
            return resp
        order = db.get_or_404(Order, order_id)
        update = parse_update(request.get_json(silent=True) or {})
        if update.status is not None and update.status != order.status:
            order.status = update.status
            if update.status == "ready":
                order.ready_at = datetime.utcnow()
        if "admin_notes" in update.model_fields_set:
            order.admin_notes = update.admin_notes
        db.session.commit()
        socketio.emit("event", {"type": "order.updated", "order": order.to_summary()})
        return jsonify(order.to_dict(include_admin=True))

    # ---------- CUSTOMERS ----------
    @app.get("/api/customers")
    def list_customers():
        resp = require_login()
        if resp:
            return resp
        query = (
            db.session.query(
                Customer,
                func.count(Order.id),
                func.coalesce(func.sum(Order.total), 0),
                func.max(Order.created_at),
            )
            .outerjoin(Order, Order.customer_id == Customer.id)
            .group_by(Customer.id)
            .order_by(Customer.created_at.desc(), Customer.id.desc())
        )
        search = (request.args.get("search") or "").strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Customer.name.ilike(pattern), Customer.email.ilike(pattern)))

        customers = []
        for customer, orders_count, total_spent, last_order in query.all():
            row = customer.to_dict()
            row["orders_count"] = orders_count
            row["total_spent"] = f"{total_spent:.2f}"
            row["last_order_date"] = last_order.isoformat() if last_order else None
            customers.append(row)
        return jsonify(customers)

    # ---------- HEALTH ----------
    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok"})

    return app


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
    socketio.run(app, host="0.0.0.0", port=5013, debug=app.config["DEBUG"])
