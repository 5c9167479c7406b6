import logging
from flask import Blueprint, jsonify, g
from database.db import db
from models.customer import Customer
from models.user import User
from utils.errors import NotFoundError, ValidationError
from utils.http import json_body
from utils.stats import compute_totals, average_per_record, derive_net_profit

admin_bp = Blueprint('admin', __name__)

logger = logging.getLogger(__name__)

# Every route here is admin-only, see utils.permissions.POLICY

@admin_bp.route('/users', methods=['GET'])
def list_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return jsonify([user.to_profile() for user in users])

@admin_bp.route('/users/<int:user_id>/status', methods=['PATCH'])
def update_user_status(user_id):
    """Soft (de)activation; users are never deleted."""
    data = json_body()
    active = data.get('active')
    if not isinstance(active, bool):
        raise ValidationError("'active' must be true or false")

    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    if user.id == g.identity['userId'] and not active:
        raise ValidationError("You cannot deactivate your own account")

    user.is_active = active
    db.session.commit()
    logger.info("User %s %s by %s", user.username, "activated" if active else "deactivated", g.identity['username'])
    return jsonify({"message": "User status updated", "user": user.to_profile()})

@admin_bp.route('/stats', methods=['GET'])
def stats():
    rides = Customer.query.all()
    totals = compute_totals(rides)
    return jsonify({
        "totalCustomers": totals["count"],
        "totalUsers": User.query.count(),
        "totalAmount": totals["income"],
        "totalCost": totals["cost"],
        "totalSave": totals["save"],
        "netProfit": derive_net_profit(totals["income"], totals["cost"]),
        "averagePerCustomer": average_per_record(rides),
    })
