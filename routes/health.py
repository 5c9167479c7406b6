import logging
from datetime import datetime, timezone
from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from models.customer import Customer
from models.user import User

health_bp = Blueprint('health', __name__)

logger = logging.getLogger(__name__)

@health_bp.route('', methods=['GET'])
def health():
    timestamp = datetime.now(timezone.utc).isoformat()
    connection = current_app.extensions["database"]
    try:
        database = connection.status()
        database.update({
            "customerCount": Customer.query.count(),
            "userCount": User.query.count(),
        })
    except SQLAlchemyError as e:
        logger.exception("Health check failed")
        detail = str(e) if current_app.config.get("SHOW_ERROR_DETAILS") else "Database unavailable"
        return jsonify({"status": "ERROR", "timestamp": timestamp, "error": detail}), 500

    return jsonify({"status": "OK", "timestamp": timestamp, "database": database})
