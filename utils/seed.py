import logging
from database.db import db
from models.user import User
from utils.auth import hash_password

logger = logging.getLogger(__name__)

DEFAULT_USERS = (
    # username, password, role, full name
    ("admin", "admin123", "admin", "Administrator"),
    ("customer", "customer123", "customer", "Demo Customer"),
)


def ensure_default_users():
    """Create the demo accounts that are missing; returns the usernames created."""
    created = []
    for username, password, role, full_name in DEFAULT_USERS:
        if User.query.filter_by(username=username).first():
            continue
        db.session.add(User(
            username=username,
            password_hash=hash_password(password),
            role=role,
            full_name=full_name,
        ))
        created.append(username)
    db.session.commit()
    for username in created:
        logger.info("Default user created: %s", username)
    return created
