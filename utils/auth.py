import logging
import jwt
from datetime import datetime, timedelta, timezone
from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from database.db import db
from models.user import ROLES, User, utcnow
from utils.errors import AuthError, ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

TOKEN_LIFETIME = 24 * 60 * 60
MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 50
MIN_PASSWORD_LENGTH = 6


def hash_password(password):
    return generate_password_hash(password)


def generate_token(user, expires_in=None):
    if expires_in is None:
        expires_in = current_app.config.get("TOKEN_EXPIRES_IN", TOKEN_LIFETIME)
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user.id,
        "username": user.username,
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, current_app.config["SECRET_KEY"], algorithm="HS256")


def verify_token(token):
    """Return the identity a token asserts; no database lookup involved."""
    if not token:
        raise AuthError("Access token required")
    try:
        payload = jwt.decode(token, current_app.config["SECRET_KEY"], algorithms=["HS256"])
    except jwt.InvalidTokenError:
        raise AuthError("Invalid or expired token")
    if not all(key in payload for key in ("userId", "username", "role")):
        raise AuthError("Invalid or expired token")
    return {"userId": payload["userId"], "username": payload["username"], "role": payload["role"]}


def bearer_token(header):
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _clean(value):
    return value.strip() if isinstance(value, str) and value.strip() else None


def register_user(username, password, role="customer", email=None, full_name=None):
    username = username.strip() if isinstance(username, str) else ""
    if not username or not password or not isinstance(password, str):
        raise ValidationError("Username and password are required")
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValidationError("Username must be at least 3 characters long")
    if len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError("Username must be at most 50 characters long")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 6 characters long")
    role = role or "customer"
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")

    if User.query.filter_by(username=username).first():
        raise ConflictError("Username already exists")

    user = User(
        username=username,
        password_hash=hash_password(password),
        role=role,
        email=_clean(email),
        full_name=_clean(full_name),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # lost a race with another registration for the same name
        db.session.rollback()
        raise ConflictError("Username already exists")
    logger.info("New user registered: %s (%s)", user.username, user.role)
    return user.to_summary()


def login_user(username, password):
    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        raise ValidationError("Username and password are required")

    user = User.query.filter_by(username=username.strip(), is_active=True).first()
    if not user or not check_password_hash(user.password_hash, password):
        logger.warning("Failed login attempt for %s", username)
        raise AuthError("Invalid credentials")

    user.last_login = utcnow()
    db.session.commit()
    logger.info("User logged in: %s (%s)", user.username, user.role)
    return {"token": generate_token(user), "user": user.to_summary()}


def change_password(user_id, current_password, new_password):
    if not isinstance(current_password, str) or not isinstance(new_password, str) \
            or not current_password or not new_password:
        raise ValidationError("Current password and new password are required")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("New password must be at least 6 characters long")

    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    if not check_password_hash(user.password_hash, current_password):
        raise AuthError("Current password is incorrect")

    user.password_hash = hash_password(new_password)
    db.session.commit()
    logger.info("Password changed for user: %s", user.username)
