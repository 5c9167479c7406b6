from datetime import datetime

import pytest

from app import create_app
from database.db import db
from models.customer import Customer
from models.user import User
from utils.auth import generate_token, hash_password


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret-key",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SEED_DEFAULT_USERS": False,
        "SHOW_ERROR_DETAILS": False,
    })
    yield app
    app.extensions["database"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(username, password="secret123", role="customer", active=True):
        with app.app_context():
            user = User(
                username=username,
                password_hash=hash_password(password),
                role=role,
                is_active=active,
            )
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user_id, expires_in=None):
        with app.app_context():
            token = generate_token(db.session.get(User, user_id), expires_in=expires_in)
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def admin_headers(make_user, auth_headers):
    return auth_headers(make_user("boss", role="admin"))


@pytest.fixture
def customer_headers(make_user, auth_headers):
    return auth_headers(make_user("rider", role="customer"))


@pytest.fixture
def make_ride(app):
    def _make_ride(amount, cost=0, save=0, when=None, name="Rahim", location="Airport → Gulshan"):
        with app.app_context():
            ride = Customer(
                customer_name=name,
                location=location,
                amount=amount,
                cost=cost,
                save=save,
                date=when or datetime(2024, 1, 15, 9, 30),
            )
            db.session.add(ride)
            db.session.commit()
            return ride.id
    return _make_ride
