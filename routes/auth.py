from flask import Blueprint, jsonify, g
from database.db import db
from models.user import User
from utils.auth import register_user, login_user, change_password as update_password
from utils.errors import NotFoundError
from utils.http import json_body
from utils.permissions import current_identity

auth_bp = Blueprint('auth', __name__)

#=========== ACCOUNTS ================

@auth_bp.route('/register', methods=['POST'])
def register():
    data = json_body()

    # Only an admin may hand out a role; everyone else signs up as a customer.
    identity = current_identity()
    role = data.get('role') if identity and identity['role'] == 'admin' else 'customer'

    user = register_user(
        data.get('username'),
        data.get('password'),
        role=role,
        email=data.get('email'),
        full_name=data.get('fullName'),
    )
    return jsonify({"message": "User created successfully", "user": user}), 201

@auth_bp.route('/login', methods=['POST'])
def login():
    data = json_body()
    result = login_user(data.get('username'), data.get('password'))
    return jsonify({"message": "Login successful", **result}), 200

#=========== SIGNED IN ================

@auth_bp.route('/change-password', methods=['POST'])
def change_password():
    data = json_body()
    update_password(g.identity['userId'], data.get('currentPassword'), data.get('newPassword'))
    return jsonify({"message": "Password changed successfully"}), 200

@auth_bp.route('/profile', methods=['GET'])
def profile():
    user = db.session.get(User, g.identity['userId'])
    if not user:
        raise NotFoundError("User not found")
    return jsonify({"user": user.to_profile()}), 200
