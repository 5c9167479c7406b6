from flask import Flask, request, jsonify
from flask_migrate import Migrate
from flask_cors import CORS
import os
from routes.auth import auth_bp
from routes.customers import customers_bp
from routes.admin import admin_bp
from routes.health import health_bp
from database.db import db, DatabaseConnection
from utils.commands import register_commands
from utils.errors import register_error_handlers
from utils.permissions import enforce_policy
from utils.seed import ensure_default_users
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

migrate = Migrate()


def _env_flag(name, default):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


def create_app(test_config=None):
    app = Flask(__name__)

    logging.basicConfig(
        level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['TOKEN_EXPIRES_IN'] = int(os.environ.get('TOKEN_EXPIRES_IN', 24 * 60 * 60))
    app.config['SHOW_ERROR_DETAILS'] = os.environ.get('FLASK_ENV') == 'development'
    app.config['SEED_DEFAULT_USERS'] = _env_flag('SEED_DEFAULT_USERS', 'true')
    app.json.sort_keys = False

    if test_config:
        app.config.update(test_config)

    if not app.config['SECRET_KEY']:
        raise ValueError("SECRET_KEY environment variable is required")
    if not app.config['SQLALCHEMY_DATABASE_URI']:
        raise ValueError("DATABASE_URL environment variable is required")

    # Configure CORS with environment-specific origins
    allowed_origins = os.environ.get('ALLOWED_ORIGINS', '*').split(',')
    CORS(app,
         resources={r"/*": {"origins": allowed_origins}},
         allow_headers=["Content-Type", "Authorization"],
         methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
    )

    db.init_app(app)
    migrate.init_app(app, db)

    app.before_request(enforce_policy)
    register_error_handlers(app)
    register_commands(app)

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(customers_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(health_bp, url_prefix='/health')

    @app.route('/')
    def index():
        return jsonify({
            "message": "Ride Tracker API",
            "endpoints": {
                "auth": {
                    "register": "POST /api/auth/register",
                    "login": "POST /api/auth/login",
                    "profile": "GET /api/auth/profile",
                    "changePassword": "POST /api/auth/change-password",
                },
                "customers": {
                    "list": "GET /api/customer",
                    "create": "POST /api/customer",
                    "get": "GET /api/customer/:id",
                    "update": "PUT /api/customer/:id",
                    "delete": "DELETE /api/customer/:id",
                    "totals": "GET /api/customers/totals",
                    "monthly": "GET /api/customers/monthly?year=YYYY",
                },
                "admin": {
                    "users": "GET /api/admin/users",
                    "userStatus": "PATCH /api/admin/users/:id/status",
                    "stats": "GET /api/admin/stats",
                },
                "health": "GET /health",
            },
        })

    @app.after_request
    def log_request(response):
        logger.debug("%s %s -> %s", request.method, request.path, response.status_code)
        return response

    connection = DatabaseConnection(db)
    connection.open(app)
    app.extensions['database'] = connection

    if app.config['SEED_DEFAULT_USERS']:
        with app.app_context():
            ensure_default_users()

    return app


if __name__ == '__main__':
    app = create_app()
    try:
        app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)), debug=app.config['SHOW_ERROR_DETAILS'])
    finally:
        app.extensions['database'].close()
