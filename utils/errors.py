import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from database.db import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code:
            self.status_code = status_code

    def to_dict(self):
        return {"message": self.message}


class ValidationError(ApiError):
    status_code = 400
    message = "Invalid request"


class AuthError(ApiError):
    status_code = 401
    message = "Authentication required"


class ForbiddenError(ApiError):
    status_code = 403
    message = "Access denied"


class NotFoundError(ApiError):
    status_code = 404
    message = "Not found"


# Duplicate usernames are reported as a plain 400 on the register endpoint.
class ConflictError(ApiError):
    status_code = 400
    message = "Already exists"


class InternalError(ApiError):
    status_code = 500
    message = "Internal server error"


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, error.message)
            db.session.rollback()
            detail = error.message if app.config.get("SHOW_ERROR_DETAILS") else "Internal server error"
            return jsonify({"message": "Something went wrong!", "error": detail}), error.status_code
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code == 404:
            return jsonify({"message": "Route not found", "path": request.path}), 404
        return jsonify({"message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        db.session.rollback()
        detail = str(error) if app.config.get("SHOW_ERROR_DETAILS") else "Internal server error"
        return jsonify({"message": "Something went wrong!", "error": detail}), 500
