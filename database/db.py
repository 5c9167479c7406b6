import logging

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

db = SQLAlchemy()

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """Owns the lifecycle of the app's database connection."""

    def __init__(self, database):
        self.database = database
        self.app = None
        self.is_open = False

    def open(self, app):
        self.app = app
        with app.app_context():
            self.database.create_all()
            self.database.session.execute(text("SELECT 1"))
            logger.info("Connected to database: %s", self.database.engine.url.database or self.database.engine.name)
        self.is_open = True

    def close(self):
        if not self.is_open:
            return
        with self.app.app_context():
            self.database.session.remove()
            self.database.engine.dispose()
        self.is_open = False
        logger.info("Disconnected from database")

    def ping(self):
        try:
            self.database.session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.exception("Database ping failed")
            return False

    def status(self):
        connected = self.is_open and self.ping()
        return {
            "status": "Connected" if connected else "Disconnected",
            "name": self.database.engine.name if self.app else None,
            "isConnected": connected,
        }
