from datetime import datetime, timezone
from database.db import db

ROLES = ("admin", "customer")


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(db.Model):

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(*ROLES, name="user_role"), nullable=False, default="customer")
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    email = db.Column(db.String(120), nullable=True)
    full_name = db.Column(db.String(120), nullable=True)
    last_login = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_summary(self):
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role,
            "fullName": self.full_name,
            "email": self.email,
        }

    def to_profile(self):
        profile = self.to_summary()
        profile.update({
            "isActive": self.is_active,
            "lastLogin": self.last_login.isoformat() if self.last_login else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        })
        return profile

    def __repr__(self):
        return f"<User {self.username}>"
