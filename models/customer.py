from database.db import db
from models.user import utcnow
from utils.stats import derive_net_profit
from sqlalchemy import Column, Integer, String, Float, DateTime


class Customer(db.Model):
    """A single ride: who was driven, where, and the money involved."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    customer_name = Column(String(120), nullable=False)
    contact_number = Column(String(40), nullable=False, default="")
    location = Column(String(255), nullable=False)  # e.g. "Airport → Downtown"
    amount = Column(Float, nullable=False)
    cost = Column(Float, nullable=False, default=0)
    save = Column(Float, nullable=False, default=0)
    date = Column(DateTime, nullable=False, default=utcnow, index=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def net_profit(self):
        return derive_net_profit(self.amount, self.cost)

    def to_dict(self):
        return {
            "id": self.id,
            "customerName": self.customer_name,
            "contactNumber": self.contact_number or "",
            "location": self.location,
            "amount": float(self.amount or 0),
            "cost": float(self.cost or 0),
            "save": float(self.save or 0),
            "netProfit": float(self.net_profit),
            "date": self.date.isoformat() if self.date else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Customer {self.customer_name} {self.amount} on {self.date}>"
