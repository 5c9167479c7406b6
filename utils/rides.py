import logging
import math
from datetime import datetime, timezone

from sqlalchemy import or_

from database.db import db
from models.customer import Customer
from models.user import utcnow
from utils.errors import NotFoundError, ValidationError
from utils.stats import to_number

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "createdAt": Customer.created_at,
    "updatedAt": Customer.updated_at,
    "date": Customer.date,
    "customerName": Customer.customer_name,
    "location": Customer.location,
    "amount": Customer.amount,
    "cost": Customer.cost,
    "save": Customer.save,
}


def _text(value):
    return value.strip() if isinstance(value, str) else ""


def _money(value):
    """Non-negative amount; anything missing, invalid or negative becomes 0."""
    return max(to_number(value), 0.0)


def _amount(value):
    if isinstance(value, bool):
        raise ValidationError("Amount must be a non-negative number")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Amount must be a non-negative number")
    if not math.isfinite(amount) or amount < 0:
        raise ValidationError("Amount must be a non-negative number")
    return amount


def parse_date(value):
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


# search text is matched literally, so LIKE wildcards are escaped
def _escape_like(text):
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get_ride(ride_id):
    ride = db.session.get(Customer, ride_id)
    if not ride:
        raise NotFoundError("Customer not found")
    return ride


def list_rides(sort="-createdAt", search=None):
    sort = sort or "-createdAt"
    descending = sort.startswith("-")
    field = sort[1:] if descending else sort
    column = SORT_FIELDS.get(field)
    if column is None:
        raise ValidationError(f"Cannot sort by '{field}'")

    query = Customer.query
    if search and search.strip():
        pattern = f"%{_escape_like(search.strip())}%"
        query = query.filter(or_(
            Customer.customer_name.ilike(pattern, escape="\\"),
            Customer.contact_number.ilike(pattern, escape="\\"),
            Customer.location.ilike(pattern, escape="\\"),
        ))
    return query.order_by(column.desc() if descending else column.asc(), Customer.id.desc()).all()


def create_ride(data):
    name = _text(data.get("customerName"))
    location = _text(data.get("location"))
    if not name or not location or not data.get("amount"):
        raise ValidationError("Missing required fields: customerName, location, and amount are required")
    amount = to_number(data.get("amount"))
    if amount <= 0:
        raise ValidationError("Amount must be a positive number")

    ride = Customer(
        customer_name=name,
        contact_number=_text(data.get("contactNumber")),
        location=location,
        amount=amount,
        cost=_money(data.get("cost")),
        save=_money(data.get("save")),
        date=parse_date(data["date"]) if data.get("date") else utcnow(),
    )
    db.session.add(ride)
    db.session.commit()
    logger.info("Created ride #%s for %s (%.2f)", ride.id, ride.customer_name, ride.amount)
    return ride


def update_ride(ride_id, data):
    """Apply a partial update; keys left out of ``data`` keep their value."""
    ride = get_ride(ride_id)
    amount = _amount(data["amount"]) if data.get("amount") not in (None, "") else None
    when = parse_date(data["date"]) if data.get("date") else None

    if _text(data.get("customerName")):
        ride.customer_name = _text(data["customerName"])
    if _text(data.get("location")):
        ride.location = _text(data["location"])
    if "contactNumber" in data:
        ride.contact_number = _text(data["contactNumber"])
    if amount is not None:
        ride.amount = amount
    if "cost" in data:
        ride.cost = _money(data["cost"])
    if "save" in data:
        ride.save = _money(data["save"])
    if when is not None:
        ride.date = when

    db.session.commit()
    logger.info("Updated ride #%s", ride.id)
    return ride


def delete_ride(ride_id):
    ride = get_ride(ride_id)
    payload = ride.to_dict()
    db.session.delete(ride)
    db.session.commit()
    logger.info("Deleted ride #%s", ride_id)
    return payload
