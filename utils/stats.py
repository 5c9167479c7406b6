"""Derived money figures over ride records.

Records may be ``Customer`` rows or plain mappings using the API's camelCase
keys, so the same functions serve route handlers and anything holding JSON.
"""
import math
from datetime import date, datetime

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# model attribute -> API key
_FIELDS = {
    "amount": "amount",
    "cost": "cost",
    "save": "save",
    "date": "date",
    "created_at": "createdAt",
}


def to_number(value):
    """Coerce ``value`` to a float, treating missing or non-numeric input as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _get(record, field):
    if isinstance(record, dict):
        return record.get(_FIELDS[field], record.get(field))
    return getattr(record, field, None)


def _as_datetime(value):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def record_date(record):
    """Occurrence date of a record, falling back to when it was created."""
    return _as_datetime(_get(record, "date")) or _as_datetime(_get(record, "created_at"))


def derive_net_profit(amount, cost):
    return to_number(amount) - to_number(cost)


def empty_totals():
    return {"count": 0, "income": 0.0, "cost": 0.0, "save": 0.0}


def compute_totals(records):
    totals = empty_totals()
    for record in records:
        totals["count"] += 1
        totals["income"] += to_number(_get(record, "amount"))
        totals["cost"] += to_number(_get(record, "cost"))
        totals["save"] += to_number(_get(record, "save"))
    return totals


def merge_totals(first, second):
    return {key: first[key] + second[key] for key in empty_totals()}


def average_per_record(records):
    totals = compute_totals(records)
    if not totals["count"]:
        return 0.0
    return totals["income"] / totals["count"]


def available_years(records):
    years = {d.year for d in (record_date(r) for r in records) if d is not None}
    return sorted(years, reverse=True)


def group_by_month(records, year):
    """Monthly buckets for ``year``, latest month first.

    Months without records are left out. Records with no usable date are
    skipped.
    """
    buckets = {}
    for record in records:
        when = record_date(record)
        if when is None or when.year != year:
            continue
        bucket = buckets.get(when.month)
        if bucket is None:
            bucket = buckets[when.month] = {
                "year": when.year,
                "month": when.month,
                "monthName": MONTH_NAMES[when.month - 1],
                "totalEarnings": 0.0,
                "totalCost": 0.0,
                "totalSave": 0.0,
                "customerCount": 0,
            }
        bucket["totalEarnings"] += to_number(_get(record, "amount"))
        bucket["totalCost"] += to_number(_get(record, "cost"))
        bucket["totalSave"] += to_number(_get(record, "save"))
        bucket["customerCount"] += 1

    ordered = [buckets[month] for month in sorted(buckets, reverse=True)]
    for bucket in ordered:
        bucket["netProfit"] = derive_net_profit(bucket["totalEarnings"], bucket["totalCost"])
    return ordered


def yearly_summary(records, year):
    records = list(records)
    months = group_by_month(records, year)
    earnings = sum(m["totalEarnings"] for m in months)
    cost = sum(m["totalCost"] for m in months)
    return {
        "year": year,
        "months": months,
        "totalEarnings": earnings,
        "totalCost": cost,
        "totalSave": sum(m["totalSave"] for m in months),
        "netProfit": derive_net_profit(earnings, cost),
        "customerCount": sum(m["customerCount"] for m in months),
        "availableYears": available_years(records),
    }
