"""
customers.py
Data access for customer lines (table `cardinfo`).
"""

from __future__ import annotations

import logging

import db
from models import CUSTOMER_FIELDS, USER_MULTIPLE, USER_SINGLE, Customer

logger = logging.getLogger(__name__)


class CustomerNotFound(LookupError):
    pass


def _values(fields: dict) -> tuple:
    return tuple(fields.get(name) for name in CUSTOMER_FIELDS)


def list_customers() -> list[Customer]:
    rows = db.fetch_all("SELECT * FROM cardinfo ORDER BY id ASC")
    return [Customer.from_row(r) for r in rows]


def get_customer(customer_id: int) -> Customer | None:
    row = db.fetch_one("SELECT * FROM cardinfo WHERE id = ?", (customer_id,))
    return Customer.from_row(row) if row else None


def add_customer(fields: dict) -> int:
    now = db.utc_now()
    columns = ", ".join(CUSTOMER_FIELDS)
    placeholders = ",".join("?" * len(CUSTOMER_FIELDS))
    new_id = db.execute(
        f"INSERT INTO cardinfo({columns}, created_at, updated_at) VALUES({placeholders},?,?)",
        _values(fields) + (now, now),
    )
    logger.info("Added customer %s (%s)", new_id, fields.get("customer_name"))
    return new_id


def update_customer(customer_id: int, fields: dict) -> None:
    assignments = ", ".join(f"{name}=?" for name in CUSTOMER_FIELDS)
    changed = db.execute_count(
        f"UPDATE cardinfo SET {assignments}, updated_at=? WHERE id=?",
        _values(fields) + (db.utc_now(), customer_id),
    )
    if not changed:
        raise CustomerNotFound(customer_id)
    logger.info("Updated customer %s", customer_id)


def delete_customer(customer_id: int) -> None:
    changed = db.execute_count("DELETE FROM cardinfo WHERE id = ?", (customer_id,))
    if not changed:
        raise CustomerNotFound(customer_id)
    logger.info("Deleted customer %s", customer_id)


def customers_for_user(user_type: str, username: str) -> list[Customer]:
    """
    Lines visible to an end user.
    single   -> the line(s) with this mobile number
    multiple -> every line registered under this customer name
    Unknown user types see nothing.
    """
    username = (username or "").strip()
    if user_type == USER_SINGLE:
        if not username.isdigit():
            return []
        rows = db.fetch_all(
            "SELECT * FROM cardinfo WHERE mobile_number = ? ORDER BY id ASC", (username,)
        )
    elif user_type == USER_MULTIPLE:
        if not username:
            return []
        rows = db.fetch_all(
            "SELECT * FROM cardinfo WHERE customer_name = ? ORDER BY id ASC", (username,)
        )
    else:
        return []
    return [Customer.from_row(r) for r in rows]
