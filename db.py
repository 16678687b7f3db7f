"""
db.py
SQLite helpers + initialization (creates DB/tables, inserts default admin, settings).
"""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from datetime import datetime

from models import DEFAULT_ASSUMED_YEAR

logger = logging.getLogger(__name__)

DB_FILE = Path(os.environ.get("CARDINFO_DB", Path(__file__).with_name("cardinfo.db")))


@contextmanager
def get_conn():
    conn = sqlite3.connect(DB_FILE, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def execute(sql: str, params: tuple = ()) -> int:
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.lastrowid


def execute_count(sql: str, params: tuple = ()) -> int:
    """Run a write statement and return the number of affected rows."""
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.rowcount


def fetch_one(sql: str, params: tuple = ()):
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.fetchone()


def fetch_all(sql: str, params: tuple = ()) -> list[sqlite3.Row]:
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.fetchall()


def utc_now() -> str:
    return datetime.utcnow().isoformat(timespec="seconds")


def _create_tables() -> None:
    execute(
        """
        CREATE TABLE IF NOT EXISTS admin_users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
        """
    )

    # Date columns hold whatever was typed in; see dates.parse_date
    execute(
        """
        CREATE TABLE IF NOT EXISTS cardinfo (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_name TEXT NOT NULL,
            mobile_number TEXT NOT NULL,
            line_type INTEGER NOT NULL,
            charging_date TEXT,
            renewal_date TEXT,
            payment_status TEXT NOT NULL,
            monthly_price REAL,
            renewal_status TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS app_settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """
    )


def get_setting(key: str, default: str | None = None) -> str | None:
    row = fetch_one("SELECT value FROM app_settings WHERE key = ?", (key,))
    if row:
        return str(row["value"])
    return default


def set_setting(key: str, value: str) -> None:
    execute(
        """
        INSERT INTO app_settings(key, value) VALUES(?, ?)
        ON CONFLICT(key) DO UPDATE SET value=excluded.value
        """,
        (key, value),
    )


def init_db(default_admin_hash: str) -> None:
    """
    Initialize the database.
    - Create tables
    - Insert default admin (admin/admin123) if no admin exists
    - Force password change on first login
    """
    _create_tables()

    admin = fetch_one("SELECT id FROM admin_users LIMIT 1")
    if not admin:
        execute(
            "INSERT INTO admin_users(username, password_hash, created_at) VALUES(?,?,?)",
            ("admin", default_admin_hash, utc_now()),
        )
        set_setting("force_password_change", "1")
        logger.info("Created default admin user in %s", DB_FILE)
    else:
        # ensure setting exists
        if get_setting("force_password_change") is None:
            set_setting("force_password_change", "0")


def is_force_password_change() -> bool:
    return get_setting("force_password_change") == "1"


def clear_force_password_change() -> None:
    set_setting("force_password_change", "0")


def get_assumed_year() -> int:
    """Year applied to dates stored without one ("5-Aug")."""
    raw = get_setting("assumed_year")
    if raw is None:
        return DEFAULT_ASSUMED_YEAR
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid assumed_year setting %r", raw)
        return DEFAULT_ASSUMED_YEAR


def set_assumed_year(year: int) -> None:
    set_setting("assumed_year", str(int(year)))
