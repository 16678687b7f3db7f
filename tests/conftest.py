"""Shared fixtures: every test gets its own throwaway SQLite database."""

from pathlib import Path

import pytest

import auth
import db
from models import Customer


@pytest.fixture(scope="session")
def admin_hash() -> str:
    """Hash once per session; bcrypt with 12 rounds is slow."""
    return auth.hash_password("admin123")


@pytest.fixture()
def temp_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, admin_hash: str) -> Path:
    """Point db.DB_FILE at a fresh file and create the schema."""
    db_path = tmp_path / "cardinfo-test.db"
    monkeypatch.setattr(db, "DB_FILE", db_path)
    db.init_db(admin_hash)
    return db_path


def make_customer(**overrides) -> Customer:
    values = dict(
        id=1,
        customer_name="Ahmed Hassan",
        mobile_number="01000000001",
        line_type=40,
        charging_date="2025-08-05",
        renewal_date=None,
        payment_status="دفع",
        monthly_price=300.0,
        renewal_status="تم",
    )
    values.update(overrides)
    return Customer(**values)


@pytest.fixture()
def customer_factory():
    return make_customer
