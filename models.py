"""
models.py
Lightweight domain helpers (status vocabulary, dataclasses).
"""

from __future__ import annotations
from dataclasses import dataclass, asdict

# Year used for dates entered without one (e.g. "5-Aug").
# Editable at runtime from Settings (stored in app_settings.assumed_year).
DEFAULT_ASSUMED_YEAR = 2025

PAYMENT_PAID = "دفع"
PAYMENT_UNPAID = "لم يدفع"
RENEWAL_DONE = "تم"
RENEWAL_PENDING = "لم يتم"

# Older rows were entered in English
PAID_VALUES = {PAYMENT_PAID, "paid"}
RENEWED_VALUES = {RENEWAL_DONE, "done"}

PAYMENT_STATUSES = [PAYMENT_PAID, PAYMENT_UNPAID]
RENEWAL_STATUSES = [RENEWAL_DONE, RENEWAL_PENDING]

# Line sizes in GB
LINE_TYPES = [10, 20, 40, 70, 100, 140, 200]

# End-user login kinds
USER_SINGLE = "single"      # one line, identified by mobile number
USER_MULTIPLE = "multiple"  # several lines, identified by customer name

CUSTOMER_FIELDS = (
    "customer_name",
    "mobile_number",
    "line_type",
    "charging_date",
    "renewal_date",
    "payment_status",
    "monthly_price",
    "renewal_status",
)


@dataclass(frozen=True)
class Customer:
    id: int | None
    customer_name: str
    mobile_number: str
    line_type: int
    charging_date: str | None
    renewal_date: str | None
    payment_status: str
    monthly_price: float | None
    renewal_status: str
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row) -> "Customer":
        keys = row.keys()
        return cls(
            id=row["id"],
            customer_name=row["customer_name"],
            mobile_number=str(row["mobile_number"]),
            line_type=int(row["line_type"]),
            charging_date=row["charging_date"],
            renewal_date=row["renewal_date"],
            payment_status=row["payment_status"],
            monthly_price=row["monthly_price"],
            renewal_status=row["renewal_status"],
            created_at=row["created_at"] if "created_at" in keys else None,
            updated_at=row["updated_at"] if "updated_at" in keys else None,
        )

    def to_dict(self) -> dict:
        return asdict(self)
