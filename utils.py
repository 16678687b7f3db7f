"""
utils.py
Dashboard stats, validation, display tables, exports, sample data.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
import pandas as pd

import customers
import dates
from models import (
    DEFAULT_ASSUMED_YEAR,
    PAID_VALUES,
    PAYMENT_PAID,
    PAYMENT_UNPAID,
    RENEWAL_DONE,
    RENEWAL_PENDING,
    RENEWED_VALUES,
    CUSTOMER_FIELDS,
    Customer,
)

CURRENCY = "جنيه"

DISPLAY_COLUMNS = [
    "رقم العميل",
    "اسم العميل",
    "رقم الموبايل",
    "نوع الخط",
    "تاريخ الشحن",
    "تاريخ التجديد",
    "حالة الدفع",
    "السعر الشهري",
    "حالة التجديد",
]


@dataclass(frozen=True)
class DashboardStats:
    total_customers: int
    paid_customers: int
    renewed_customers: int
    total_revenue: float

    @property
    def payment_rate(self) -> int:
        return _percent(self.paid_customers, self.total_customers)

    @property
    def renewal_rate(self) -> int:
        return _percent(self.renewed_customers, self.total_customers)


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round(part / whole * 100)


def is_paid(status: str | None) -> bool:
    return status in PAID_VALUES


def is_renewed(status: str | None) -> bool:
    return status in RENEWED_VALUES


def dashboard_stats(rows: list[Customer]) -> DashboardStats:
    return DashboardStats(
        total_customers=len(rows),
        paid_customers=sum(1 for c in rows if is_paid(c.payment_status)),
        renewed_customers=sum(1 for c in rows if is_renewed(c.renewal_status)),
        total_revenue=float(sum(c.monthly_price or 0 for c in rows)),
    )


def format_money(amount: float | None) -> str:
    if not amount:
        return dates.UNSPECIFIED
    return f"{amount:,.0f} {CURRENCY}"


def payment_label(status: str | None) -> str:
    return PAYMENT_PAID if is_paid(status) else PAYMENT_UNPAID


def renewal_label(status: str | None) -> str:
    return "تم التجديد" if is_renewed(status) else RENEWAL_PENDING


def validate_customer_inputs(
    customer_name: str,
    mobile_number: str,
    line_type,
    monthly_price,
    charging_date: str,
    renewal_date: str,
    assumed_year: int = DEFAULT_ASSUMED_YEAR,
) -> list[str]:
    errors: list[str] = []
    if not customer_name.strip():
        errors.append("Customer name is required.")
    mobile = mobile_number.strip()
    if not (mobile.isascii() and mobile.isdigit()):
        errors.append("Mobile number must contain digits only.")
    try:
        if int(line_type) <= 0:
            errors.append("Line type must be a positive number of GB.")
    except (TypeError, ValueError):
        errors.append("Line type must be a whole number of GB.")
    if monthly_price is not None and str(monthly_price).strip():
        try:
            if float(monthly_price) < 0:
                errors.append("Monthly price cannot be negative.")
        except ValueError:
            errors.append("Monthly price must be numeric.")
    for label, raw in (("Charging date", charging_date), ("Renewal date", renewal_date)):
        if raw.strip() and dates.parse_date(raw, assumed_year) is None:
            errors.append(f"{label} is not a recognised date (e.g. 2025-08-05, 05/08/2025, 5-Aug).")
    return errors


def customer_fields(
    customer_name: str,
    mobile_number: str,
    line_type,
    monthly_price,
    charging_date: str,
    renewal_date: str,
    payment_status: str,
    renewal_status: str,
) -> dict:
    """Normalise validated form input into a row for customers.add/update."""
    price = "" if monthly_price is None else str(monthly_price).strip()
    return {
        "customer_name": customer_name.strip(),
        "mobile_number": mobile_number.strip(),
        "line_type": int(line_type),
        "charging_date": charging_date.strip() or None,
        "renewal_date": renewal_date.strip() or None,
        "payment_status": payment_status,
        "monthly_price": float(price) if price else None,
        "renewal_status": renewal_status,
    }


def customers_frame(rows: list[Customer], assumed_year: int = DEFAULT_ASSUMED_YEAR) -> pd.DataFrame:
    """Table shown on the admin Customers page, with parsed/derived dates."""
    records = [
        [
            c.id,
            c.customer_name or dates.UNSPECIFIED,
            c.mobile_number,
            f"{c.line_type} جيجا",
            dates.format_raw_date(c.charging_date, assumed_year),
            dates.format_renewal(c.charging_date, c.renewal_date, assumed_year),
            payment_label(c.payment_status),
            format_money(c.monthly_price),
            renewal_label(c.renewal_status),
        ]
        for c in rows
    ]
    return pd.DataFrame(records, columns=DISPLAY_COLUMNS)


def upcoming_renewals(
    rows: list[Customer],
    today: date,
    days: int = 7,
    assumed_year: int = DEFAULT_ASSUMED_YEAR,
) -> list[tuple[Customer, date]]:
    """Customers whose (recorded or derived) renewal date is within the next `days` days."""
    horizon = today + timedelta(days=days)
    due = []
    for c in rows:
        renewal = dates.derive_renewal_date(c.charging_date, c.renewal_date, assumed_year)
        if renewal and today <= renewal <= horizon:
            due.append((c, renewal))
    due.sort(key=lambda pair: pair[1])
    return due


def customers_to_csv_bytes(rows: list[Customer]) -> bytes:
    df = pd.DataFrame([c.to_dict() for c in rows])
    return df.to_csv(index=False).encode("utf-8")


def insert_sample_data() -> None:
    """
    Insert 3 sample lines, one per date style (safe to run multiple times: adds new rows each time).
    """
    today = date.today()
    samples = [
        ("Ahmed Hassan", "01000000001", 40, (today - timedelta(days=25)).isoformat(), None,
         PAYMENT_PAID, 300.0, RENEWAL_DONE),
        ("Mona Ali", "01000000002", 100, (today - timedelta(days=10)).strftime("%d/%m/%Y"), None,
         PAYMENT_UNPAID, 550.0, RENEWAL_PENDING),
        ("Mona Ali", "01000000003", 20, "5-Aug", "2025/09/10",
         PAYMENT_PAID, 175.0, RENEWAL_PENDING),
    ]
    for values in samples:
        customers.add_customer(dict(zip(CUSTOMER_FIELDS, values)))
