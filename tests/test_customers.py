"""Tests for the customer record provider backed by SQLite."""

import pytest

import customers


def _fields(**overrides) -> dict:
    fields = {
        "customer_name": "Mona Ali",
        "mobile_number": "01000000002",
        "line_type": 100,
        "charging_date": "05/08/2025",
        "renewal_date": None,
        "payment_status": "لم يدفع",
        "monthly_price": 550.0,
        "renewal_status": "لم يتم",
    }
    fields.update(overrides)
    return fields


def test_add_and_get_customer_round_trip(temp_db) -> None:
    new_id = customers.add_customer(_fields())

    stored = customers.get_customer(new_id)

    assert stored is not None
    assert stored.id == new_id
    assert stored.customer_name == "Mona Ali"
    assert stored.mobile_number == "01000000002"
    assert stored.line_type == 100
    assert stored.charging_date == "05/08/2025"
    assert stored.renewal_date is None
    assert stored.created_at and stored.updated_at


def test_mobile_number_keeps_leading_zero(temp_db) -> None:
    new_id = customers.add_customer(_fields(mobile_number="0100"))
    assert customers.get_customer(new_id).mobile_number == "0100"


def test_list_customers_is_ordered_by_id(temp_db) -> None:
    first = customers.add_customer(_fields(customer_name="B"))
    second = customers.add_customer(_fields(customer_name="A"))

    assert [c.id for c in customers.list_customers()] == [first, second]


def test_get_customer_missing_returns_none(temp_db) -> None:
    assert customers.get_customer(999) is None


def test_update_customer_changes_fields(temp_db) -> None:
    new_id = customers.add_customer(_fields())

    customers.update_customer(new_id, _fields(renewal_date="2025-09-10", renewal_status="تم"))

    stored = customers.get_customer(new_id)
    assert stored.renewal_date == "2025-09-10"
    assert stored.renewal_status == "تم"


def test_update_and_delete_unknown_customer_raise(temp_db) -> None:
    with pytest.raises(customers.CustomerNotFound):
        customers.update_customer(42, _fields())
    with pytest.raises(customers.CustomerNotFound):
        customers.delete_customer(42)


def test_delete_customer_removes_row(temp_db) -> None:
    new_id = customers.add_customer(_fields())

    customers.delete_customer(new_id)

    assert customers.get_customer(new_id) is None
    assert customers.list_customers() == []


def test_single_user_sees_only_their_mobile_number(temp_db) -> None:
    customers.add_customer(_fields(mobile_number="01000000002"))
    customers.add_customer(_fields(mobile_number="01000000003"))

    rows = customers.customers_for_user("single", " 01000000003 ")

    assert [c.mobile_number for c in rows] == ["01000000003"]


def test_multiple_user_sees_every_line_under_their_name(temp_db) -> None:
    customers.add_customer(_fields(mobile_number="01000000002"))
    customers.add_customer(_fields(mobile_number="01000000003"))
    customers.add_customer(_fields(customer_name="Omar Samy", mobile_number="01000000004"))

    rows = customers.customers_for_user("multiple", "Mona Ali")

    assert sorted(c.mobile_number for c in rows) == ["01000000002", "01000000003"]


@pytest.mark.parametrize(
    "user_type, username",
    [("single", "abc"), ("single", ""), ("multiple", "  "), ("admin", "Mona Ali"), ("", "01000000002")],
)
def test_restricted_view_never_leaks_other_rows(temp_db, user_type: str, username: str) -> None:
    customers.add_customer(_fields())

    assert customers.customers_for_user(user_type, username) == []
