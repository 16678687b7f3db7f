"""Unit tests for raw date parsing and renewal date derivation."""

from datetime import date

import pytest

from dates import (
    RENEWAL_PERIOD_DAYS,
    UNSPECIFIED,
    derive_renewal_date,
    format_date,
    format_raw_date,
    format_renewal,
    parse_date,
)
from models import DEFAULT_ASSUMED_YEAR


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_parse_date_returns_none_for_missing_values(raw) -> None:
    assert parse_date(raw) is None


def test_parse_date_reads_iso_dates() -> None:
    assert parse_date("2025-08-05") == date(2025, 8, 5)


def test_parse_date_treats_year_first_slashes_like_iso() -> None:
    assert parse_date("2025/08/05") == parse_date("2025-08-05") == date(2025, 8, 5)


def test_parse_date_reads_slashes_with_year_last_as_day_first() -> None:
    """05/08/2025 is 5 August, never 8 May."""
    assert parse_date("05/08/2025") == date(2025, 8, 5)
    assert parse_date("12/01/2025") == date(2025, 1, 12)


@pytest.mark.parametrize("raw", ["5-Aug", "5-AUG", "5-aug", "05-Aug"])
def test_parse_date_day_month_abbreviation_uses_assumed_year(raw: str) -> None:
    assert parse_date(raw) == date(DEFAULT_ASSUMED_YEAR, 8, 5)


def test_parse_date_assumed_year_is_configurable() -> None:
    assert parse_date("5-Aug", assumed_year=2026) == date(2026, 8, 5)
    assert parse_date("31-Dec", assumed_year=2024) == date(2024, 12, 31)


def test_parse_date_unknown_month_abbreviation_is_unparseable() -> None:
    assert parse_date("5-Agu") is None


@pytest.mark.parametrize("raw", ["not-a-date", "غير محدد", "hello world", "??"])
def test_parse_date_returns_none_for_garbage(raw: str) -> None:
    assert parse_date(raw) is None


@pytest.mark.parametrize("raw", ["2025-02-30", "2025/13/01", "31/04/2025", "32-Jan", "0-Mar"])
def test_parse_date_rejects_impossible_calendar_fields(raw: str) -> None:
    """Recognised shapes with impossible fields are rejected, not rolled over."""
    assert parse_date(raw) is None


def test_parse_date_accepts_leap_day() -> None:
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    assert parse_date("29/02/2024") == date(2024, 2, 29)


def test_parse_date_strips_surrounding_whitespace() -> None:
    assert parse_date("  2025-08-05\n") == date(2025, 8, 5)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("August 5, 2025", date(2025, 8, 5)),
        ("2025-08-05T22:30:00", date(2025, 8, 5)),
        ("5 Aug 2025", date(2025, 8, 5)),
    ],
)
def test_parse_date_falls_back_to_general_parser(raw: str, expected: date) -> None:
    assert parse_date(raw) == expected


def test_parse_date_fallback_fills_missing_year_deterministically() -> None:
    """Fields missing from fallback input never come from today's date."""
    assert parse_date("Aug 5", assumed_year=2024) == date(2024, 8, 5)
    assert parse_date("Aug 5", assumed_year=2024) == parse_date("Aug 5", assumed_year=2024)


def test_parse_date_is_deterministic() -> None:
    for raw in ["2025-08-05", "05/08/2025", "5-Aug", "not-a-date", "August 5, 2025"]:
        assert parse_date(raw) == parse_date(raw)


def test_derive_renewal_date_adds_thirty_days_across_month_end() -> None:
    assert RENEWAL_PERIOD_DAYS == 30
    assert derive_renewal_date("2025-08-05", None) == date(2025, 9, 4)


def test_derive_renewal_date_crosses_year_end() -> None:
    assert derive_renewal_date("2025-12-15", None) == date(2026, 1, 14)


def test_derive_renewal_date_prefers_recorded_renewal() -> None:
    assert derive_renewal_date(None, "2025-09-01") == date(2025, 9, 1)


def test_derive_renewal_date_without_any_date_is_none() -> None:
    assert derive_renewal_date(None, None) is None
    assert derive_renewal_date("not-a-date", "") is None


def test_derive_renewal_date_recorded_value_wins_even_if_earlier() -> None:
    assert derive_renewal_date("2025-08-05", "2025-07-01") == date(2025, 7, 1)


def test_derive_renewal_date_ignores_unreadable_recorded_value() -> None:
    assert derive_renewal_date("5-Aug", "soon") == date(DEFAULT_ASSUMED_YEAR, 9, 4)


def test_derive_renewal_date_passes_assumed_year_through() -> None:
    assert derive_renewal_date("5-Aug", None, assumed_year=2026) == date(2026, 9, 4)


def test_format_date_uses_placeholder_for_missing_dates() -> None:
    assert format_date(None) == UNSPECIFIED == "غير محدد"


def test_format_date_renders_arabic_indic_digits() -> None:
    assert format_date(date(2025, 8, 5)) == "٥/٨/٢٠٢٥"
    assert format_date(date(2025, 12, 31)) == "٣١/١٢/٢٠٢٥"


def test_format_helpers_compose_parse_and_derive() -> None:
    assert format_raw_date("05/08/2025") == "٥/٨/٢٠٢٥"
    assert format_raw_date("nonsense") == UNSPECIFIED
    assert format_renewal("2025-08-05", None) == "٤/٩/٢٠٢٥"
    assert format_renewal(None, None) == UNSPECIFIED
