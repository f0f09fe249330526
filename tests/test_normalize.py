import datetime as dt
from decimal import Decimal

import pytest

from spending_insights.headers import ColumnMap
from spending_insights.models import Transaction
from spending_insights.normalize import (
    Discard,
    DiscardReason,
    normalize_row,
    parse_amount,
    parse_date,
)

TODAY = dt.date(2024, 6, 15)
NO_TYPE = ColumnMap(date=0, description=1, amount=2)
WITH_TYPE = ColumnMap(date=0, description=1, amount=2, type=3)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42.50", Decimal("42.50")),
        ("-42.50", Decimal("-42.50")),
        ("$42.50", Decimal("42.50")),
        ("$1,234.56", Decimal("1234.56")),
        (" 7 ", Decimal("7")),
        ("1e3", Decimal("1000")),
        ("-.5", Decimal("-0.5")),
    ],
)
def test_parse_amount(raw: str, expected: Decimal):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "$",
        "abc",
        "12abc",
        "NaN",
        "Infinity",
        "1_000",
        "1e30",
        "12345678901234567890123456789",
        None,
    ],
)
def test_parse_amount_rejects(raw):
    assert parse_amount(raw) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-01-05", dt.date(2024, 1, 5)),
        ("01/05/2024", dt.date(2024, 1, 5)),
        ("Jan 5, 2024", dt.date(2024, 1, 5)),
        ("2024-01-05T10:00:00", dt.date(2024, 1, 5)),
        # 23:30 in New York is already the next day in UTC.
        ("2024-01-05T23:30:00-05:00", dt.date(2024, 1, 6)),
    ],
)
def test_parse_date(raw: str, expected: dt.date):
    assert parse_date(raw) == expected


@pytest.mark.parametrize(
    "raw", ["", "   ", "not a date", "2024-02-30", "2024-01-05T00:00:00+25:00", None]
)
def test_parse_date_rejects(raw):
    assert parse_date(raw) is None


def test_row_becomes_transaction_with_absolute_amount():
    tx = normalize_row(["2024-01-05", "Coffee", "-4.50"], NO_TYPE, today=TODAY)
    assert tx == Transaction(date=dt.date(2024, 1, 5), description="Coffee", amount=Decimal("4.50"))


def test_description_defaults_to_empty_when_column_absent():
    cols = ColumnMap(date=0, amount=1)
    tx = normalize_row(["2024-01-05", "4.50"], cols, today=TODAY)
    assert isinstance(tx, Transaction)
    assert tx.description == ""


def test_too_few_fields():
    out = normalize_row(["2024-01-05", "Coffee"], NO_TYPE, today=TODAY)
    assert out == Discard(DiscardReason.TOO_FEW_FIELDS)


def test_bad_amount():
    out = normalize_row(["2024-01-05", "Coffee", "n/a"], NO_TYPE, today=TODAY)
    assert out == Discard(DiscardReason.BAD_AMOUNT)


def test_amount_checked_before_type():
    out = normalize_row(["2024-01-05", "Refund", "n/a", "credit"], WITH_TYPE, today=TODAY)
    assert out == Discard(DiscardReason.BAD_AMOUNT)


@pytest.mark.parametrize("kind", ["credit", "Credit", "", "sale"])
def test_non_debit_rows_dropped_when_type_column_exists(kind: str):
    out = normalize_row(["2024-01-05", "Refund", "30.00", kind], WITH_TYPE, today=TODAY)
    assert out == Discard(DiscardReason.NOT_DEBIT)


def test_debit_match_ignores_case():
    out = normalize_row(["2024-01-05", "Gym", "30.00", "DEBIT"], WITH_TYPE, today=TODAY)
    assert isinstance(out, Transaction)


def test_missing_type_field_is_not_debit():
    out = normalize_row(["2024-01-05", "Gym", "30.00"], WITH_TYPE, today=TODAY)
    assert out == Discard(DiscardReason.NOT_DEBIT)


def test_type_checked_before_date():
    out = normalize_row(["garbage", "Refund", "30.00", "credit"], WITH_TYPE, today=TODAY)
    assert out == Discard(DiscardReason.NOT_DEBIT)


def test_bad_date():
    out = normalize_row(["garbage", "Coffee", "4.50"], NO_TYPE, today=TODAY)
    assert out == Discard(DiscardReason.BAD_DATE)


def test_empty_date_falls_back_to_today():
    out = normalize_row(["", "Cash", "10"], NO_TYPE, today=TODAY)
    assert isinstance(out, Transaction)
    assert out.date == TODAY


def test_empty_date_dropped_on_request():
    out = normalize_row(["", "Cash", "10"], NO_TYPE, today=TODAY, drop_undated=True)
    assert out == Discard(DiscardReason.UNDATED)


def test_out_of_range_offset_is_bad_date():
    out = normalize_row(["2024-01-05T00:00:00+25:00", "X", "5"], NO_TYPE, today=TODAY)
    assert out == Discard(DiscardReason.BAD_DATE)


def test_underscore_grouping_is_bad_amount():
    out = normalize_row(["2024-01-05", "X", "1_000"], NO_TYPE, today=TODAY)
    assert out == Discard(DiscardReason.BAD_AMOUNT)
