import datetime as dt
from decimal import Decimal

import pytest

from spending_insights.aggregate import (
    SpendingAccumulator,
    day_label,
    month_from_label,
    month_label,
    round_money,
    week_label,
    week_start,
)
from spending_insights.models import Transaction


def _tx(day: str, amount: str, description: str = "") -> Transaction:
    return Transaction(
        date=dt.date.fromisoformat(day), description=description, amount=Decimal(amount)
    )


@pytest.mark.parametrize(
    "day, expected",
    [
        ("2024-03-04", "2024-03-04"),  # Monday
        ("2024-03-06", "2024-03-04"),  # Wednesday
        ("2024-03-10", "2024-03-04"),  # Sunday
        ("2024-03-11", "2024-03-11"),  # next Monday
        ("2024-01-02", "2024-01-01"),
        ("2023-01-01", "2022-12-26"),  # Sunday crossing the year
    ],
)
def test_week_start(day: str, expected: str):
    assert week_start(dt.date.fromisoformat(day)).isoformat() == expected


def test_labels():
    assert month_label(dt.date(2024, 1, 31)) == "January 2024"
    assert day_label(dt.date(2024, 1, 5)) == "Jan 5"
    assert week_label(dt.date(2024, 3, 4)) == "Mar 4 - 10"
    assert week_label(dt.date(2024, 1, 29)) == "Jan 29 - 4"


def test_month_label_round_trip():
    assert month_from_label("September 2023") == dt.date(2023, 9, 1)


def test_monthly_buckets_sorted_chronologically_not_alphabetically():
    acc = SpendingAccumulator()
    acc.add_all(
        [
            _tx("2025-01-03", "1.00"),
            _tx("2024-04-10", "2.00"),
            _tx("2024-02-01", "3.00"),
            _tx("2024-04-11", "4.00"),
        ]
    )
    names = [b.name for b in acc.monthly_buckets()]
    assert names == ["February 2024", "April 2024", "January 2025"]
    assert acc.monthly_buckets()[1].spending == Decimal("6.00")


def test_daily_buckets_keys_and_labels():
    acc = SpendingAccumulator()
    acc.add_all([_tx("2024-01-02", "5"), _tx("2023-12-31", "1"), _tx("2024-01-02", "2.5")])
    buckets = acc.daily_buckets()
    assert [(b.key, b.name, b.spending) for b in buckets] == [
        ("2023-12-31", "Dec 31", Decimal("1")),
        ("2024-01-02", "Jan 2", Decimal("7.5")),
    ]


def test_weekly_buckets_keyed_by_monday():
    acc = SpendingAccumulator()
    acc.add_all([_tx("2024-03-12", "1"), _tx("2024-03-04", "2"), _tx("2024-03-10", "3")])
    buckets = acc.weekly_buckets()
    assert [(b.key, b.name, b.spending) for b in buckets] == [
        ("2024-03-04", "Mar 4 - 10", Decimal("5")),
        ("2024-03-11", "Mar 11 - 17", Decimal("1")),
    ]


def test_total_rounded_only_at_the_end():
    txs = [_tx("2024-01-01", "0.333"), _tx("2024-01-02", "0.333"), _tx("2024-01-03", "0.334")]
    acc = SpendingAccumulator()
    acc.add_all(txs)
    result = acc.to_result(txs)
    assert result.total_spending == Decimal("1.00")
    assert result.monthly_spending[0].spending == Decimal("1.000")
    assert result.transaction_count == 3


def test_total_rounds_half_up():
    txs = [_tx("2024-01-01", "0.125")]
    acc = SpendingAccumulator()
    acc.add_all(txs)
    assert acc.to_result(txs).total_spending == Decimal("0.13")


def test_round_money_beyond_default_precision():
    total = Decimal("99999999999999999999999999000.005")
    assert round_money(total) == Decimal("99999999999999999999999999000.01")


def test_many_large_amounts_still_total():
    txs = [_tx("2024-01-01", "9" * 25) for _ in range(200)]
    acc = SpendingAccumulator()
    acc.add_all(txs)
    result = acc.to_result(txs)
    assert result.transaction_count == 200
    assert result.total_spending > Decimal("1e27")
