"""Monthly, daily and weekly spending buckets plus the grand total.

Labels use fixed English month names so output does not depend on the
process locale. Weeks run Monday through Sunday.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, localcontext

from .models import ParseResult, SpendingBucket, Transaction

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
MONTH_ABBRS: tuple[str, ...] = tuple(name[:3] for name in MONTH_NAMES)

_CENT = Decimal("0.01")
_ZERO = Decimal("0")


def week_start(day: dt.date) -> dt.date:
    """Monday on or before ``day``; Sundays belong to the preceding Monday."""

    return day - dt.timedelta(days=day.weekday())


def month_label(day: dt.date) -> str:
    return f"{MONTH_NAMES[day.month - 1]} {day.year}"


def month_from_label(label: str) -> dt.date:
    """Inverse of :func:`month_label`; returns the first day of that month."""

    name, year = label.rsplit(" ", 1)
    return dt.date(int(year), MONTH_NAMES.index(name) + 1, 1)


def day_label(day: dt.date) -> str:
    return f"{MONTH_ABBRS[day.month - 1]} {day.day}"


def week_label(start: dt.date) -> str:
    end = start + dt.timedelta(days=6)
    return f"{day_label(start)} - {end.day}"


def round_money(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        # Room for every integer digit plus the cents.
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)


class SpendingAccumulator:
    """Running sums for the three bucketings and the grand total.

    Every added transaction updates all four unconditionally, so the bucket
    sums of each bucketing always add up to the same total.
    """

    def __init__(self) -> None:
        self.monthly: dict[str, Decimal] = {}
        self.daily: dict[str, Decimal] = {}
        self.weekly: dict[dt.date, Decimal] = {}
        self.total: Decimal = _ZERO

    def add(self, tx: Transaction) -> None:
        amount = tx.amount
        month_key = month_label(tx.date)
        day_key = tx.date.isoformat()
        start = week_start(tx.date)

        self.monthly[month_key] = self.monthly.get(month_key, _ZERO) + amount
        self.daily[day_key] = self.daily.get(day_key, _ZERO) + amount
        self.weekly[start] = self.weekly.get(start, _ZERO) + amount
        self.total += amount

    def add_all(self, transactions: Iterable[Transaction]) -> None:
        for tx in transactions:
            self.add(tx)

    def monthly_buckets(self) -> list[SpendingBucket]:
        keys = sorted(self.monthly, key=month_from_label)
        return [SpendingBucket(key=k, name=k, spending=self.monthly[k]) for k in keys]

    def daily_buckets(self) -> list[SpendingBucket]:
        # Zero-padded ISO keys sort chronologically as strings.
        return [
            SpendingBucket(
                key=k,
                name=day_label(dt.date.fromisoformat(k)),
                spending=self.daily[k],
            )
            for k in sorted(self.daily)
        ]

    def weekly_buckets(self) -> list[SpendingBucket]:
        return [
            SpendingBucket(
                key=start.isoformat(), name=week_label(start), spending=self.weekly[start]
            )
            for start in sorted(self.weekly)
        ]

    def to_result(self, transactions: list[Transaction]) -> ParseResult:
        """Assemble the sorted report; only the grand total is rounded."""

        return ParseResult(
            transactions=transactions,
            monthly_spending=self.monthly_buckets(),
            daily_spending=self.daily_buckets(),
            weekly_spending=self.weekly_buckets(),
            total_spending=round_money(self.total),
            transaction_count=len(transactions),
        )


__all__ = [
    "MONTH_ABBRS",
    "MONTH_NAMES",
    "SpendingAccumulator",
    "day_label",
    "month_from_label",
    "month_label",
    "round_money",
    "week_label",
    "week_start",
]
