"""Data models for parsed statements and spending summaries.

Models are frozen pydantic models so results can be dumped straight to JSON.
Python attribute names are snake_case; ``model_dump(by_alias=True)`` emits the
camelCase keys consumed by dashboards (``monthlySpending``,
``totalSpending``...). Monetary values are ``Decimal`` in Python and plain
JSON numbers when serialized.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Transaction(_Frozen):
    """One retained spending record.

    ``amount`` is always the absolute value of the source amount; direction is
    dropped once the debit filter has run. ``date`` is the UTC calendar day.
    """

    date: dt.date
    description: str = ""
    amount: Money


class SpendingBucket(_Frozen):
    """A single time bucket: sort ``key``, display ``name`` and summed ``spending``.

    Keys per bucketing:
    - monthly: ``"January 2024"`` (same as the name)
    - daily: ``"2024-01-05"``
    - weekly: ISO date of the Monday starting the week
    """

    key: str
    name: str
    spending: Money


class ParseResult(_Frozen):
    transactions: list[Transaction] = Field(default_factory=list)
    monthly_spending: list[SpendingBucket] = Field(default_factory=list)
    daily_spending: list[SpendingBucket] = Field(default_factory=list)
    weekly_spending: list[SpendingBucket] = Field(default_factory=list)
    total_spending: Money = Decimal("0")
    transaction_count: int = 0

    @classmethod
    def empty(cls) -> ParseResult:
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.transaction_count == 0


# ---------------------------------------------------------------------------
# Explicit outcome for callers that need "no data" vs "zero spending"
# ---------------------------------------------------------------------------


class UnparsableReason(StrEnum):
    TOO_FEW_LINES = "too_few_lines"
    MISSING_REQUIRED_COLUMNS = "missing_required_columns"


class Parsed(_Frozen):
    status: Literal["ok"] = "ok"
    result: ParseResult


class Unparsable(_Frozen):
    status: Literal["unparsable"] = "unparsable"
    reason: UnparsableReason
    detail: str = ""


ParseOutcome = Annotated[Parsed | Unparsable, Field(discriminator="status")]


__all__ = [
    "Money",
    "ParseOutcome",
    "ParseResult",
    "Parsed",
    "SpendingBucket",
    "Transaction",
    "Unparsable",
    "UnparsableReason",
]
