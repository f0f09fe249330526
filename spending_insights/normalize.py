"""Row → :class:`Transaction` normalization.

Rows are tolerated, never rejected loudly: anything unusable becomes a
:class:`Discard` carrying the reason, and parsing continues with the next
row. Discard checks run in a fixed order (field count, amount, debit filter,
date) so the reported reason is deterministic.
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import StrEnum

from dateutil import parser as date_parser

from .headers import ColumnMap
from .models import Transaction

_AMOUNT_NOISE_RE = re.compile(r"[$,]")
_PLAIN_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_CENT = Decimal("0.01")

DEBIT = "debit"


class DiscardReason(StrEnum):
    TOO_FEW_FIELDS = "too_few_fields"
    BAD_AMOUNT = "bad_amount"
    NOT_DEBIT = "not_debit"
    BAD_DATE = "bad_date"
    UNDATED = "undated"


@dataclass(frozen=True, slots=True)
class Discard:
    reason: DiscardReason


def parse_amount(raw: str | None) -> Decimal | None:
    """Parse a money cell after stripping ``$`` and thousands commas.

    Only plain decimal notation (optional sign and exponent) is accepted, so
    ``NaN``, ``Infinity`` and ``1_000`` are rejected. Amounts too large to be
    held to the cent in the default decimal context are rejected as well.
    """

    if raw is None:
        return None
    s = _AMOUNT_NOISE_RE.sub("", raw).strip()
    if not _PLAIN_NUMBER_RE.fullmatch(s):
        return None
    d = Decimal(s)
    try:
        d.quantize(_CENT)
    except InvalidOperation:
        return None
    return d


def parse_date(raw: str | None) -> dt.date | None:
    """Parse a bank date cell into a UTC calendar day.

    Accepts the usual export formats (``2024-01-05``, ``01/05/2024``,
    ``Jan 5, 2024``, ISO timestamps). Aware timestamps are shifted to UTC
    before the day is taken; naive ones are read as UTC already.
    """

    if raw is None:
        return None
    s = raw.strip()
    if not s:
        return None
    try:
        parsed = date_parser.parse(s)
        if parsed.tzinfo is not None:
            # dateutil accepts offsets such as +25:00 that only fail here.
            parsed = parsed.astimezone(dt.UTC)
    except (ValueError, OverflowError):
        return None
    return parsed.date()


def _field(fields: Sequence[str], idx: int) -> str:
    if 0 <= idx < len(fields):
        return fields[idx].strip()
    return ""


def normalize_row(
    fields: Sequence[str],
    columns: ColumnMap,
    *,
    today: dt.date,
    drop_undated: bool = False,
) -> Transaction | Discard:
    """Convert one tokenized row into a transaction, or say why it was dropped.

    When the date cell is empty the row is dated ``today`` unless
    ``drop_undated`` is set.
    """

    if len(fields) < columns.min_fields:
        return Discard(DiscardReason.TOO_FEW_FIELDS)

    amount = parse_amount(_field(fields, columns.amount))
    if amount is None:
        return Discard(DiscardReason.BAD_AMOUNT)

    # With a type column only debits count as spending.
    if columns.has_type and _field(fields, columns.type).lower() != DEBIT:
        return Discard(DiscardReason.NOT_DEBIT)

    raw_date = _field(fields, columns.date)
    if raw_date:
        day = parse_date(raw_date)
        if day is None:
            return Discard(DiscardReason.BAD_DATE)
    elif drop_undated:
        return Discard(DiscardReason.UNDATED)
    else:
        day = today

    return Transaction(
        date=day,
        description=_field(fields, columns.description),
        amount=abs(amount),
    )


__all__ = [
    "Discard",
    "DiscardReason",
    "normalize_row",
    "parse_amount",
    "parse_date",
]
