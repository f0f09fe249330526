"""Map heterogeneous bank column headers to canonical roles.

Matching is by lower-cased substring, scanning headers left to right; the
first header that contains any synonym for a role wins. Synonym order is kept
stable because it is the tie-break within a single header.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

ABSENT = -1

DATE_PATTERNS: tuple[str, ...] = ("date", "transaction date", "posted", "posted date")
AMOUNT_PATTERNS: tuple[str, ...] = ("amount",)
DESCRIPTION_PATTERNS: tuple[str, ...] = ("description", "name", "merchant", "payee", "details")
# More specific labels first so they win over the bare word "type".
TYPE_PATTERNS: tuple[str, ...] = (
    "type of transaction",
    "trans type",
    "transaction type",
    "type",
    "debit/credit",
    "dr/cr",
)
TYPE_EXACT_FALLBACK = "transaction"


@dataclass(frozen=True, slots=True)
class ColumnMap:
    """Field index per logical role; ``ABSENT`` (-1) when unresolved."""

    date: int = ABSENT
    amount: int = ABSENT
    description: int = ABSENT
    type: int = ABSENT

    @property
    def has_required(self) -> bool:
        return self.date != ABSENT and self.amount != ABSENT

    @property
    def has_type(self) -> bool:
        return self.type != ABSENT

    @property
    def min_fields(self) -> int:
        """Number of fields a row needs to carry both date and amount."""

        return max(self.date, self.amount) + 1


def find_column_index(headers: Sequence[str], patterns: Sequence[str]) -> int:
    for idx, header in enumerate(headers):
        normalized = header.lower().strip()
        for pattern in patterns:
            if pattern.lower() in normalized:
                return idx
    return ABSENT


def resolve_columns(headers: Sequence[str]) -> ColumnMap:
    """Build the :class:`ColumnMap` for a tokenized header row."""

    type_idx = find_column_index(headers, TYPE_PATTERNS)
    if type_idx == ABSENT:
        type_idx = next(
            (i for i, h in enumerate(headers) if h.lower().strip() == TYPE_EXACT_FALLBACK),
            ABSENT,
        )

    return ColumnMap(
        date=find_column_index(headers, DATE_PATTERNS),
        amount=find_column_index(headers, AMOUNT_PATTERNS),
        description=find_column_index(headers, DESCRIPTION_PATTERNS),
        type=type_idx,
    )


__all__ = [
    "ABSENT",
    "ColumnMap",
    "find_column_index",
    "resolve_columns",
]
