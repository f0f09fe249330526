"""Public entry points: raw statement text in, spending report out.

Pipeline: split lines → tokenize → resolve header columns → normalize rows →
accumulate buckets → assemble the sorted result. Nothing here raises for
malformed CSV content; structural problems surface either as the empty
:class:`ParseResult` (:func:`parse`) or as an explicit :class:`Unparsable`
(:func:`parse_statement`).
"""

from __future__ import annotations

import datetime as dt
from collections import Counter
from os import PathLike
from pathlib import Path

from .aggregate import SpendingAccumulator
from .headers import resolve_columns
from .logging_setup import get_logger
from .models import Parsed, ParseOutcome, ParseResult, Transaction, Unparsable, UnparsableReason
from .normalize import Discard, normalize_row
from .tokenizer import split_lines, tokenize_line

_logger = get_logger("spending_insights.api")


def parse_statement(
    csv_text: str,
    *,
    today: dt.date | None = None,
    drop_undated: bool = False,
) -> ParseOutcome:
    """Parse a bank export and report structural failures explicitly.

    Parameters
    ----------
    csv_text:
        Full CSV text; the first non-blank line is the header.
    today:
        Day assigned to rows with an empty date cell. Defaults to the current
        UTC date.
    drop_undated:
        Discard rows with an empty date cell instead of dating them ``today``.

    Returns
    -------
    ParseOutcome
        :class:`Parsed` wrapping the result (possibly with zero transactions
        when every row was filtered), or :class:`Unparsable` when the text has
        no data rows or lacks a date/amount column.
    """

    lines = split_lines(csv_text)
    if len(lines) < 2:
        return Unparsable(
            reason=UnparsableReason.TOO_FEW_LINES,
            detail=f"expected a header and at least one data row, got {len(lines)} line(s)",
        )

    headers = tokenize_line(lines[0])
    columns = resolve_columns(headers)
    _logger.debug("Resolved columns %s from headers %s", columns, headers)

    if not columns.has_required:
        _logger.warning("Could not find required date/amount columns. Headers: %s", headers)
        return Unparsable(
            reason=UnparsableReason.MISSING_REQUIRED_COLUMNS,
            detail="no date and amount columns in header: " + ", ".join(headers),
        )

    day = today or dt.datetime.now(dt.UTC).date()
    transactions: list[Transaction] = []
    discarded: Counter[str] = Counter()
    acc = SpendingAccumulator()

    for line in lines[1:]:
        outcome = normalize_row(
            tokenize_line(line.strip()),
            columns,
            today=day,
            drop_undated=drop_undated,
        )
        if isinstance(outcome, Discard):
            discarded[outcome.reason] += 1
            continue
        transactions.append(outcome)
        acc.add(outcome)

    if discarded:
        _logger.debug(
            "Kept %d of %d rows; discarded %s",
            len(transactions),
            len(lines) - 1,
            dict(discarded),
        )

    return Parsed(result=acc.to_result(transactions))


def parse(
    csv_text: str,
    *,
    today: dt.date | None = None,
    drop_undated: bool = False,
) -> ParseResult:
    """Parse a bank export into transactions and spending summaries.

    Always returns a well-formed :class:`ParseResult`; an empty one means
    there was no usable data. See :func:`parse_statement` for the variant
    that tells the two cases apart.
    """

    outcome = parse_statement(csv_text, today=today, drop_undated=drop_undated)
    if isinstance(outcome, Unparsable):
        return ParseResult.empty()
    return outcome.result


def read_statement_text(path: str | PathLike[str]) -> str:
    """Read a statement file as UTF-8, tolerating a byte-order mark."""

    return Path(path).read_text(encoding="utf-8-sig")


def load_statement(
    path: str | PathLike[str],
    *,
    today: dt.date | None = None,
    drop_undated: bool = False,
) -> ParseResult:
    """Read ``path`` and :func:`parse` it. I/O errors propagate to the caller."""

    return parse(read_statement_text(path), today=today, drop_undated=drop_undated)


__all__ = ["load_statement", "parse", "parse_statement", "read_statement_text"]
