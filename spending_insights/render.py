"""Rich renderables for a :class:`ParseResult`."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

from .models import ParseResult, SpendingBucket


@dataclass(frozen=True, slots=True)
class Palette:
    title: str
    header: str
    amount: str
    muted: str


LIGHT_PALETTE = Palette(title="bold blue", header="bold black", amount="dark_green", muted="grey42")
DARK_PALETTE = Palette(title="bold cyan", header="bold white", amount="green3", muted="grey62")


def palette_for(dark: bool) -> Palette:
    return DARK_PALETTE if dark else LIGHT_PALETTE


def format_money(value: Decimal) -> str:
    return f"${value:,.2f}"


def bucket_table(title: str, buckets: list[SpendingBucket], palette: Palette) -> Table:
    table = Table(title=title, title_style=palette.title, header_style=palette.header)
    table.add_column("Period")
    table.add_column("Spending", justify="right", style=palette.amount)
    for b in buckets:
        table.add_row(b.name, format_money(b.spending))
    return table


def transactions_table(result: ParseResult, palette: Palette) -> Table:
    table = Table(title="Transactions", title_style=palette.title, header_style=palette.header)
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Amount", justify="right", style=palette.amount)
    for tx in result.transactions:
        table.add_row(tx.date.isoformat(), tx.description, format_money(tx.amount))
    return table


def build_report(
    result: ParseResult,
    *,
    dark: bool = False,
    show_transactions: bool = False,
) -> RenderableType:
    palette = palette_for(dark)
    if result.is_empty:
        return Text("No transactions found.", style=palette.muted)

    summary = Text.assemble(
        ("Total spending: ", palette.header),
        (format_money(result.total_spending), palette.amount),
        (f"  ({result.transaction_count} transactions)", palette.muted),
    )
    parts: list[RenderableType] = [
        summary,
        bucket_table("Monthly spending", result.monthly_spending, palette),
        bucket_table("Weekly spending", result.weekly_spending, palette),
        bucket_table("Daily spending", result.daily_spending, palette),
    ]
    if show_transactions:
        parts.append(transactions_table(result, palette))
    return Group(*parts)


def render_report(
    result: ParseResult,
    console: Console,
    *,
    dark: bool = False,
    show_transactions: bool = False,
) -> None:
    console.print(build_report(result, dark=dark, show_transactions=show_transactions))


__all__ = [
    "DARK_PALETTE",
    "LIGHT_PALETTE",
    "Palette",
    "build_report",
    "format_money",
    "palette_for",
    "render_report",
]
