"""CLI for the ``spending_insights`` package.

Command handlers (``cmd_*``) hold the behavior and return exit codes; the
Typer commands below are thin wrappers. ``.env`` in the working directory is
loaded (without overriding the environment) before any command runs, then
logging is configured centrally.
"""

from __future__ import annotations

import sys
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console

from .api import parse_statement, read_statement_text
from .config import get_preferences_path
from .logging_setup import configure_logging, get_logger
from .models import ParseResult, Unparsable
from .render import render_report
from .theme import JsonFilePreferenceStore, ThemeSettings

_logger = get_logger("spending_insights.cli")


class ThemeMode(StrEnum):
    DARK = "dark"
    LIGHT = "light"


def _theme_settings() -> ThemeSettings:
    return ThemeSettings(JsonFilePreferenceStore(get_preferences_path()))


# ---- Command handlers --------------------------------------------------------


def cmd_report(
    csv_path: str | Path,
    *,
    as_json: bool = False,
    show_transactions: bool = False,
    drop_undated: bool = False,
    strict: bool = False,
    console: Console | None = None,
) -> int:
    """Parse a statement file and print the spending report.

    Errors are written to stderr and a non-zero status is returned. An
    unparsable statement renders as an empty report unless ``strict`` is set.
    """

    try:
        text = read_statement_text(csv_path)
    except FileNotFoundError:
        print(f"Error: File not found: {csv_path}", file=sys.stderr)
        return 1
    except PermissionError:
        print(f"Error: Permission denied: {csv_path}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: '{csv_path}' is not UTF-8 text: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Failed to read '{csv_path}': {e}", file=sys.stderr)
        return 1

    outcome = parse_statement(text, drop_undated=drop_undated)
    if isinstance(outcome, Unparsable):
        if strict:
            print(
                f"Error: Unparsable statement ({outcome.reason}): {outcome.detail}",
                file=sys.stderr,
            )
            return 1
        _logger.info("Statement %s is unparsable: %s", csv_path, outcome.detail)
        result = ParseResult.empty()
    else:
        result = outcome.result

    if as_json:
        typer.echo(result.model_dump_json(by_alias=True, indent=2))
        return 0

    render_report(
        result,
        console or Console(),
        dark=_theme_settings().is_dark,
        show_transactions=show_transactions,
    )
    return 0


def cmd_theme_show() -> int:
    typer.echo(_theme_settings().mode)
    return 0


def cmd_theme_toggle() -> int:
    settings = _theme_settings()
    settings.toggle()
    typer.echo(settings.mode)
    return 0


def cmd_theme_set(mode: ThemeMode) -> int:
    settings = _theme_settings()
    settings.set_dark(mode is ThemeMode.DARK)
    typer.echo(settings.mode)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Summarize spending from bank-statement CSV exports.",
)
theme_app = typer.Typer(no_args_is_help=True, help="Show or change the dark-mode preference.")
app.add_typer(theme_app, name="theme")


@app.command("report")
def report_cmd(
    csv_path: Annotated[
        Path,
        typer.Option("--csv-path", help="Path to a bank-statement CSV export", dir_okay=False),
    ],
    *,
    as_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON.")] = False,
    show_transactions: Annotated[
        bool, typer.Option("--transactions", help="Also list every retained transaction.")
    ] = False,
    drop_undated: Annotated[
        bool,
        typer.Option(
            "--drop-undated", help="Skip rows with an empty date instead of dating them today."
        ),
    ] = False,
    strict: Annotated[
        bool, typer.Option("--strict", help="Exit non-zero when the statement is unparsable.")
    ] = False,
) -> None:
    """Print monthly, weekly and daily spending for a statement."""

    code = cmd_report(
        csv_path,
        as_json=as_json,
        show_transactions=show_transactions,
        drop_undated=drop_undated,
        strict=strict,
    )
    raise typer.Exit(code)


@theme_app.command("show")
def theme_show_cmd() -> None:
    """Print the current mode (dark or light)."""

    raise typer.Exit(cmd_theme_show())


@theme_app.command("toggle")
def theme_toggle_cmd() -> None:
    """Switch between dark and light and persist the choice."""

    raise typer.Exit(cmd_theme_toggle())


@theme_app.command("set")
def theme_set_cmd(mode: Annotated[ThemeMode, typer.Argument(help="dark or light")]) -> None:
    """Persist an explicit mode."""

    raise typer.Exit(cmd_theme_set(mode))


@app.callback()
def _root() -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
