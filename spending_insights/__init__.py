"""Public interface for the ``spending_insights`` package.

Symbol re-exports only; no runtime logic lives here.
"""

from .api import load_statement, parse, parse_statement
from .headers import ColumnMap, resolve_columns
from .models import (
    ParseOutcome,
    ParseResult,
    Parsed,
    SpendingBucket,
    Transaction,
    Unparsable,
    UnparsableReason,
)
from .theme import (
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    PreferenceStore,
    ThemeSettings,
)
from .tokenizer import split_lines, tokenize_line

__all__ = [
    # API
    "parse",
    "parse_statement",
    "load_statement",
    # Pipeline stages
    "split_lines",
    "tokenize_line",
    "resolve_columns",
    "ColumnMap",
    # Models
    "Transaction",
    "SpendingBucket",
    "ParseResult",
    "ParseOutcome",
    "Parsed",
    "Unparsable",
    "UnparsableReason",
    # Theme preference
    "ThemeSettings",
    "PreferenceStore",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
]
