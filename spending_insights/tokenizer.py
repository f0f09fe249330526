"""Line splitting and field tokenizing for bank-export CSV text.

This is deliberately not an RFC 4180 reader: quoted fields cannot span lines,
and an unbalanced quote simply leaves the rest of the line inside the field.
It covers what bank exports actually emit (quoted amounts such as
``"1,234.56"`` and doubled quotes inside descriptions).
"""

from __future__ import annotations


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n`` and drop lines that are blank after trimming."""

    return [line for line in text.split("\n") if line.strip()]


def tokenize_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields.

    A ``"`` toggles quoting, except that ``""`` inside a quoted field emits a
    literal quote. Commas only separate fields outside quotes. An empty line
    yields a single empty field.
    """

    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append("".join(current).strip())
    return fields


__all__ = ["split_lines", "tokenize_line"]
