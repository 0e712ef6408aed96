"""Output formatting helpers for the CLI."""

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

import click


def format_success(message: str) -> str:
    """Green, bold, prefixed with a check mark."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Red, bold, prefixed with a cross."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    return click.style(f"ℹ {message}", fg="blue")


def format_money(value) -> str:
    """Format an amount as dollars with thousands separators.

    Example:
        >>> format_money(Decimal("-1234.5"))
        '-$1,234.50'
    """
    amount = Decimal(str(value or 0))
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_table(
    headers: Sequence[str],
    rows: Iterable[Sequence],
    align_right: Optional[Iterable[int]] = None,
    max_width: int = 40,
) -> str:
    """Render rows as a boxed text table.

    Args:
        headers: Column headers
        rows: Row cell values; cells are converted with ``str``
        align_right: Indexes of columns to right-align (amounts)
        max_width: Cells longer than this are truncated

    Returns:
        The table, or an empty string without headers

    Example:
        >>> print(format_table(["Project", "Net"], [["Deck", "$1.00"]], align_right=[1]))
        +---------+-------+
        | Project |   Net |
        +---------+-------+
        | Deck    | $1.00 |
        +---------+-------+
    """
    if not headers:
        return ""

    right = set(align_right or [])
    text_rows: List[List[str]] = [
        [str(cell)[:max_width] for cell in row[: len(headers)]] for row in rows
    ]
    widths = [min(len(h), max_width) for h in headers]
    for row in text_rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def render(cells: Sequence[str]) -> str:
        padded = [
            f" {cell:>{widths[i]}} " if i in right else f" {cell:<{widths[i]}} "
            for i, cell in enumerate(cells)
        ]
        return "|" + "|".join(padded) + "|"

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines = [separator, render([str(h)[:max_width] for h in headers]), separator]
    if text_rows:
        lines.extend(render(row) for row in text_rows)
        lines.append(separator)
    return "\n".join(lines)
