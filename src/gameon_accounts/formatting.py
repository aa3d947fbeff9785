"""Formatting helpers for printing accounts from the CLI."""

from __future__ import annotations

import json
from collections.abc import Sequence

from gameon_accounts.models import AccountRecord

TABLE_COLUMNS = ("ID", "REV", "NAME", "COLOR", "LOCATION")

# Revisions are long CouchDB tokens; keep the table readable.
MAX_CELL_WIDTH = 32


def truncate(text: str, max_length: int) -> str:
    """Truncate text to a maximum length."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def format_cell(value: str) -> str:
    """Format a record field for a table cell."""
    if not value:
        return "-"
    return truncate(value, MAX_CELL_WIDTH)


def account_row(record: AccountRecord) -> tuple[str, ...]:
    """Return the table cells for one account."""
    return (
        format_cell(record.id),
        format_cell(record.revision),
        format_cell(record.name),
        format_cell(record.favorite_color),
        format_cell(record.location.location),
    )


def format_table(records: Sequence[AccountRecord]) -> str:
    """Render accounts as a fixed-width text table with a header row."""
    rows = [TABLE_COLUMNS, *(account_row(r) for r in records)]
    widths = [max(len(row[i]) for row in rows) for i in range(len(TABLE_COLUMNS))]
    lines = ["  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip() for row in rows]
    return "\n".join(lines)


def format_json(records: AccountRecord | Sequence[AccountRecord]) -> str:
    """Render one account or a list of accounts as wire-format JSON."""
    if isinstance(records, AccountRecord):
        return json.dumps(records.to_payload(), indent=2)
    return json.dumps([r.to_payload() for r in records], indent=2)
