"""Tests for CLI formatting helpers."""

import json

from gameon_accounts.formatting import (
    MAX_CELL_WIDTH,
    format_cell,
    format_json,
    format_table,
    truncate,
)
from gameon_accounts.models import AccountRecord
from tests.constants import SAMPLE_ACCOUNT


def test_truncate_short_text_unchanged():
    assert truncate("DevUser", 10) == "DevUser"


def test_truncate_long_text():
    assert truncate("a" * 20, 10) == "aaaaaaa..."


def test_format_cell_empty():
    assert format_cell("") == "-"


def test_format_cell_caps_width():
    assert len(format_cell("x" * 100)) == MAX_CELL_WIDTH


def test_format_table_header_only():
    assert format_table([]) == "ID  REV  NAME  COLOR  LOCATION"


def test_format_table_aligns_columns():
    record = AccountRecord.model_validate(SAMPLE_ACCOUNT)

    header, row = format_table([record]).splitlines()

    assert header.index("REV") == row.index(record.revision)
    assert row.split() == ["dummy.DevUser", record.revision, "DevUser", "blue", "firstroom"]


def test_format_json_single_and_list():
    record = AccountRecord.model_validate(SAMPLE_ACCOUNT)

    assert json.loads(format_json(record)) == SAMPLE_ACCOUNT
    assert json.loads(format_json([record])) == [SAMPLE_ACCOUNT]
