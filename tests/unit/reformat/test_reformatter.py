"""Unit tests for canonical record reformatting."""

from __future__ import annotations

import pytest

from core.errors import FormatError, PaddingError
from reformat.header_detection import copy_first_lines, copy_through_marker
from reformat.padding import ColumnPaddingTable, PaddingRule, zero_pad
from reformat.reformatter import reformat_records
from tests.fixture_paths import read_fixture


def _no_padding(column_index: int) -> PaddingRule | None:
    return None


def test_reformat_records_pads_and_uses_canonical_separator() -> None:
    """Source separators should become semicolons with padded columns."""
    table = ColumnPaddingTable(rules={0: zero_pad(6)})

    reformatted = reformat_records("id,name\n42,abc", ",", copy_first_lines(1), table.rule_for)

    assert reformatted == "id,name\n000042;abc\n"


def test_reformat_records_is_idempotent_on_canonical_block() -> None:
    """Canonical blocks without padding rules should be unchanged."""
    canonical = "header line\na;b;c\n1;;3\n"

    reformatted = reformat_records(canonical, ";", copy_first_lines(1), _no_padding)

    assert reformatted == canonical


def test_reformat_records_keeps_empty_fields() -> None:
    """Empty fields, including trailing ones, should survive reformatting."""
    reformatted = reformat_records("h\n1\t\t3\t", "\t", copy_first_lines(1), _no_padding)

    assert reformatted == "h\n1;;3;\n"


def test_reformat_records_copies_header_verbatim() -> None:
    """Header lines keep their original separators."""
    raw = read_fixture("pangaea/textfile.tab")
    detector = copy_through_marker("*/", trailing_lines=1)

    reformatted = reformat_records(raw, "\t", detector, _no_padding)

    assert reformatted.splitlines()[5:] == [
        "Depth water [m]\tTemp [deg C]\tSal",
        "5;7.25;35.1",
        "10;7.20;35.2",
    ]


def test_reformat_records_raises_when_header_missing() -> None:
    """Header detection failures should propagate as format errors."""
    with pytest.raises(FormatError):
        reformat_records("1\t2\n", "\t", copy_through_marker("*/"), _no_padding)


def test_reformat_records_raises_for_undeterminable_padding() -> None:
    """Records wider than the padding table should raise padding errors."""
    table = ColumnPaddingTable(column_count=2)

    with pytest.raises(PaddingError):
        reformat_records("h\n1,2,3\n", ",", copy_first_lines(1), table.rule_for)
