"""Unit tests for column padding rules."""

from __future__ import annotations

import pytest

from core.errors import PaddingError
from reformat.padding import ColumnPaddingTable, PaddingRule, zero_pad


def test_zero_pad_right_aligns_with_zeros() -> None:
    """Zero padding should fill numeric fields to a fixed width."""
    assert zero_pad(6).pad("42") == "000042"


def test_padding_rule_strips_before_padding() -> None:
    """Surrounding whitespace should not count toward the width."""
    rule = PaddingRule(width=5)

    assert rule.pad(" 7 ") == "    7"


def test_padding_rule_left_alignment_pads_on_right() -> None:
    """Left-aligned rules should append fill characters."""
    rule = PaddingRule(width=4, fill_char=".", align="left")

    assert rule.pad("ab") == "ab.."


def test_padding_rule_keeps_long_values_intact() -> None:
    """Values wider than the rule should not be truncated."""
    assert zero_pad(3).pad("123456") == "123456"


def test_padding_rule_rejects_multi_character_fill() -> None:
    """Fill must be exactly one character."""
    with pytest.raises(ValueError):
        PaddingRule(width=3, fill_char="ab")


def test_column_padding_table_returns_none_for_unpadded_column() -> None:
    """Columns without a rule pass through."""
    table = ColumnPaddingTable(column_count=3, rules={0: zero_pad(6)})

    assert table.rule_for(2) is None


def test_column_padding_table_raises_beyond_column_count() -> None:
    """Columns outside the format should raise a padding error."""
    table = ColumnPaddingTable(column_count=2)

    with pytest.raises(PaddingError) as error_info:
        table.rule_for(2)

    assert error_info.value.column_index == 2


def test_unbounded_column_padding_table_accepts_any_column() -> None:
    """Tables without a column count never reject a column."""
    assert ColumnPaddingTable().rule_for(500) is None
