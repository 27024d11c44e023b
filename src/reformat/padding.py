"""Per-column padding rules.

This module defines how a single field is normalized to a fixed width
and how a source variant maps column indexes onto rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Mapping

from core.errors import PaddingError

Alignment = Literal["left", "right"]
PaddingLookup = Callable[[int], "PaddingRule | None"]


@dataclass(frozen=True)
class PaddingRule:
    """Fixed-width normalization for one column.

    Attributes:
        width: Minimum output width. Longer values are kept intact.
        fill_char: Single character used for padding.
        align: ``right`` pads on the left, ``left`` pads on the right.
        strip: Trim surrounding whitespace before padding.
    """

    width: int
    fill_char: str = " "
    align: Alignment = "right"
    strip: bool = True

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError(f"Padding width must be non-negative, got {self.width}")
        if len(self.fill_char) != 1:
            raise ValueError(f"Padding fill must be one character, got '{self.fill_char}'")
        if self.align not in ("left", "right"):
            raise ValueError(f"Padding alignment must be 'left' or 'right', got '{self.align}'")

    def pad(self, value: str) -> str:
        """Return the field value padded to this rule's width."""
        text = value.strip() if self.strip else value
        if self.align == "right":
            return text.rjust(self.width, self.fill_char)
        return text.ljust(self.width, self.fill_char)


def zero_pad(width: int) -> PaddingRule:
    """Build a right-aligned zero-fill rule, e.g. ``42`` -> ``000042``."""
    return PaddingRule(width=width, fill_char="0")


@dataclass(frozen=True)
class ColumnPaddingTable:
    """Column index to padding rule mapping for one data format.

    Attributes:
        column_count: Number of columns the format defines, or None if unbounded.
        rules: Rules keyed by zero-based column index. Missing keys pass through.
    """

    column_count: int | None = None
    rules: Mapping[int, PaddingRule] = field(default_factory=dict)

    def rule_for(self, column_index: int) -> PaddingRule | None:
        """Return the rule for a column, or None when the column is unpadded.

        Raises:
            PaddingError: If the column lies outside the format's columns.
        """
        if column_index < 0:
            raise PaddingError(column_index, "column indexes start at 0")
        if self.column_count is not None and column_index >= self.column_count:
            raise PaddingError(
                column_index,
                f"the data format defines only {self.column_count} columns",
            )
        return self.rules.get(column_index)
