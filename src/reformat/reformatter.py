"""Canonical record reformatting.

This module splits a source data block into header and records and
re-emits each record with the canonical ``;`` separator, applying the
source variant's padding rules column by column.
"""

from __future__ import annotations

from core.constants import CANONICAL_SEPARATOR
from reformat.header_detection import HeaderDetector
from reformat.padding import PaddingLookup


def reformat_records(
    raw: str,
    separator: str,
    header_detector: HeaderDetector,
    padding_lookup: PaddingLookup,
) -> str:
    """Reformat a delimited data block into canonical form.

    Args:
        raw: Source data text.
        separator: Field separator used by the source, e.g. a tab.
        header_detector: Copies the leading header lines verbatim.
        padding_lookup: Returns the padding rule for a column index, or None.

    Returns:
        Header lines followed by one ``;``-joined line per record,
        each line terminated by a newline.

    Raises:
        FormatError: If the header cannot be identified.
        PaddingError: If a column's padding rule cannot be determined.
    """
    lines = iter(_split_lines(raw))
    output: list[str] = []
    header_detector(lines, output)
    for line in lines:
        output.append(_reformat_line(line, separator, padding_lookup))
    return "".join(f"{line}\n" for line in output)


def _split_lines(raw: str) -> list[str]:
    """Split on newlines, dropping the empty tail left by trailing newlines."""
    lines = raw.split("\n")
    while lines and not lines[-1]:
        lines.pop()
    return lines


def _reformat_line(line: str, separator: str, padding_lookup: PaddingLookup) -> str:
    fields = line.split(separator)
    padded_fields: list[str] = []
    for column_index, value in enumerate(fields):
        rule = padding_lookup(column_index)
        padded_fields.append(value if rule is None else rule.pad(value))
    return CANONICAL_SEPARATOR.join(padded_fields)
