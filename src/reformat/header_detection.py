"""Header detectors for source data blocks.

A detector consumes the leading header lines from a line iterator and
copies them verbatim into the output. Each source variant picks the
detector matching its file layout.
"""

from __future__ import annotations

from typing import Callable, Iterator

from core.errors import FormatError

HeaderDetector = Callable[[Iterator[str], list[str]], None]


def copy_first_lines(line_count: int) -> HeaderDetector:
    """Build a detector copying a fixed number of header lines.

    Raises:
        FormatError: When applied to a block shorter than ``line_count``.
    """

    def detect(lines: Iterator[str], output: list[str]) -> None:
        for copied in range(line_count):
            line = next(lines, None)
            if line is None:
                raise FormatError(
                    f"Expected {line_count} header lines but the data ends after {copied}"
                )
            output.append(line)

    return detect


def copy_until_blank_line() -> HeaderDetector:
    """Build a detector copying lines up to and including the first blank line.

    Raises:
        FormatError: When the block has no blank line.
    """

    def detect(lines: Iterator[str], output: list[str]) -> None:
        for line in lines:
            output.append(line)
            if not line.strip():
                return
        raise FormatError("Could not find the blank line ending the data header")

    return detect


def copy_through_marker(end_marker: str, trailing_lines: int = 0) -> HeaderDetector:
    """Build a detector copying through the line containing ``end_marker``.

    Args:
        end_marker: Text identifying the last line of the header block.
        trailing_lines: Extra lines after the marker line that belong to the
            header, e.g. a column-name line.

    Raises:
        FormatError: When the marker or the trailing lines are missing.
    """
    copy_trailing = copy_first_lines(trailing_lines)

    def detect(lines: Iterator[str], output: list[str]) -> None:
        for line in lines:
            output.append(line)
            if end_marker in line:
                copy_trailing(lines, output)
                return
        raise FormatError(f"Could not find header end marker '{end_marker}' in the data")

    return detect
