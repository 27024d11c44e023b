"""Tag-substitution template engine.

Templates are plain text with ``%%name%%`` tag spans. The same marker
opens and closes a tag, tags never nest, and there is no escape for a
literal ``%%``. Resolved values are inserted verbatim and never rescanned.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator, Mapping

from core.constants import FILE_ENCODING, TEMPLATE_TAG_DELIMITER
from core.errors import TemplateError, UnrecognizedTagError

TagResolver = Callable[[str], "str | None"]

_DELIMITER_LENGTH = len(TEMPLATE_TAG_DELIMITER)


def populate_template(template: str, resolve: TagResolver) -> str:
    """Replace every tag in a template with its resolved value.

    Args:
        template: Template text.
        resolve: Maps a trimmed tag name to its value, or ``None`` when unknown.

    Returns:
        Populated text with literal spans preserved exactly.

    Raises:
        TemplateError: If a tag is empty or the template ends inside a tag.
        UnrecognizedTagError: If a tag resolves to ``None`` or an empty string.
    """
    output: list[str] = []
    for literal, tag_name in _scan(template):
        output.append(literal)
        if tag_name is None:
            continue
        tag_value = resolve(tag_name)
        if not tag_value:
            raise UnrecognizedTagError(tag_name)
        output.append(tag_value)
    return "".join(output)


def find_template_tags(template: str) -> list[str]:
    """List the trimmed tag names of a template in order of appearance.

    Raises:
        TemplateError: If the template is malformed.
    """
    return [tag_name for _, tag_name in _scan(template) if tag_name is not None]


def load_template(template_path: str | Path) -> str:
    """Read a UTF-8 template file.

    Args:
        template_path: Path to the template file.

    Returns:
        Template text.

    Raises:
        TemplateError: If the file is missing or unreadable.
    """
    template_file = Path(template_path).expanduser()
    try:
        return template_file.read_text(encoding=FILE_ENCODING)
    except OSError as error:
        raise TemplateError(
            f"Failed to read template at {template_file}: {error}. "
            "Check the template path and permissions."
        ) from error


def mapping_resolver(values: Mapping[str, object]) -> TagResolver:
    """Build a resolver that looks tag names up in a mapping."""

    def resolve(tag_name: str) -> str | None:
        value = values.get(tag_name)
        return None if value is None else str(value)

    return resolve


def _scan(template: str) -> Iterator[tuple[str, str | None]]:
    """Walk a template as (literal span, following tag name) pairs.

    The final pair carries the trailing literal and ``None`` as tag name.
    """
    position = 0
    while position < len(template):
        open_position = template.find(TEMPLATE_TAG_DELIMITER, position)
        if open_position < 0:
            yield template[position:], None
            return
        tag_start = open_position + _DELIMITER_LENGTH
        close_position = template.find(TEMPLATE_TAG_DELIMITER, tag_start)
        if close_position < 0:
            raise TemplateError(
                f"Template ends in the middle of a tag opened at position {open_position}"
            )
        tag_name = template[tag_start:close_position].strip()
        if not tag_name:
            raise TemplateError(f"Empty tag found at position {tag_start}")
        yield template[position:open_position], tag_name
        position = close_position + _DELIMITER_LENGTH
