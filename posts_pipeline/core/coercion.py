"""
Total text-to-value parse functions used by record normalization.

None of these raise: absent, blank or malformed text maps to a fallback value.
"""

import math
from datetime import datetime

# Only these two entities are decoded in tag strings.
TAG_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def is_blank(text: str | None) -> bool:
    """Return True for None or whitespace-only text."""
    return text is None or not text.strip()


def try_parse_int(text: str | None) -> int | None:
    """
    Parse an integer from text.

    Integer text parses directly; finite decimal text ("12.0", "1e3") is
    truncated toward zero.

    Args:
        text: Source text

    Returns:
        The parsed integer, or None when the text is blank or not numeric
    """
    if is_blank(text):
        return None

    stripped = text.strip()
    try:
        return int(stripped)
    except ValueError:
        pass

    try:
        number = float(stripped)
    except ValueError:
        return None

    if not math.isfinite(number):
        return None
    return int(number)


def try_parse_timestamp(text: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp such as ``2010-07-19T19:12:12.510``.

    Returns:
        The parsed datetime, or None when the text is blank or malformed
    """
    if is_blank(text):
        return None

    try:
        return datetime.fromisoformat(text.strip())
    except ValueError:
        return None


def decode_tag_entities(text: str | None) -> str:
    """
    Decode ``&lt;`` and ``&gt;`` in a tag string.

    This is a narrow decoder, not a general HTML unescaper: other entities
    such as ``&amp;`` are left untouched. The replacements never produce an
    ``&``, so decoded output cannot be decoded a second time.

    Args:
        text: Tag text, possibly absent

    Returns:
        Decoded text, or "" when absent
    """
    if not text:
        return ""

    for entity, char in TAG_ENTITIES:
        text = text.replace(entity, char)
    return text
