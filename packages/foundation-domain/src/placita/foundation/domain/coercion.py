"""Lenient text-to-scalar coercion used by the typed accessors.

A value stored as text may be read back through a numeric or boolean
accessor. Parsing only looks at a leading prefix of the text and never
fails: unparseable text yields the zero value.
"""

from __future__ import annotations

import re

from placita.foundation.domain.values import INT64_MAX, INT64_MIN

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_BOOL_PREFIX = re.compile(r"\s*[+-]?0*([YyTt1-9])")


def parse_int(text: str) -> int:
    """Parse the leading integer of ``text``.

    Leading whitespace and a sign are accepted; parsing stops at the first
    non-digit. The result is clamped to the signed 64-bit range.

    Args:
        text: Stored text value.

    Returns:
        Parsed integer, or 0 when no digits lead the text.
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    digits = match.group(1)
    try:
        value = int(digits)
    except ValueError:
        # Beyond the interpreter's integer string conversion limit.
        value = INT64_MIN if digits.startswith("-") else INT64_MAX
    return max(INT64_MIN, min(INT64_MAX, value))


def parse_float(text: str) -> float:
    """Parse the leading floating-point literal of ``text``.

    Args:
        text: Stored text value.

    Returns:
        Parsed float, or 0.0 when the text has no numeric prefix.
    """
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(1))


def parse_bool(text: str) -> bool:
    """Interpret ``text`` as a boolean.

    After optional whitespace, sign and leading zeros, the text is true
    when it starts with ``Y``, ``T`` (any case) or a non-zero digit, so
    ``"YES"``, ``"true"``, ``"1"`` and ``"007"`` are true.

    Args:
        text: Stored text value.

    Returns:
        True for truthy text, False otherwise.
    """
    return _BOOL_PREFIX.match(text) is not None
