"""Launch-argument parsing for the argument domain.

Arguments of the form ``-Key value`` become argument-domain entries that
override every other domain for the lifetime of the process::

    python editor.py -FontSize 14 -RecentFiles '["a.txt", "b.txt"]'

Values are text unless they look like a JSON array or object that decodes
into supported values.
"""

from __future__ import annotations

import json
import logging
import sys
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from placita.foundation.domain.exceptions import UnsupportedValueTypeError
from placita.foundation.domain.values import to_canonical

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

_OPTIONS_TERMINATOR = "--"


def parse_arguments(argv: Sequence[str]) -> dict[str, Any]:
    """Parse ``-key value`` pairs from a launch argument vector.

    Rules:
    - A token starting with a single ``-`` (and longer than one character)
      names a key; the following token is its value.
    - ``--`` ends option parsing.
    - A key token without a following value is ignored.
    - Tokens that are not keys are skipped.

    Args:
        argv: Argument vector without the program name.

    Returns:
        Key to value mapping (later duplicates win).
    """
    parsed: dict[str, Any] = {}
    index = 0
    while index < len(argv):
        token = argv[index]
        if token == _OPTIONS_TERMINATOR:
            break
        if _is_key_token(token) and index + 1 < len(argv):
            parsed[token[1:]] = _parse_value(argv[index + 1])
            index += 2
            continue
        index += 1
    return parsed


def _is_key_token(token: str) -> bool:
    return len(token) > 1 and token.startswith("-") and not token.startswith("--")


def _parse_value(raw: str) -> Any:
    """Decode JSON containers, keeping everything else as text."""
    if not raw.startswith(("[", "{")):
        return raw
    try:
        decoded = json.loads(raw)
        to_canonical(decoded)
    except (ValueError, UnsupportedValueTypeError):
        logger.debug("argument_value_kept_as_text", extra={"raw_value": raw})
        return raw
    return decoded


@lru_cache(maxsize=1)
def get_parsed_arguments() -> dict[str, Any]:
    """Parse ``sys.argv`` once per process.

    Returns:
        Argument-domain mapping for the running process.
    """
    return parse_arguments(sys.argv[1:])
