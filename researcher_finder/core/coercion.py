"""
Numeric coercion for loosely typed index payloads.

Citation counts, h-indices and paper counts arrive from the vector index as
numbers, numeric strings or not at all. Everything downstream works with
non-negative integers, so every such field passes through here.
"""

import logging
import math
import numbers
from typing import Any, Optional

logger = logging.getLogger(__name__)


def to_non_negative_int(value: Any, field: Optional[str] = None) -> int:
    """
    Convert a value of unknown shape into a non-negative integer.

    Finite numbers are truncated toward zero and clamped at 0. Strings are
    parsed as integers, then as floats (truncated); unparseable strings give
    0. Booleans, None and any other type give 0. Never raises.

    Args:
        value: Raw field value
        field: Field name, used only for debug logging

    Returns:
        An integer >= 0
    """
    if isinstance(value, bool):
        number = None
    elif isinstance(value, numbers.Real):
        number = value
    elif isinstance(value, str):
        number = _parse_number(value)
    else:
        number = None

    if number is None or (isinstance(number, float) and not math.isfinite(number)):
        if value is not None:
            logger.debug(f"Coerced non-numeric {field or 'value'}={value!r} to 0")
        return 0

    return max(int(number), 0)


def _parse_number(text: str):
    text = text.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None
