"""
Extraction of the reason JSON from free-form model output.

Models often wrap the requested JSON in prose or a fenced code block. The
parser tries a fenced block first, then the outermost pair of braces, and
never raises.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from researcher_finder.core.schemas import REASON_KEYS, Justification

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```")
_BARE_JSON = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Find and decode the first JSON object embedded in `text`.

    Args:
        text: Raw model reply

    Returns:
        The decoded object, or None if nothing decodable to a dict was found
    """
    if not text:
        return None

    for pattern in (_FENCED_JSON, _BARE_JSON):
        match = pattern.search(text)
        if not match:
            continue
        candidate = match.group(1) if match.groups() else match.group(0)
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.debug(f"Candidate JSON did not decode: {e}")
            continue
        if isinstance(parsed, dict):
            return parsed

    return None


def parse_justification(text: Optional[str]) -> Optional[Justification]:
    """
    Parse recommendation reasons out of a model reply.

    Missing or non-string keys become empty strings.

    Returns:
        Justification, or None when the reply contains no JSON object
    """
    data = extract_json_object(text)
    if data is None:
        return None

    values = {}
    for key in REASON_KEYS:
        value = data.get(key)
        values[key] = value.strip() if isinstance(value, str) else ""
    return Justification(**values)
