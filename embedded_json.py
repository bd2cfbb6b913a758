"""
Extraction of JSON objects embedded in YouTube HTML pages.

YouTube ships its page state as inline script assignments such as
``var ytInitialData = {...};``. The object is located by a literal marker
and cut out with a brace matcher that understands JSON string literals,
so no JavaScript evaluation is needed.

Only the FIRST occurrence of a marker is considered. When a page repeats
an assignment (duplicated inline scripts) later copies are ignored.
"""

import json
import re
from typing import Any, Dict, Iterable, Optional

from error_handler import EmbeddedDataNotFound
from logging_setup import get_logger

logger = get_logger(__name__)

# Known spellings of each payload assignment, tried in order.
PAYLOAD_MARKERS = {
    "initial_data": (
        'var ytInitialData = ',
        'window["ytInitialData"] = ',
        'ytInitialData = ',
    ),
    "initial_player_response": (
        'var ytInitialPlayerResponse = ',
        'window["ytInitialPlayerResponse"] = ',
        'ytInitialPlayerResponse = ',
    ),
}

# Names used in error messages, matching the JS globals.
PAYLOAD_LABELS = {
    "initial_data": "ytInitialData",
    "initial_player_response": "ytInitialPlayerResponse",
}

# The only characters that can change scanner state.
_SIGNIFICANT = re.compile(r'[{}"\\]')


def find_object_span(document: str, start: int) -> Optional[int]:
    """
    Return the index just past the `}` matching the `{` at ``document[start]``.

    Outside a string, `"` opens a string and braces move the depth.
    Inside a string only `\\` and `"` matter: a backslash consumes the next
    character whatever it is, an unescaped quote closes the string.
    Returns None if the input ends before the depth gets back to zero.
    """
    depth = 0
    in_string = False
    pos = start
    end = len(document)

    while pos < end:
        match = _SIGNIFICANT.search(document, pos)
        if match is None:
            return None
        i = match.start()
        ch = document[i]
        pos = i + 1

        if in_string:
            if ch == '\\':
                pos = i + 2
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
            if depth == 0:
                return i + 1

    return None


def extract_json_object(document: str, marker: str) -> Optional[Any]:
    """
    Extract the JSON object that follows ``marker`` in ``document``.

    Returns the decoded value, or None when the marker is missing, no `{`
    follows it, braces never balance, or the balanced span is not valid
    JSON (including nesting too deep for the decoder). Those cases are
    deliberately indistinguishable to callers.
    """
    marker_index = document.find(marker)
    if marker_index == -1:
        return None

    start = document.find('{', marker_index + len(marker))
    if start == -1:
        logger.debug("No object after marker", extra={"marker": marker})
        return None

    stop = find_object_span(document, start)
    if stop is None:
        logger.debug("Unbalanced object after marker", extra={"marker": marker})
        return None

    try:
        return json.loads(document[start:stop])
    except (ValueError, RecursionError) as e:
        logger.debug(f"Embedded object is not valid JSON: {e}", extra={"marker": marker})
        return None


def extract_embedded_json(document: str, markers: Iterable[str]) -> Optional[Any]:
    """Try each marker in order and return the first successful extraction."""
    for marker in markers:
        value = extract_json_object(document, marker)
        if value is not None:
            return value
    return None


def extract_payload(document: str, name: str) -> Optional[Any]:
    """Extract a named payload ("initial_data", "initial_player_response")."""
    return extract_embedded_json(document, PAYLOAD_MARKERS[name])


def extract_initial_data(document: str) -> Optional[Any]:
    return extract_payload(document, "initial_data")


def extract_initial_player_response(document: str) -> Optional[Any]:
    return extract_payload(document, "initial_player_response")


def require_payload(document: str, name: str) -> Dict[str, Any]:
    """
    Like `extract_payload` but raise `EmbeddedDataNotFound` instead of
    returning None. A payload that decodes to something other than an
    object is treated as not found.
    """
    value = extract_payload(document, name)
    if not isinstance(value, dict):
        raise EmbeddedDataNotFound(PAYLOAD_LABELS.get(name, name))
    return value
