"""
Normalizers for the inconsistent field encodings found in YouTube renderers.

Text arrives as a plain string, a ``{"simpleText": ...}`` wrapper or a
``{"runs": [...]}`` list of styled fragments; counts arrive as localized
display text ("1 234 vues"); thumbnails arrive as unsorted candidate lists.
None of these functions raise on unexpected shapes.
"""

import re
from typing import Any, Dict, List, Optional

from models import Thumbnail

_NON_DIGITS = re.compile(r'[^0-9]')

# Longer digit runs are not counts (and can exceed int() string limits)
_MAX_COUNT_DIGITS = 30


def dig(node: Any, *path: Any) -> Any:
    """
    Safe nested lookup: ``dig(d, "a", 0, "b")`` is ``d["a"][0]["b"]`` or
    None as soon as a key is missing or a container has the wrong type.
    """
    current = node
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
        elif not isinstance(current, dict):
            return None
        elif key not in current:
            return None
        current = current[key]
    return current


def parse_text(value: Any) -> str:
    """Flatten any text encoding to a plain string ("" when absent)."""
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if not isinstance(value, dict):
        return ""
    simple = value.get("simpleText")
    if isinstance(simple, str):
        return simple
    runs = value.get("runs")
    if isinstance(runs, list):
        parts = []
        for run in runs:
            text = run.get("text") if isinstance(run, dict) else None
            parts.append(text if isinstance(text, str) else "")
        return "".join(parts)
    return ""


def parse_count(value: Any) -> Optional[int]:
    """
    Read a count out of display text by keeping only its digits.

    "1,234 vues" -> 1234. No digits at all -> None, which is not the same
    as a count of 0. A digit run too long to convert is also None.
    """
    digits = _NON_DIGITS.sub("", parse_text(value))
    if not digits or len(digits) > _MAX_COUNT_DIGITS:
        return None
    return int(digits)


def to_int(value: Any) -> Optional[int]:
    """int() for numeric strings/numbers, None for anything else."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None


def _width(candidate: Dict[str, Any]) -> float:
    width = candidate.get("width")
    if isinstance(width, (int, float)) and not isinstance(width, bool):
        return width
    return 0


def normalize_thumbnails(thumb_obj: Any) -> List[Thumbnail]:
    """
    Turn ``{"thumbnails": [...]}`` into Thumbnail records, widest first.

    The sort is stable, so candidates of equal width keep their order.
    """
    candidates = dig(thumb_obj, "thumbnails")
    if not isinstance(candidates, list):
        return []
    candidates = [c for c in candidates if isinstance(c, dict)]
    candidates = sorted(candidates, key=_width, reverse=True)
    return [
        Thumbnail(
            url=c.get("url") or None,
            width=c.get("width") or None,
            height=c.get("height") or None,
        )
        for c in candidates
    ]


def first_run(text_field: Any) -> Optional[Dict[str, Any]]:
    """First fragment of a runs-encoded text field, if any."""
    run = dig(text_field, "runs", 0)
    return run if isinstance(run, dict) else None
