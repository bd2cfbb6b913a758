"""Deduplication and truncation of built records."""

from typing import Any, Iterable, List, Optional


def identity_key(record: Any) -> str:
    """``type:id``, falling back to the url, then the title."""
    kind = getattr(record, "type", "")
    ident = getattr(record, "id", None) or getattr(record, "url", None) or getattr(record, "title", "")
    return f"{kind}:{ident}"


def has_identity(record: Any) -> bool:
    return bool(getattr(record, "id", None) or getattr(record, "url", None))


def assemble_results(records: Iterable[Any], limit: Optional[int] = None) -> List[Any]:
    """
    Drop records with neither id nor url, keep the first record of each
    identity key, and stop after ``limit`` records (no limit when None).
    Input order is preserved.
    """
    seen = set()
    out = []
    for record in records:
        if limit is not None and len(out) >= limit:
            break
        if not has_identity(record):
            continue
        key = identity_key(record)
        if key in seen:
            continue
        seen.add(key)
        out.append(record)
    return out
