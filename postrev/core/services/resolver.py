# postrev/core/services/resolver.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from postrev.core.domain.entities import Document, Resolution

__all__ = [
    "TIMESTAMP_KEYS",
    "document_timestamp",
    "parse_timestamp",
    "revision_order",
    "resolve",
]

# first key that parses wins
TIMESTAMP_KEYS = ("last_modified_at", "date")

_FORMATS = ("%Y-%m-%d %H:%M:%S %z", "%Y-%m-%d %H:%M %z")


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse ISO 8601 or Jekyll-style (`2019-03-04 10:00:00 +0800`) timestamps."""
    value = value.strip()
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = None
        for fmt in _FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def document_timestamp(doc: Document) -> Optional[datetime]:
    for key in TIMESTAMP_KEYS:
        value = doc.front_matter.get(key)
        if isinstance(value, str):
            parsed = parse_timestamp(value)
            if parsed is not None:
                return parsed
    return None


def revision_order(members: Sequence[Document]) -> list[Document]:
    """Earliest revision first.

    Front-matter timestamps are used only when every member carries a
    parseable one; otherwise ingestion order (`seq`) is authoritative.
    """
    stamps = [document_timestamp(d) for d in members]
    if all(s is not None for s in stamps):
        keyed = sorted(zip(stamps, members), key=lambda p: (p[0], p[1].seq))
        return [d for _, d in keyed]
    return sorted(members, key=lambda d: d.seq)


def resolve(members: Sequence[Document]) -> Resolution:
    if not members:
        raise ValueError("Cannot resolve an empty equivalence class.")
    ordered = revision_order(members)
    return Resolution(canonical=ordered[-1], superseded=tuple(ordered[:-1]))
