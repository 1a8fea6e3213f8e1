"""Library index: map transcript asset ids to episode metadata.

A podcast library identifies an episode in several partially overlapping
ways: store track id, transcript identifiers, asset and enclosure URLs, UUID
and GUID. Every one of them (and any long digit run inside it) becomes a key
pointing at the same shared MetadataRecord.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Mapping

from tshelf.core.models import UNKNOWN_EPISODE, UNKNOWN_SHOW, MetadataRecord

# Registered in this order; on key collisions the first registration wins.
ID_FIELDS = (
    "store_track_id",
    "entitled_transcript_identifier",
    "free_transcript_identifier",
    "asset_url",
    "enclosure_url",
    "uuid",
    "guid",
)

_NUMERIC_ID_RE = re.compile(r"\d{10,}")
_ASSET_ID_RE = re.compile(r"transcript[_-]?(\d+)", re.IGNORECASE)


def extract_numeric_id(value: object) -> str | None:
    """Return the first run of 10 or more digits in ``value``, if any."""
    if not value:
        return None
    match = _NUMERIC_ID_RE.search(str(value))
    return match.group(0) if match else None


def extract_asset_id(filename: str) -> str | None:
    """Derive an asset id from a transcript filename.

    ``transcript_1000672687584.ttml`` yields ``"1000672687584"``.
    """
    match = _ASSET_ID_RE.search(filename)
    return match.group(1) if match else None


class LibraryIndex:
    """Read-only, insertion-ordered lookup from identifier to metadata."""

    def __init__(self, entries: Mapping[str, MetadataRecord] | None = None) -> None:
        self._entries: dict[str, MetadataRecord] = dict(entries or {})

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def keys(self) -> list[str]:
        return list(self._entries)

    def get(self, key: str) -> MetadataRecord | None:
        return self._entries.get(key)

    @property
    def record_count(self) -> int:
        """Number of distinct records (by identity) behind the keys."""
        return len({id(record) for record in self._entries.values()})

    def resolve(self, asset_id: str) -> MetadataRecord | None:
        """Look up metadata for an asset id.

        Tries an exact key first, then the first key (in insertion order) that
        contains ``asset_id``. With several containing keys the earliest one
        wins, which is not guaranteed to be the intended episode. The fallback
        is a linear scan over all keys.

        Returns:
            The matching record, or None when nothing matches.
        """
        if not asset_id:
            return None

        record = self._entries.get(asset_id)
        if record is not None:
            return record

        for key, record in self._entries.items():
            if asset_id in key:
                return record
        return None


def _record_from_row(row: Mapping[str, object]) -> MetadataRecord:
    return MetadataRecord(
        title=str(row.get("title") or row.get("cleaned_title") or UNKNOWN_EPISODE),
        show_name=str(row.get("podcast_title") or UNKNOWN_SHOW),
        author=row.get("author") or None,
        artwork_url=row.get("image_url") or None,
        duration=row.get("duration"),
        guid=row.get("guid") or None,
    )


def build_index(rows: Iterable[Mapping[str, object]]) -> LibraryIndex:
    """Build a LibraryIndex from raw library rows.

    Args:
        rows: Mappings with optional fields ``title``, ``cleaned_title``,
            ``podcast_title``, ``author``, ``image_url``, ``duration`` and the
            identifier fields in ``ID_FIELDS``.

    Returns:
        Index where each non-empty identifier, and its 10+ digit run, maps to
        the row's record.
    """
    entries: dict[str, MetadataRecord] = {}

    for row in rows:
        record = _record_from_row(row)
        for field_name in ID_FIELDS:
            value = row.get(field_name)
            if not value:
                continue
            entries.setdefault(str(value), record)
            numeric_id = extract_numeric_id(value)
            if numeric_id:
                entries.setdefault(numeric_id, record)

    return LibraryIndex(entries)


def resolve(index: LibraryIndex, asset_id: str) -> MetadataRecord | None:
    """Resolve ``asset_id`` against ``index``; None means not found."""
    return index.resolve(asset_id)
