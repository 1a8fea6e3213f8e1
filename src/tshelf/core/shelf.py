"""Shelf: the set of loaded transcripts plus the library index they resolve against."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable, Iterator, Mapping

from tshelf.core.events import EventCallback
from tshelf.core.models import Episode, SearchResult
from tshelf.library.index import LibraryIndex, build_index, extract_asset_id
from tshelf.search.engine import BATCH_SIZE, search
from tshelf.transcripts.parser import parse
from tshelf.transcripts.segmenter import MAX_WORDS, PAUSE_THRESHOLD, segment


class Shelf:
    """Owns the loaded episodes and the library index.

    Episodes are kept in load order. The index is replaced as a whole by
    :meth:`load_library` and never modified in place.
    """

    def __init__(
        self,
        index: LibraryIndex | None = None,
        pause_threshold: float = PAUSE_THRESHOLD,
        max_words: int = MAX_WORDS,
        batch_size: int = BATCH_SIZE,
    ) -> None:
        self.index = index if index is not None else LibraryIndex()
        self.pause_threshold = pause_threshold
        self.max_words = max_words
        self.batch_size = batch_size
        self._episodes: list[Episode] = []

    def __len__(self) -> int:
        return len(self._episodes)

    def __iter__(self) -> Iterator[Episode]:
        return iter(list(self._episodes))

    @property
    def episodes(self) -> list[Episode]:
        return list(self._episodes)

    @property
    def status(self) -> str:
        count = len(self._episodes)
        return f"{count} transcript{'s' if count != 1 else ''} loaded"

    def load_library(self, rows: Iterable[Mapping[str, object]]) -> LibraryIndex:
        """Build a new index from library rows and use it for later ingests."""
        self.index = build_index(rows)
        return self.index

    def ingest(self, raw: str | bytes, filename: str) -> Episode:
        """Parse, segment and resolve one transcript and add it to the shelf."""
        lines = parse(raw)
        paragraphs = segment(lines, self.pause_threshold, self.max_words)
        asset_id = extract_asset_id(filename)
        metadata = self.index.resolve(asset_id) if asset_id else None

        episode = Episode(
            id=asset_id or filename,
            filename=filename,
            lines=lines,
            paragraphs=paragraphs,
            metadata=metadata,
        )
        self._episodes.append(episode)
        return episode

    def ingest_file(self, path: Path) -> Episode:
        path = Path(path)
        return self.ingest(path.read_bytes(), path.name)

    def remove(self, episode_id: str) -> int:
        """Remove every episode with ``episode_id``; return how many were removed."""
        before = len(self._episodes)
        self._episodes = [ep for ep in self._episodes if ep.id != episode_id]
        return before - len(self._episodes)

    def clear(self) -> int:
        removed = len(self._episodes)
        self._episodes = []
        return removed

    async def search(
        self,
        query: str,
        cancel: asyncio.Event | None = None,
        on_event: EventCallback | None = None,
    ) -> SearchResult:
        # Snapshot so removals during a scan do not affect it
        return await search(
            list(self._episodes),
            query,
            cancel,
            batch_size=self.batch_size,
            on_event=on_event,
        )
