"""Incremental, cancellable free-text search over loaded episodes.

The scan runs as a coroutine. After every ``batch_size`` episodes it emits a
progress event and yields to the event loop, so a pending cancellation or a
progress display gets a chance to run before the next batch. Cancellation is
checked before each episode and produces a partial result, not an error.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from tshelf.core.events import EventCallback, ProgressEvent
from tshelf.core.models import Episode, EpisodeMatch, SearchResult
from tshelf.utils.console import console

BATCH_SIZE = 10


def match_episode(episode: Episode, query: str) -> EpisodeMatch | None:
    """Return the lines and paragraphs of ``episode`` containing ``query``.

    ``query`` must already be lower-cased. Returns None when no line matches.
    """
    lines = [line for line in episode.lines if query in line.text.lower()]
    if not lines:
        return None
    paragraphs = [p for p in episode.paragraphs if query in p.text.lower()]
    return EpisodeMatch(episode=episode, lines=lines, paragraphs=paragraphs)


async def search(
    episodes: Sequence[Episode],
    query: str,
    cancel: asyncio.Event | None = None,
    *,
    batch_size: int = BATCH_SIZE,
    on_event: EventCallback | None = None,
) -> SearchResult:
    """Scan ``episodes`` for lines containing ``query`` (case-insensitive).

    An empty query returns every episode unfiltered.

    Args:
        episodes: Episodes in loaded order.
        query: Plain substring to look for.
        cancel: Set to stop the scan before the next episode.
        batch_size: Episodes per batch between progress checkpoints.
        on_event: Optional callback receiving a ProgressEvent at each checkpoint.

    Returns:
        SearchResult with totals over the processed episodes.

    Raises:
        ValueError: If ``batch_size`` is less than 1.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")

    query = query.strip()
    total = len(episodes)

    if not query:
        return SearchResult(
            query="",
            matches=[
                EpisodeMatch(episode=ep, lines=list(ep.lines), paragraphs=list(ep.paragraphs))
                for ep in episodes
            ],
            processed=total,
            total=total,
        )

    lower_query = query.lower()
    result = SearchResult(query=query, total=total)

    for episode in episodes:
        if cancel is not None and cancel.is_set():
            result.cancelled = True
            break

        try:
            match = match_episode(episode, lower_query)
        except Exception as e:
            name = getattr(episode, "filename", "episode")
            console.print(f"[yellow]Skipped {name}:[/yellow] {e}")
            match = None

        if match is not None:
            result.matches.append(match)
            result.matching_episodes += 1
            result.total_matches += len(match.lines)

        result.processed += 1

        if result.processed % batch_size == 0:
            if on_event:
                on_event(
                    ProgressEvent(
                        stage="search",
                        progress=result.processed / total,
                        message=f"Searching... ({result.processed}/{total})",
                        data={
                            "processed": result.processed,
                            "total": total,
                            "matches": result.total_matches,
                            "episodes": result.matching_episodes,
                        },
                    )
                )
            await asyncio.sleep(0)

    return result


def search_sync(
    episodes: Sequence[Episode],
    query: str,
    *,
    batch_size: int = BATCH_SIZE,
    on_event: EventCallback | None = None,
) -> SearchResult:
    """Run :func:`search` to completion in a fresh event loop."""
    return asyncio.run(search(episodes, query, batch_size=batch_size, on_event=on_event))
