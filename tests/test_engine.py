"""Tests for the incremental search scan."""

import asyncio

import pytest

from tshelf.core.events import ProgressEvent
from tshelf.core.models import Episode, Line
from tshelf.search.engine import match_episode, search, search_sync
from tshelf.transcripts.segmenter import segment


def _episode(i: int, *texts: str) -> Episode:
    lines = [Line(text=t) for t in texts]
    return Episode(id=str(i), filename=f"transcript_{i}.ttml", lines=lines, paragraphs=segment(lines))


def _needle_episodes(count: int) -> list[Episode]:
    return [_episode(i, "a haystack", f"the Needle number {i}") for i in range(count)]


def test_match_is_case_insensitive_substring():
    ep = _episode(1, "Gardening tips", "Soil", "more GARDEN talk")
    match = match_episode(ep, "garden")
    assert [line.text for line in match.lines] == ["Gardening tips", "more GARDEN talk"]


def test_match_none_when_no_line_matches():
    assert match_episode(_episode(1, "nothing here"), "garden") is None


def test_search_totals():
    episodes = [
        _episode(1, "garden one", "garden two"),
        _episode(2, "nothing"),
        _episode(3, "Garden three"),
    ]
    result = search_sync(episodes, "garden")
    assert result.total_matches == 3
    assert result.matching_episodes == 2
    assert result.processed == 3
    assert result.total == 3
    assert not result.cancelled
    assert [m.episode.id for m in result.matches] == ["1", "3"]
    assert result.summary == "3 matches in 2 files"


def test_search_returns_matching_paragraphs():
    ep = _episode(1, "Intro line.", "garden talk")
    result = search_sync([ep], "garden")
    assert result.matches[0].paragraphs == ep.paragraphs


def test_empty_query_shows_everything():
    episodes = [_episode(1, "x"), _episode(2, "y", "z")]
    result = search_sync(episodes, "   ")
    assert result.query == ""
    assert [m.episode for m in result.matches] == episodes
    assert [len(m.lines) for m in result.matches] == [1, 2]
    assert result.processed == 2
    assert result.summary == ""


def test_progress_events_every_batch():
    events: list[ProgressEvent] = []
    search_sync(_needle_episodes(25), "needle", on_event=events.append)
    assert [e.data["processed"] for e in events] == [10, 20]
    assert events[0].stage == "search"
    assert events[0].message == "Searching... (10/25)"
    assert events[1].progress == 20 / 25


def test_cancel_after_first_checkpoint():
    episodes = _needle_episodes(25)

    async def run():
        cancel = asyncio.Event()

        def on_event(event: ProgressEvent) -> None:
            cancel.set()

        return await search(episodes, "needle", cancel, on_event=on_event)

    result = asyncio.run(run())
    assert result.cancelled
    assert result.processed == 10
    assert result.total == 25
    assert result.matching_episodes == 10
    assert result.total_matches == 10
    assert result.summary == "Search stopped. Found 10 matches in 10 files (10/25 searched)"


def test_scan_yields_to_event_loop_between_batches():
    """A callback scheduled before the scan runs at the first checkpoint."""
    episodes = _needle_episodes(25)

    async def run():
        cancel = asyncio.Event()
        asyncio.get_running_loop().call_soon(cancel.set)
        return await search(episodes, "needle", cancel)

    result = asyncio.run(run())
    assert result.processed == 10
    assert result.cancelled


def test_cancel_before_start():
    async def run():
        cancel = asyncio.Event()
        cancel.set()
        return await search(_needle_episodes(5), "needle", cancel)

    result = asyncio.run(run())
    assert result.processed == 0
    assert result.matches == []
    assert result.summary == "Search stopped. Found 0 matches in 0 files (0/5 searched)"


def test_broken_episode_is_skipped():
    broken = Episode(id="bad", filename="bad.ttml", lines=[None])  # type: ignore[list-item]
    episodes = [_episode(1, "needle"), broken, _episode(2, "needle")]
    result = search_sync(episodes, "needle")
    assert result.processed == 3
    assert result.matching_episodes == 2
    assert result.total_matches == 2


def test_custom_batch_size():
    events: list[ProgressEvent] = []
    search_sync(_needle_episodes(6), "needle", batch_size=3, on_event=events.append)
    assert [e.data["processed"] for e in events] == [3, 6]


def test_batch_size_must_be_positive():
    with pytest.raises(ValueError, match="batch_size"):
        search_sync(_needle_episodes(3), "needle", batch_size=0)
