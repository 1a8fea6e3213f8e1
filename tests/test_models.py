"""Tests for core data models."""

import dataclasses

import pytest

from tshelf.core.models import (
    Episode,
    Line,
    MetadataRecord,
    Paragraph,
    SearchResult,
)


def test_line_defaults():
    line = Line(text="Bonjour")
    assert line.begin == ""
    assert line.start_seconds is None
    assert line.speaker is None
    assert line.start_time == ""


def test_line_display_times():
    line = Line(text="x", begin="00:05:09.120", end="01:02:03")
    assert line.start_time == "5:09"
    assert line.end_time == "1:02:03"


def test_line_is_immutable():
    line = Line(text="x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        line.text = "y"  # type: ignore[misc]


def test_paragraph_text_joins_lines():
    p = Paragraph(
        start_time="0:01",
        end_time="0:01",
        speaker=None,
        lines=(Line(text="One."), Line(text="Two")),
    )
    assert p.text == "One. Two"
    assert p.time_range == "0:01"


def test_episode_fallbacks():
    ep = Episode(id="1", filename="a.ttml")
    assert not ep.has_metadata
    assert ep.title == "Unknown Episode"
    assert ep.show_name == "Unknown Show"
    assert ep.lines == []


def test_episode_with_metadata():
    ep = Episode(id="1", filename="a.ttml", metadata=MetadataRecord(title="T", show_name="S"))
    assert ep.title == "T"
    assert ep.show_name == "S"


def test_search_result_summary():
    assert SearchResult(query="").summary == ""
    done = SearchResult(query="x", total_matches=4, matching_episodes=2, processed=3, total=3)
    assert done.summary == "4 matches in 2 files"
