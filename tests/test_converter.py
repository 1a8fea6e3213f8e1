"""Tests for transcript export."""

from pathlib import Path

import pysubs2
import pytest

from tshelf.core.models import Episode, Line
from tshelf.subtitles.converter import (
    lines_to_subs,
    lines_to_text,
    paragraphs_to_text,
    save_transcript,
)
from tshelf.transcripts.parser import parse
from tshelf.transcripts.segmenter import segment


@pytest.fixture
def episode(apple_ttml: Path) -> Episode:
    lines = parse(apple_ttml.read_bytes())
    return Episode(id="1", filename=apple_ttml.name, lines=lines, paragraphs=segment(lines))


def test_paragraphs_to_text(episode: Episode):
    text = paragraphs_to_text(episode.paragraphs)
    assert text.split("\n\n") == [
        "SPEAKER_1: Welcome back to the show. Today we talk about gardening.",
        "SPEAKER_2: Thanks for having me.",
        "SPEAKER_2: Gardening is my passion! It started years ago",
    ]


def test_paragraphs_to_text_without_speaker(untimed_ttml: Path):
    paragraphs = segment(parse(untimed_ttml.read_bytes()))
    assert paragraphs_to_text(paragraphs) == "First paragraph Second paragraph"


def test_lines_to_text():
    lines = [Line(text="Hi", begin="00:01:05.000"), Line(text="untimed")]
    assert lines_to_text(lines) == "[1:05] Hi\nuntimed"


def test_lines_to_subs_skips_untimed():
    lines = [
        Line(text="Timed", start_seconds=1.0, end_seconds=2.5, speaker="A"),
        Line(text="Untimed"),
        Line(text="No end", start_seconds=3.0),
    ]
    subs = lines_to_subs(lines)
    assert len(subs.events) == 2
    assert subs.events[0].text == "A: Timed"
    assert subs.events[0].start == 1000
    assert subs.events[0].end == 2500
    assert subs.events[1].start == subs.events[1].end == 3000


def test_save_txt(tmp_path: Path, episode: Episode):
    path = save_transcript(episode, tmp_path / "out" / "ep.txt", fmt="txt")
    assert path.exists()
    assert path.read_text(encoding="utf-8").startswith("SPEAKER_1: Welcome back")


def test_save_timestamped(tmp_path: Path, episode: Episode):
    path = save_transcript(episode, tmp_path / "ep.timestamped.txt", fmt="timestamped")
    first = path.read_text(encoding="utf-8").splitlines()[0]
    assert first == "[0:00] Welcome back to the show."


@pytest.mark.parametrize("fmt", ["srt", "vtt"])
def test_save_subtitles(tmp_path: Path, episode: Episode, fmt: str):
    path = save_transcript(episode, tmp_path / f"ep.{fmt}", fmt=fmt)
    loaded = pysubs2.load(str(path))
    assert len(loaded.events) == 5
    assert "Thanks for having me." in loaded.events[2].plaintext


def test_unknown_format(tmp_path: Path, episode: Episode):
    with pytest.raises(ValueError):
        save_transcript(episode, tmp_path / "ep.pdf", fmt="pdf")
