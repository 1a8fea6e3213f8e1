"""Shared data models for TranscriptShelf."""

from __future__ import annotations

from dataclasses import dataclass, field

from tshelf.core.timecode import format_time

UNKNOWN_EPISODE = "Unknown Episode"
UNKNOWN_SHOW = "Unknown Show"


@dataclass(frozen=True)
class Line:
    """One timed utterance extracted from transcript markup."""

    text: str
    begin: str = ""  # raw begin attribute
    end: str = ""  # raw end attribute
    start_seconds: float | None = None
    end_seconds: float | None = None
    speaker: str | None = None

    @property
    def start_time(self) -> str:
        return format_time(self.begin)

    @property
    def end_time(self) -> str:
        return format_time(self.end)


@dataclass(frozen=True)
class Paragraph:
    """A contiguous run of lines grouped for reading."""

    start_time: str
    end_time: str
    speaker: str | None
    lines: tuple[Line, ...]

    @property
    def text(self) -> str:
        return " ".join(line.text for line in self.lines)

    @property
    def time_range(self) -> str:
        if self.end_time and self.end_time != self.start_time:
            return f"{self.start_time} - {self.end_time}"
        return self.start_time


@dataclass(frozen=True)
class MetadataRecord:
    """Episode metadata taken verbatim from the podcast library."""

    title: str
    show_name: str
    author: str | None = None
    artwork_url: str | None = None
    duration: float | None = None
    guid: str | None = None


@dataclass
class Episode:
    """One ingested transcript with its lines, paragraphs and metadata."""

    id: str
    filename: str
    lines: list[Line] = field(default_factory=list)
    paragraphs: list[Paragraph] = field(default_factory=list)
    metadata: MetadataRecord | None = None

    @property
    def has_metadata(self) -> bool:
        return self.metadata is not None

    @property
    def title(self) -> str:
        return self.metadata.title if self.metadata else UNKNOWN_EPISODE

    @property
    def show_name(self) -> str:
        return self.metadata.show_name if self.metadata else UNKNOWN_SHOW


@dataclass
class EpisodeMatch:
    """Lines and paragraphs of one episode that contain the search query."""

    episode: Episode
    lines: list[Line]
    paragraphs: list[Paragraph]


@dataclass
class SearchResult:
    """Outcome of a search scan, possibly partial if it was cancelled."""

    query: str
    matches: list[EpisodeMatch] = field(default_factory=list)
    total_matches: int = 0
    matching_episodes: int = 0
    processed: int = 0
    total: int = 0
    cancelled: bool = False

    @property
    def summary(self) -> str:
        if not self.query:
            return ""
        if self.cancelled:
            return (
                f"Search stopped. Found {self.total_matches} matches in "
                f"{self.matching_episodes} files ({self.processed}/{self.total} searched)"
            )
        return f"{self.total_matches} matches in {self.matching_episodes} files"
