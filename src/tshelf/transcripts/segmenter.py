"""Group timed transcript lines into readable paragraphs."""

from __future__ import annotations

import re

from tshelf.core.models import Line, Paragraph

PAUSE_THRESHOLD = 1.5  # seconds
MAX_WORDS = 150

_SENTENCE_END_RE = re.compile(r"[.!?]\s*$")


def _pause(previous: Line, current: Line) -> float:
    """Seconds between the end of ``previous`` and the start of ``current``."""
    prev_end = previous.end_seconds if previous.end_seconds is not None else previous.start_seconds
    if prev_end is None or current.start_seconds is None:
        return 0.0
    return current.start_seconds - prev_end


def _close(lines: list[Line]) -> Paragraph:
    first, last = lines[0], lines[-1]
    return Paragraph(
        start_time=first.start_time,
        end_time=last.end_time or last.start_time,
        speaker=first.speaker,
        lines=tuple(lines),
    )


def segment(
    lines: list[Line],
    pause_threshold: float = PAUSE_THRESHOLD,
    max_words: int = MAX_WORDS,
) -> list[Paragraph]:
    """Split a flat line sequence into speaker-aware paragraphs.

    A new paragraph starts before a line when the previous line ends a
    sentence and is followed by a pause of at least ``pause_threshold``
    seconds, when the line names a different speaker, or when the open
    paragraph already holds more than ``max_words`` words.

    Args:
        lines: Parsed lines in transcript order.
        pause_threshold: Minimum pause (seconds) after a sentence end to cut.
        max_words: Word count after which the open paragraph is cut.

    Returns:
        Paragraphs in order, covering every input line exactly once.
    """
    if not lines:
        return []

    paragraphs: list[Paragraph] = []
    current = [lines[0]]
    speaker = lines[0].speaker
    word_count = len(lines[0].text.split())

    for previous, line in zip(lines, lines[1:]):
        sentence_pause = (
            _SENTENCE_END_RE.search(previous.text) is not None
            and _pause(previous, line) >= pause_threshold
        )
        speaker_changed = bool(line.speaker) and line.speaker != speaker
        too_long = word_count > max_words

        if sentence_pause or speaker_changed or too_long:
            paragraphs.append(_close(current))
            current = [line]
            speaker = line.speaker
            word_count = len(line.text.split())
        else:
            current.append(line)
            word_count += len(line.text.split())

    paragraphs.append(_close(current))
    return paragraphs
