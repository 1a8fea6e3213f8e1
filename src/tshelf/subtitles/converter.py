"""Transcript export utilities.

Writes an episode out in one of:
- ``txt``: reading view, one paragraph per block with a speaker prefix
- ``timestamped``: one line per utterance with its start time
- ``srt`` / ``vtt``: subtitle files built from the timed lines
"""

from __future__ import annotations

from pathlib import Path

import pysubs2

from tshelf.core.models import Episode, Line, Paragraph

EXPORT_FORMATS = ("txt", "timestamped", "srt", "vtt")


def paragraphs_to_text(paragraphs: list[Paragraph]) -> str:
    """Plain-text reading view: ``Speaker: text`` blocks separated by blank lines."""
    blocks = []
    for p in paragraphs:
        prefix = f"{p.speaker}: " if p.speaker else ""
        blocks.append(prefix + p.text)
    return "\n\n".join(blocks)


def lines_to_text(lines: list[Line]) -> str:
    """Timestamped view: ``[5:09] text`` per line, untimed lines without a stamp."""
    rows = []
    for line in lines:
        rows.append(f"[{line.start_time}] {line.text}" if line.start_time else line.text)
    return "\n".join(rows)


def lines_to_subs(lines: list[Line]) -> pysubs2.SSAFile:
    """Build a subtitle file from the lines that carry a start time."""
    subs = pysubs2.SSAFile()
    for line in lines:
        if line.start_seconds is None:
            continue
        end = line.end_seconds if line.end_seconds is not None else line.start_seconds
        subs.events.append(
            pysubs2.SSAEvent(
                start=pysubs2.make_time(s=line.start_seconds),
                end=pysubs2.make_time(s=end),
                text=f"{line.speaker}: {line.text}" if line.speaker else line.text,
            )
        )
    return subs


def save_transcript(episode: Episode, path: Path, fmt: str = "txt") -> Path:
    """Save an episode transcript.

    Args:
        episode: Ingested episode.
        path: Output file path.
        fmt: One of ``EXPORT_FORMATS``.

    Returns:
        The path the file was written to.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt} (choose from {', '.join(EXPORT_FORMATS)})")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "txt":
        path.write_text(paragraphs_to_text(episode.paragraphs) + "\n", encoding="utf-8")
    elif fmt == "timestamped":
        path.write_text(lines_to_text(episode.lines) + "\n", encoding="utf-8")
    else:
        lines_to_subs(episode.lines).save(str(path), format_=fmt)

    return path
