"""Output path helpers."""

from __future__ import annotations

import re
from pathlib import Path

from tshelf.core.models import Episode

_EXTENSIONS = {"txt": ".txt", "timestamped": ".timestamped.txt", "srt": ".srt", "vtt": ".vtt"}


def slugify(text: str) -> str:
    """Convert text to a filesystem-safe slug."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text[:80].strip("-")


def export_path(episode: Episode, output_dir: Path, fmt: str) -> Path:
    """Path for an exported transcript.

    Named after the episode title when library metadata was found, otherwise
    after the transcript's filename stem.
    """
    stem = episode.title if episode.has_metadata else Path(episode.filename).stem
    slug = slugify(stem) or slugify(episode.id) or "transcript"
    return Path(output_dir) / f"{slug}{_EXTENSIONS.get(fmt, '.' + fmt)}"


def unique_path(path: Path, taken: set[Path]) -> Path:
    """Return ``path``, or ``name-2``, ``name-3``... if it is already in ``taken``.

    The chosen path is added to ``taken``.
    """
    candidate = path
    n = 2
    while candidate in taken:
        # Keep compound suffixes such as ".timestamped.txt" intact
        name, dot, suffixes = path.name.partition(".")
        candidate = path.with_name(f"{name}-{n}{dot}{suffixes}")
        n += 1
    taken.add(candidate)
    return candidate
