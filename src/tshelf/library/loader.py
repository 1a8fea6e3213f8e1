"""Read library rows from a JSON exchange file.

Accepted shapes:
- a JSON array of row objects,
- an object with an ``"episodes"`` array,
- JSON Lines (one row object per line).
"""

from __future__ import annotations

import json
from pathlib import Path


class LibraryFormatError(ValueError):
    """Raised when a library file cannot be read as rows."""


def _check_rows(rows: object, path: Path) -> list[dict]:
    if not isinstance(rows, list):
        raise LibraryFormatError(f"Expected a list of episode rows in {path}")
    bad = [i for i, row in enumerate(rows) if not isinstance(row, dict)]
    if bad:
        raise LibraryFormatError(f"Row {bad[0]} in {path} is not an object")
    return rows


def load_rows(path: Path) -> list[dict]:
    """Load library rows from ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        LibraryFormatError: If the content is not valid JSON or JSON Lines rows.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Library file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise LibraryFormatError(f"{path} is not UTF-8 text: {e.reason}") from e
    if not text.strip():
        return []

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        pass
    else:
        if isinstance(data, dict):
            data = data.get("episodes")
        return _check_rows(data, path)

    # Not a single JSON document; try JSON Lines
    rows = []
    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line:
            continue
        try:
            rows.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise LibraryFormatError(f"{path}:{lineno}: invalid JSON ({e.msg})") from e
    return _check_rows(rows, path)
