"""Progress event system for long-running scans.

Provides a lightweight callback mechanism that the search engine emits events
through. Consumers (the CLI status spinner, tests) register a callback to
receive updates and may react to them, for example by requesting cancellation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class ProgressEvent:
    """A progress event emitted during a scan.

    Attributes:
        stage: Stage name (currently only "search").
        progress: Progress within this stage, 0.0 to 1.0.
        message: Human-readable status message.
        data: Optional payload (running totals).
    """

    stage: str
    progress: float
    message: str
    data: dict | None = field(default=None)


EventCallback = Callable[[ProgressEvent], None]
