"""TranscriptShelf: read, cross-reference and search podcast transcripts."""

__version__ = "0.1.0"
