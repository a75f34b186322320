"""PocketNotes: personal notes with bearer-token auth and per-note ownership."""

__version__ = "0.1.0"
