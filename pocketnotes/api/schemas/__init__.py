"""Pydantic schemas for note endpoints."""

from .note import NoteCreate, NoteResponse, NoteUpdate

__all__ = ["NoteCreate", "NoteUpdate", "NoteResponse"]
