"""Transcript parsing helpers."""
from __future__ import annotations

from .records import assemble_records, normalize_whitespace
from .speeches import extract_transcript, segment_speeches

__all__ = ["assemble_records", "extract_transcript", "normalize_whitespace", "segment_speeches"]
