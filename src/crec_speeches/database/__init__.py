"""Database integration components."""
from __future__ import annotations

from .models import Base, SpeechRecordModel
from .storage import Storage, create_storage

__all__ = ["Base", "SpeechRecordModel", "Storage", "create_storage"]
