"""Core domain entities used across the crawler."""
from __future__ import annotations

from .sessions import DEFAULT_CONGRESS_SESSION, SESSION_DATES, resolve_session_dates
from .types import DateRange, GranuleRef, GranuleSummary, SearchPage, SpeechRecord, SpeechSpan

__all__ = [
    "DEFAULT_CONGRESS_SESSION",
    "DateRange",
    "GranuleRef",
    "GranuleSummary",
    "SESSION_DATES",
    "SearchPage",
    "SpeechRecord",
    "SpeechSpan",
    "resolve_session_dates",
]
