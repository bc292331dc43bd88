"""Typed domain objects for the Congressional Record crawler."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive ``dateIssued`` window used to filter the search."""

    start: date
    end: date


@dataclass(slots=True)
class SearchPage:
    """One batch of package hits returned by the search endpoint."""

    package_ids: List[str]
    next_offset_mark: Optional[str]
    result_count: int


@dataclass(frozen=True, slots=True)
class GranuleRef:
    """Reference to a granule within a Congressional Record package."""

    package_id: str
    granule_id: str
    title: Optional[str] = None


@dataclass(slots=True)
class GranuleSummary:
    """Metadata of a single granule."""

    title: str
    date_issued: Optional[date]


@dataclass(frozen=True, slots=True)
class SpeechSpan:
    """Raw text attributed to one speaker inside a granule transcript."""

    speaker: str
    text: str


@dataclass(frozen=True, slots=True)
class SpeechRecord:
    """A single floor speech, ready for tabular output."""

    url: str
    date: Optional[date]
    title: str
    speaker: str
    text: str

    def to_row(self) -> Dict[str, str]:
        return {
            "url": self.url,
            "date": self.date.isoformat() if self.date else "",
            "title": self.title,
            "speaker": self.speaker,
            "text": self.text,
        }


__all__ = [
    "DateRange",
    "GranuleRef",
    "GranuleSummary",
    "SearchPage",
    "SpeechRecord",
    "SpeechSpan",
]
