"""Assembly of output records from segmented speeches."""
from __future__ import annotations

from typing import Iterable, List
import re

from ..core.types import GranuleSummary, SpeechRecord, SpeechSpan

_LINE_BREAKS = re.compile(r"[\n\t]")
_MULTISPACE = re.compile(r"\s+")


def normalize_whitespace(value: str) -> str:
    return _MULTISPACE.sub(" ", _LINE_BREAKS.sub(" ", value)).strip()


def assemble_records(
    summary: GranuleSummary,
    url: str,
    spans: Iterable[SpeechSpan],
    *,
    keep_empty: bool = True,
) -> List[SpeechRecord]:
    """Combine granule metadata with every speech span of the granule."""

    title = normalize_whitespace(summary.title)
    records: List[SpeechRecord] = []
    for span in spans:
        text = normalize_whitespace(span.text)
        if not text and not keep_empty:
            continue
        records.append(
            SpeechRecord(url=url, date=summary.date_issued, title=title, speaker=span.speaker, text=text)
        )
    return records


__all__ = ["assemble_records", "normalize_whitespace"]
