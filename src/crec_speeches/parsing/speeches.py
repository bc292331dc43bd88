"""Utilities for splitting Congressional Record transcripts into speeches."""
from __future__ import annotations

from typing import List, Optional
import re

from bs4 import BeautifulSoup

from ..core.types import SpeechSpan

_SPEAKER_PATTERN = re.compile(
    r"^ {2,}(?P<speaker>"
    r"(?:Mr\.|Mrs\.|Ms\.|Chairman|Chairwoman|Dr\.)"
    r"\s[A-Z]{2,}(?:\s[A-Z]{2,})*"
    r"(?:\sof\s[A-Z][a-zA-Z]+(?:\s[A-Z][a-zA-Z]+)*)?"
    r"(?:\s\[continuing\])?"
    r")\.",
    re.MULTILINE,
)


def extract_transcript(html: str) -> Optional[str]:
    """Return the preformatted transcript of a granule page, if any."""

    soup = BeautifulSoup(html, "html.parser")
    pre = soup.find("pre")
    if pre is None:
        return None
    return pre.get_text()


def segment_speeches(text: str) -> List[SpeechSpan]:
    """Split ``text`` at speaker announcements such as ``  Mr. SMITH.``.

    Each span covers the text between the end of its marker and the start of
    the next marker (or the end of ``text``). Text before the first marker is
    not attributed to anybody.
    """

    matches = list(_SPEAKER_PATTERN.finditer(text))
    spans: List[SpeechSpan] = []
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        spans.append(SpeechSpan(speaker=match.group("speaker"), text=text[match.end():end]))
    return spans


__all__ = ["extract_transcript", "segment_speeches"]
