"""Accumulator for crawl results with an optional cut-off."""
from __future__ import annotations

from typing import List, Optional

from ..core.types import SpeechRecord
from ..errors import ConfigurationError


class ResultCollector:
    """Collects speech records until ``max_results`` is reached."""

    def __init__(self, max_results: Optional[int] = None) -> None:
        if max_results is not None and max_results < 1:
            raise ConfigurationError(f"max_results must be a positive integer, got {max_results}")
        self._max_results = max_results
        self._records: List[SpeechRecord] = []

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[SpeechRecord]:
        return list(self._records)

    @property
    def should_stop(self) -> bool:
        return self._max_results is not None and len(self._records) >= self._max_results

    def add(self, record: SpeechRecord) -> bool:
        """Store ``record`` and report whether the crawl should stop."""

        if self.should_stop:
            return True
        self._records.append(record)
        return self.should_stop


__all__ = ["ResultCollector"]
