"""Orchestration of a Congressional Record speech crawl."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, List, Literal, Optional
import logging

from ..clients import GovInfoClient, build_search_query
from ..core.types import DateRange, GranuleRef, SpeechRecord
from ..errors import FetchFailed
from ..parsing import assemble_records, extract_transcript, segment_speeches
from .collector import ResultCollector

LOGGER = logging.getLogger(__name__)

CrawlEventKind = Literal[
    "start",
    "package",
    "granule",
    "record",
    "skipped",
    "limit",
    "finished",
    "error",
]


@dataclass(slots=True)
class CrawlEvent:
    """Progress notification emitted by :class:`SpeechCrawler`."""

    kind: CrawlEventKind
    collected: int
    package_id: str | None = None
    granule_id: str | None = None
    message: str | None = None
    record: SpeechRecord | None = None


ProgressCallback = Callable[[CrawlEvent], None]


class SpeechCrawler:
    """Depth-first crawl from search hits down to individual speeches."""

    def __init__(self, *, client: GovInfoClient, keep_empty_speeches: bool = True) -> None:
        self._client = client
        self._keep_empty_speeches = keep_empty_speeches

    def run(
        self,
        *,
        congress_session: int,
        date_range: DateRange,
        max_results: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[SpeechRecord]:
        """Crawl every speech in ``date_range`` or the first ``max_results``."""

        collector = ResultCollector(max_results)
        query = build_search_query(congress_session, date_range)
        current_package: str | None = None
        self._notify(progress_callback, CrawlEvent(kind="start", collected=0, message=query))
        try:
            for page in self._client.iter_search_pages(query):
                for package_id in page.package_ids:
                    current_package = package_id
                    if self._crawl_package(package_id, collector, progress_callback):
                        LOGGER.info("Scraping complete. Total speeches: %s", collector.count)
                        self._notify(
                            progress_callback,
                            CrawlEvent(
                                kind="limit",
                                collected=collector.count,
                                package_id=package_id,
                                message=f"Reached max_results={max_results}",
                            ),
                        )
                        return collector.records
        except Exception as exc:
            LOGGER.exception("Crawl failed: %s", exc)
            self._notify(
                progress_callback,
                CrawlEvent(kind="error", collected=collector.count, package_id=current_package, message=str(exc)),
            )
            raise
        LOGGER.info("Scraping complete. Total speeches: %s", collector.count)
        self._notify(
            progress_callback,
            CrawlEvent(kind="finished", collected=collector.count, message="Crawl finished"),
        )
        return collector.records

    def _crawl_package(
        self,
        package_id: str,
        collector: ResultCollector,
        progress_callback: Optional[ProgressCallback],
    ) -> bool:
        granules = self._client.list_granules(package_id)
        self._notify(
            progress_callback,
            CrawlEvent(
                kind="package",
                collected=collector.count,
                package_id=package_id,
                message=f"Listed {len(granules)} granules",
            ),
        )
        for granule in granules:
            if self._crawl_granule(granule, collector, progress_callback):
                return True
        return False

    def _crawl_granule(
        self,
        granule: GranuleRef,
        collector: ResultCollector,
        progress_callback: Optional[ProgressCallback],
    ) -> bool:
        try:
            summary = self._client.fetch_granule_summary(granule.package_id, granule.granule_id)
            content = self._client.fetch_granule_content(granule.package_id, granule.granule_id)
        except FetchFailed as exc:
            LOGGER.info("Skipping granule %s/%s: %s", granule.package_id, granule.granule_id, exc)
            self._notify(progress_callback, self._skipped(granule, collector, str(exc)))
            return False

        transcript = extract_transcript(content)
        spans = segment_speeches(transcript) if transcript is not None else []
        if not spans:
            self._notify(progress_callback, self._skipped(granule, collector, "No speeches found"))
            return False

        if not summary.title.strip() and granule.title:
            summary = replace(summary, title=granule.title)
        url = self._client.granule_url(granule.package_id, granule.granule_id)
        records = assemble_records(summary, url, spans, keep_empty=self._keep_empty_speeches)
        self._notify(
            progress_callback,
            CrawlEvent(
                kind="granule",
                collected=collector.count,
                package_id=granule.package_id,
                granule_id=granule.granule_id,
                message=f"Segmented {len(records)} speeches",
            ),
        )
        for record in records:
            stop = collector.add(record)
            LOGGER.info(
                "Collected %s speeches. Package: %s Granule: %s",
                collector.count,
                granule.package_id,
                granule.granule_id,
            )
            self._notify(
                progress_callback,
                CrawlEvent(
                    kind="record",
                    collected=collector.count,
                    package_id=granule.package_id,
                    granule_id=granule.granule_id,
                    record=record,
                ),
            )
            if stop:
                return True
        return False

    @staticmethod
    def _skipped(granule: GranuleRef, collector: ResultCollector, message: str) -> CrawlEvent:
        return CrawlEvent(
            kind="skipped",
            collected=collector.count,
            package_id=granule.package_id,
            granule_id=granule.granule_id,
            message=message,
        )

    @staticmethod
    def _notify(callback: Optional[ProgressCallback], event: CrawlEvent) -> None:
        if callback:
            callback(event)


__all__ = ["CrawlEvent", "ProgressCallback", "SpeechCrawler"]
