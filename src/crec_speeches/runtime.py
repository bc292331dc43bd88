"""Application level helpers for assembling crawl dependencies."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import List, Optional, Union

from .clients import GovInfoClient
from .config import AppConfig, CrawlConfig, GovInfoConfig, StorageConfig
from .core.sessions import DEFAULT_CONGRESS_SESSION, resolve_session_dates
from .core.types import SpeechRecord
from .errors import ConfigurationError
from .pipeline import SpeechCrawler
from .pipeline.crawl import ProgressCallback


@dataclass(slots=True)
class CrawlerResources:
    """Container bundling the objects needed to run a crawl."""

    crawler: SpeechCrawler
    client: GovInfoClient
    owns_client: bool = True

    def close(self) -> None:
        if self.owns_client:
            self.client.close()


def create_crawler(config: AppConfig, *, client: GovInfoClient | None = None) -> CrawlerResources:
    owns_client = client is None
    if client is None:
        if not config.govinfo.api_key:
            raise ConfigurationError("A govinfo API key must be provided")
        client = GovInfoClient(
            config.govinfo.base_url,
            config.govinfo.api_key,
            timeout=config.govinfo.timeout,
            search_page_size=config.govinfo.search_page_size,
            granule_page_size=config.govinfo.granule_page_size,
            historical=config.govinfo.historical,
        )
    crawler = SpeechCrawler(client=client, keep_empty_speeches=config.crawl.keep_empty_speeches)
    return CrawlerResources(crawler=crawler, client=client, owns_client=owns_client)


def run_crawl(
    config: AppConfig,
    *,
    client: GovInfoClient | None = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> List[SpeechRecord]:
    """Validate ``config`` and crawl the configured part of the record."""

    date_range = resolve_session_dates(config.crawl.congress_session, config.crawl.date_from, config.crawl.date_to)
    if config.crawl.max_results is not None and config.crawl.max_results < 1:
        raise ConfigurationError(f"max_results must be a positive integer, got {config.crawl.max_results}")
    resources = create_crawler(config, client=client)
    try:
        return resources.crawler.run(
            congress_session=config.crawl.congress_session,
            date_range=date_range,
            max_results=config.crawl.max_results,
            progress_callback=progress_callback,
        )
    finally:
        resources.close()


def get_congressional_records(
    api_key: str,
    max_results: Optional[int] = None,
    date_from: Optional[Union[date, str]] = None,
    date_to: Optional[Union[date, str]] = None,
    congress_session: int = DEFAULT_CONGRESS_SESSION,
    *,
    keep_empty_speeches: bool = True,
    govinfo: GovInfoConfig | None = None,
    client: GovInfoClient | None = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> List[SpeechRecord]:
    """Retrieve Congressional Record speeches of a session or date range.

    ``date_from``/``date_to`` override the dates of ``congress_session``.
    Records are returned in search order (newest issue first), then granule
    order, then speaker order. With ``max_results`` the crawl stops as soon
    as that many speeches were collected.
    """

    if not api_key:
        raise ConfigurationError("A govinfo API key must be provided")
    govinfo_config = replace(govinfo or GovInfoConfig(), api_key=api_key)
    config = AppConfig(
        govinfo=govinfo_config,
        crawl=CrawlConfig(
            congress_session=congress_session,
            max_results=max_results,
            date_from=date_from.isoformat() if isinstance(date_from, date) else date_from,
            date_to=date_to.isoformat() if isinstance(date_to, date) else date_to,
            keep_empty_speeches=keep_empty_speeches,
        ),
        storage=StorageConfig(),
    )
    return run_crawl(config, client=client, progress_callback=progress_callback)


__all__ = ["CrawlerResources", "create_crawler", "get_congressional_records", "run_crawl"]
