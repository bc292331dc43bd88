"""Floor speeches from the Congressional Record via the govinfo API."""
from __future__ import annotations

from .clients import GovInfoClient, build_search_query
from .config import AppConfig, CrawlConfig, GovInfoConfig, StorageConfig, load_config
from .core import DateRange, GranuleRef, GranuleSummary, SearchPage, SpeechRecord, SpeechSpan, resolve_session_dates
from .database import Storage, create_storage
from .errors import ConfigurationError, CrecError, FetchFailed, GovInfoClientError, NotFound, TransportError
from .parsing import assemble_records, extract_transcript, normalize_whitespace, segment_speeches
from .pipeline import CrawlEvent, ResultCollector, SpeechCrawler
from .runtime import CrawlerResources, create_crawler, get_congressional_records, run_crawl

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "CrawlConfig",
    "CrawlEvent",
    "CrawlerResources",
    "CrecError",
    "DateRange",
    "FetchFailed",
    "GovInfoClient",
    "GovInfoClientError",
    "GovInfoConfig",
    "GranuleRef",
    "GranuleSummary",
    "NotFound",
    "ResultCollector",
    "SearchPage",
    "SpeechCrawler",
    "SpeechRecord",
    "SpeechSpan",
    "Storage",
    "StorageConfig",
    "TransportError",
    "assemble_records",
    "build_search_query",
    "create_crawler",
    "create_storage",
    "extract_transcript",
    "get_congressional_records",
    "load_config",
    "normalize_whitespace",
    "resolve_session_dates",
    "run_crawl",
    "segment_speeches",
]
