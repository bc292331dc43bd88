"""Crawl orchestration components."""
from __future__ import annotations

from .collector import ResultCollector
from .crawl import CrawlEvent, SpeechCrawler

__all__ = ["CrawlEvent", "ResultCollector", "SpeechCrawler"]
