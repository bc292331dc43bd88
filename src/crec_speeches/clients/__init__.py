"""HTTP clients used by the crawler."""
from __future__ import annotations

from .govinfo import FIRST_OFFSET_MARK, GovInfoClient, build_search_query

__all__ = ["FIRST_OFFSET_MARK", "GovInfoClient", "build_search_query"]
