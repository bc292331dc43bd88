"""HTTP client for the govinfo API (Congressional Record collection)."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional
import logging

import httpx

from ..core.types import DateRange, GranuleRef, GranuleSummary, SearchPage
from ..errors import FetchFailed, NotFound, TransportError

LOGGER = logging.getLogger(__name__)

FIRST_OFFSET_MARK = "*"


def build_search_query(congress_session: int, date_range: DateRange) -> str:
    """Return the search query for House and Senate floor records."""

    base_query = (
        f"collection:CREC AND docClass:CREC AND congress:{congress_session}"
        " AND (section:House OR section:Senate)"
    )
    return f"{base_query} AND dateIssued:[{date_range.start.isoformat()} TO {date_range.end.isoformat()}]"


class GovInfoClient:
    """Minimal client for crawling Congressional Record granules from govinfo."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        *,
        timeout: float = 60.0,
        search_page_size: int = 1000,
        granule_page_size: int = 1000,
        historical: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._search_page_size = search_page_size
        self._granule_page_size = granule_page_size
        self._historical = historical
        self._client = httpx.Client(timeout=timeout, transport=transport, follow_redirects=True)

    # --- public API -----------------------------------------------------
    def iter_search_pages(self, query: str) -> Iterator[SearchPage]:
        """Lazily walk the search result set, one request per page."""

        offset_mark = FIRST_OFFSET_MARK
        while True:
            payload = {
                "query": query,
                "pageSize": self._search_page_size,
                "offsetMark": offset_mark,
                "sorts": [{"field": "dateIssued", "sortOrder": "DESC"}],
                "resultLevel": "default",
            }
            params = {"historical": "true" if self._historical else "false"}
            response_json = self._request_page("POST", "/search", params=params, json_body=payload)
            page = self._parse_search_page(response_json)
            if not page.result_count:
                break
            yield page
            next_mark = page.next_offset_mark
            if not next_mark:
                break
            if next_mark == offset_mark:
                LOGGER.warning("Search returned the offset mark %s again, stopping pagination", next_mark)
                break
            offset_mark = next_mark

    def iter_granule_pages(self, package_id: str) -> Iterator[List[GranuleRef]]:
        """Walk the granule listing of ``package_id`` page by page."""

        endpoint = f"/packages/{package_id}/granules"
        offset_mark = FIRST_OFFSET_MARK
        while True:
            params = {"offsetMark": offset_mark, "pageSize": str(self._granule_page_size)}
            response_json = self._request_page("GET", endpoint, params=params)
            entries = response_json.get("granules") or []
            if not entries:
                break
            yield self._parse_granule_refs(package_id, entries)
            next_mark = response_json.get("nextOffsetMark")
            if not next_mark:
                break
            if str(next_mark) == offset_mark:
                LOGGER.warning("Granule listing for %s repeated offset mark %s", package_id, next_mark)
                break
            offset_mark = str(next_mark)

    def list_granules(self, package_id: str) -> List[GranuleRef]:
        """Return every granule of ``package_id`` in listing order."""

        granules: List[GranuleRef] = []
        for page in self.iter_granule_pages(package_id):
            granules.extend(page)
        return granules

    def fetch_granule_summary(self, package_id: str, granule_id: str) -> GranuleSummary:
        """Download the summary metadata of a granule."""

        response = self._request_item(f"/packages/{package_id}/granules/{granule_id}/summary")
        try:
            data = response.json()
        except ValueError as exc:
            raise FetchFailed(f"Summary of {package_id}/{granule_id} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise FetchFailed(f"Summary of {package_id}/{granule_id} is not a JSON object")
        return self._parse_granule_summary(data)

    def fetch_granule_content(self, package_id: str, granule_id: str) -> str:
        """Download the HTML rendition of a granule."""

        response = self._request_item(f"/packages/{package_id}/granules/{granule_id}/htm")
        return response.text

    def granule_url(self, package_id: str, granule_id: str) -> str:
        return f"{self._base_url}/packages/{package_id}/granules/{granule_id}/htm"

    def close(self) -> None:
        """Close the underlying HTTP client."""

        self._client.close()

    def __enter__(self) -> "GovInfoClient":  # pragma: no cover - trivial
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - trivial
        self.close()

    # --- helpers --------------------------------------------------------
    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["X-Api-Key"] = self._api_key
        return headers

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        url = f"{self._base_url}{path}"
        return self._client.request(method, url, headers=self._headers(), params=params, json=json_body)

    def _request_page(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        try:
            response = self._send(method, path, params=params, json_body=json_body)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            LOGGER.warning("govinfo API returned status %s for %s %s", status, method, path)
            raise TransportError(self._status_message(status), status_code=status) from exc
        except httpx.HTTPError as exc:
            LOGGER.warning("HTTP error while requesting %s %s: %s", method, path, exc)
            raise TransportError(f"Failed to request {path}") from exc
        except ValueError as exc:
            raise TransportError(f"Response for {path} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise TransportError(f"Response for {path} is not a JSON object")
        return data

    def _request_item(self, path: str) -> httpx.Response:
        try:
            response = self._send("GET", path)
        except httpx.HTTPError as exc:
            LOGGER.warning("HTTP error while requesting GET %s: %s", path, exc)
            raise FetchFailed(f"Failed to request {path}") from exc
        status = response.status_code
        if status == 404:
            raise NotFound(f"{path} was not found", status_code=status)
        if not response.is_success:
            LOGGER.warning("govinfo API returned status %s for GET %s", status, path)
            raise FetchFailed(self._status_message(status), status_code=status)
        return response

    @staticmethod
    def _status_message(status: int) -> str:
        if status == 401:
            return "The govinfo API rejected the request with status 401. Please configure a valid API key."
        if status == 403:
            return "The govinfo API refused access with status 403. Please check the API key and its permissions."
        if status == 429:
            return "The govinfo API rate limit was reached (status 429). Please wait a moment and try again."
        return f"The govinfo API rejected the request with status {status}."

    @staticmethod
    def _parse_search_page(data: Dict[str, Any]) -> SearchPage:
        results = data.get("results") or []
        package_ids: List[str] = []
        for hit in results:
            package_id = hit.get("packageId") if isinstance(hit, dict) else None
            if not package_id:
                LOGGER.debug("Skipping search hit without packageId: %r", hit)
                continue
            package_ids.append(str(package_id))
        next_mark = data.get("nextOffsetMark")
        return SearchPage(
            package_ids=package_ids,
            next_offset_mark=str(next_mark) if next_mark else None,
            result_count=len(results),
        )

    @staticmethod
    def _parse_granule_refs(package_id: str, entries: List[Any]) -> List[GranuleRef]:
        granules: List[GranuleRef] = []
        for entry in entries:
            granule_id = entry.get("granuleId") if isinstance(entry, dict) else None
            if not granule_id:
                LOGGER.debug("Skipping granule entry without granuleId in %s", package_id)
                continue
            granules.append(GranuleRef(package_id=package_id, granule_id=str(granule_id), title=entry.get("title")))
        return granules

    @staticmethod
    def _parse_granule_summary(data: Dict[str, Any]) -> GranuleSummary:
        def _parse_date(value: Optional[str]) -> Optional[date]:
            if not value:
                return None
            try:
                return datetime.fromisoformat(str(value)).date()
            except ValueError:
                return None

        return GranuleSummary(
            title=str(data.get("title") or ""),
            date_issued=_parse_date(data.get("dateIssued")),
        )


__all__ = ["FIRST_OFFSET_MARK", "GovInfoClient", "build_search_query"]
