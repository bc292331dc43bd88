import json
from datetime import date

import httpx
import pytest

from crec_speeches.clients import GovInfoClient, build_search_query
from crec_speeches.core.types import DateRange
from crec_speeches.errors import FetchFailed, NotFound, TransportError
from crec_speeches.pipeline import SpeechCrawler


def make_client(handler, **kwargs) -> GovInfoClient:
    return GovInfoClient(
        base_url="https://example.invalid",
        api_key="KEY",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_build_search_query_combines_filters():
    query = build_search_query(117, DateRange(date(2021, 1, 3), date(2023, 1, 3)))

    assert query == (
        "collection:CREC AND docClass:CREC AND congress:117 AND (section:House OR section:Senate)"
        " AND dateIssued:[2021-01-03 TO 2023-01-03]"
    )


def test_iter_search_pages_follows_offset_marks():
    responses = [
        {"results": [{"packageId": "CREC-2022-12-01"}, {"packageId": None}], "nextOffsetMark": "abc"},
        {"results": [{"packageId": "CREC-2022-11-30"}]},
    ]
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/search"
        assert request.url.params["historical"] == "true"
        assert request.headers["X-Api-Key"] == "KEY"
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=responses.pop(0))

    client = make_client(handler, search_page_size=50)
    pages = list(client.iter_search_pages("congress:117"))

    assert [page.package_ids for page in pages] == [["CREC-2022-12-01"], ["CREC-2022-11-30"]]
    assert pages[0].result_count == 2
    assert [body["offsetMark"] for body in bodies] == ["*", "abc"]
    assert bodies[0]["pageSize"] == 50
    assert bodies[0]["query"] == "congress:117"
    assert bodies[0]["sorts"] == [{"field": "dateIssued", "sortOrder": "DESC"}]


def test_iter_search_pages_is_lazy():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"results": [{"packageId": f"P{len(calls)}"}], "nextOffsetMark": f"m{len(calls)}"})

    client = make_client(handler)
    pages = client.iter_search_pages("q")

    assert calls == []
    first = next(pages)
    assert first.package_ids == ["P1"]
    assert len(calls) == 1
    next(pages)
    assert len(calls) == 2


def test_iter_search_pages_stops_on_empty_batch_and_repeated_mark():
    empty = make_client(lambda request: httpx.Response(200, json={"results": [], "nextOffsetMark": "x"}))
    assert list(empty.iter_search_pages("q")) == []

    calls = []

    def repeating(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"results": [{"packageId": "P"}], "nextOffsetMark": "*"})

    stale = make_client(repeating)
    assert len(list(stale.iter_search_pages("q"))) == 1
    assert len(calls) == 1


def test_search_failure_raises_transport_error():
    client = make_client(lambda request: httpx.Response(401))

    with pytest.raises(TransportError) as exc_info:
        list(client.iter_search_pages("q"))
    assert exc_info.value.status_code == 401


def test_list_granules_accumulates_pages():
    offset_marks = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/packages/CREC-2022-12-01/granules"
        mark = request.url.params["offsetMark"]
        offset_marks.append(mark)
        if mark == "*":
            return httpx.Response(
                200,
                json={"granules": [{"granuleId": "G1", "title": "Prayer"}, {"title": "broken"}], "nextOffsetMark": "n1"},
            )
        return httpx.Response(200, json={"granules": [{"granuleId": "G2"}], "nextOffsetMark": None})

    client = make_client(handler, granule_page_size=2)
    granules = client.list_granules("CREC-2022-12-01")

    assert [granule.granule_id for granule in granules] == ["G1", "G2"]
    assert granules[0].title == "Prayer"
    assert offset_marks == ["*", "n1"]


def test_granule_listing_failure_raises_transport_error():
    client = make_client(lambda request: httpx.Response(500))

    with pytest.raises(TransportError):
        client.list_granules("P")


def test_fetch_granule_summary_and_content():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/summary"):
            return httpx.Response(200, json={"title": "  MORNING\n HOUR ", "dateIssued": "2022-12-01"})
        return httpx.Response(200, text="<html><pre>  Mr. SMITH. Hello</pre></html>")

    client = make_client(handler)
    summary = client.fetch_granule_summary("P", "G")
    content = client.fetch_granule_content("P", "G")

    assert summary.title == "  MORNING\n HOUR "
    assert summary.date_issued == date(2022, 12, 1)
    assert "Mr. SMITH" in content
    assert client.granule_url("P", "G") == "https://example.invalid/packages/P/granules/G/htm"


def test_item_failures_map_to_not_found_and_fetch_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/summary"):
            return httpx.Response(404)
        return httpx.Response(503)

    client = make_client(handler)

    with pytest.raises(NotFound):
        client.fetch_granule_summary("P", "G")
    with pytest.raises(FetchFailed) as exc_info:
        client.fetch_granule_content("P", "G")
    assert exc_info.value.status_code == 503


def test_granule_listing_stops_on_repeated_offset_mark():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        mark = request.url.params["offsetMark"]
        return httpx.Response(200, json={"granules": [{"granuleId": "G1"}], "nextOffsetMark": mark})

    client = make_client(handler)

    assert [granule.granule_id for granule in client.list_granules("P")] == ["G1"]
    assert len(calls) == 1


def test_non_object_payloads_are_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/search":
            return httpx.Response(200, json=[{"packageId": "P"}])
        if request.url.path.endswith("/granules"):
            return httpx.Response(200, json="granules")
        return httpx.Response(200, json=[1, 2])

    client = make_client(handler)

    with pytest.raises(TransportError):
        list(client.iter_search_pages("q"))
    with pytest.raises(TransportError):
        client.list_granules("P")
    with pytest.raises(FetchFailed):
        client.fetch_granule_summary("P", "G")


def test_malformed_summary_only_skips_its_granule():
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/search":
            return httpx.Response(200, json={"results": [{"packageId": "P"}]})
        if path.endswith("/granules"):
            return httpx.Response(200, json={"granules": [{"granuleId": "BAD"}, {"granuleId": "GOOD"}]})
        if path == "/packages/P/granules/BAD/summary":
            return httpx.Response(200, json=[1, 2])
        if path.endswith("/summary"):
            return httpx.Response(200, json={"title": "Good granule", "dateIssued": "2022-12-01"})
        return httpx.Response(200, text="<pre>  Ms. JONES. Still here.</pre>")

    crawler = SpeechCrawler(client=make_client(handler))

    records = crawler.run(congress_session=117, date_range=DateRange(date(2022, 12, 1), date(2022, 12, 31)))

    assert [(record.url.split("/")[-2], record.speaker, record.text) for record in records] == [
        ("GOOD", "Ms. JONES", "Still here."),
    ]
