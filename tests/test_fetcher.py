"""Tests for the httpx feed fetcher and payload decoding."""

import asyncio

import httpx

from feedlist import fetcher
from feedlist.fetcher import decode_payload, fetch_feed


def _fetch(handler, url="https://example.com/feed", **kwargs):
    return asyncio.run(fetch_feed(url, transport=httpx.MockTransport(handler), **kwargs))


def test_json_response_is_decoded():
    result = _fetch(lambda request: httpx.Response(200, json={"item": [{"title": "a"}]}))

    assert result.status_code == 200
    assert result.response_json == {"item": [{"title": "a"}]}
    assert result.response_xml is None
    assert result.error is None


def test_xml_response_is_parsed(rss_bytes):
    result = _fetch(
        lambda request: httpx.Response(200, content=rss_bytes, headers={"content-type": "application/rss+xml"})
    )

    assert result.response_json is None
    assert result.response_xml is not None
    assert result.response_xml.tag == "rss"


def test_user_agent_header_is_sent():
    seen = {}

    def handler(request):
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(200, json={})

    _fetch(handler, user_agent="feedlist-test")
    assert seen["ua"] == "feedlist-test"


def test_unparseable_body_leaves_both_payloads_empty():
    result = _fetch(lambda request: httpx.Response(200, text="not a feed"))

    assert result.response_json is None
    assert result.response_xml is None
    assert result.text == "not a feed"


def test_transport_errors_are_retried_then_reported(monkeypatch):
    attempts = []

    def handler(request):
        attempts.append(request.url)
        raise httpx.ConnectError("boom", request=request)

    async def no_sleep(_seconds):
        return None

    monkeypatch.setattr(fetcher.asyncio, "sleep", no_sleep)
    result = _fetch(handler, retries=2)

    assert len(attempts) == 3
    assert result.status_code is None
    assert result.response_json is None and result.response_xml is None
    assert result.error.startswith("ConnectError")


def test_invalid_json_falls_back_to_xml():
    json_payload, xml_root = decode_payload(b"<items><item>1</item></items>", "<items><item>1</item></items>", "application/json")
    assert json_payload is None
    assert xml_root.tag == "items"


def test_broken_json_with_json_prefix_is_not_xml():
    json_payload, xml_root = decode_payload(b"{broken", "{broken")
    assert json_payload is None
    assert xml_root is None


def test_error_status_is_reported_without_payload():
    page = "<html><body><p>Not found<br></body></html>"
    result = _fetch(
        lambda request: httpx.Response(404, text=page, headers={"content-type": "text/html"}),
        retries=0,
    )

    assert result.status_code == 404
    assert result.error == "HTTP 404"
    assert result.response_json is None and result.response_xml is None
    assert result.text == page


def test_html_page_is_not_a_feed():
    result = _fetch(
        lambda request: httpx.Response(
            200, text="<html><body><item>x</item></body></html>", headers={"content-type": "text/html"}
        )
    )

    assert result.error is None
    assert result.response_xml is None


def test_recovered_html_root_is_rejected():
    body = b"<html><body><p>Not found<br></body></html>"
    json_payload, xml_root = decode_payload(body, body.decode())

    assert json_payload is None
    assert xml_root is None


def test_invalid_url_is_reported_not_raised():
    result = _fetch(lambda request: httpx.Response(200, json={}), retries=0, url="https://example.com/a\x00b")

    assert result.status_code is None
    assert result.error.startswith("InvalidURL")
