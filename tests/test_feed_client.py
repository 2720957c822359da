import asyncio

import pytest
from aiohttp import web
from aiohttp import test_utils

from branchhub.core.exceptions import MalformedResponseError, UpstreamError
from branchhub.schemas.feed import RawFeedLocation
from branchhub.services.feed_client import BankFeedClient

ORIGIN = "https://www.bank.example.test"

VALID_BODY = {
    "statusCode": 200,
    "messages": None,
    "payload": {
        "contents": [
            {
                "title": "Nizami ATM",
                "address": "X",
                "serviceNames": "Cash",
                "location": "40.40, 49.86",
                "slug": "nizami-atm",
                "language": "en",
                "id": 42,
            }
        ],
        "positionOrder": 1,
        "pageType": "serviceNetwork",
        "siteMode": "individual",
        "categoryType": "branches",
    },
}


def fetch_with(handler):
    async def _run():
        app = web.Application()
        app.router.add_get("/feed", handler)
        async with test_utils.TestServer(app) as server:
            client = BankFeedClient(str(server.make_url("/feed")), ORIGIN)
            return await client.fetch()

    return asyncio.run(_run())


def test_fetch_sends_site_headers_and_parses_payload():
    seen = {}

    async def handler(request):
        seen.update(request.headers)
        return web.json_response(VALID_BODY)

    feed = fetch_with(handler)

    assert seen["Accept"] == "application/json"
    assert seen["Origin"] == ORIGIN
    assert seen["Referer"] == f"{ORIGIN}/"
    assert feed.status_code == 200
    location = RawFeedLocation.model_validate(feed.payload.contents[0])
    assert location.id == "42"
    assert location.service_names == "Cash"
    assert location.language == "en"


def test_non_success_status_raises_upstream_error():
    async def handler(request):
        return web.Response(status=503, text="maintenance")

    with pytest.raises(UpstreamError) as excinfo:
        fetch_with(handler)
    assert excinfo.value.status == 503
    assert "503" in str(excinfo.value)


def test_missing_contents_raises_malformed_response():
    async def handler(request):
        return web.json_response({"statusCode": 200, "payload": {"pageType": "x"}})

    with pytest.raises(MalformedResponseError):
        fetch_with(handler)


def test_invalid_json_raises_malformed_response():
    async def handler(request):
        return web.Response(text="<html>oops</html>", content_type="text/html")

    with pytest.raises(MalformedResponseError):
        fetch_with(handler)


def test_bad_entries_do_not_reject_the_feed():
    feed = BankFeedClient.parse(
        '{"payload": {"contents": [{"id": null, "language": "az"}, {"id": 7, "language": "en"}]}}'
    )
    assert len(feed.payload.contents) == 2


def test_contents_must_be_a_list():
    with pytest.raises(MalformedResponseError):
        BankFeedClient.parse('{"payload": {"contents": {"id": 1}}}')


@pytest.mark.parametrize("raw, expected", [(42, "42"), (42.0, "42"), (42.5, "42.5"), ("abc-1", "abc-1")])
def test_location_id_normalization(raw, expected):
    assert RawFeedLocation.model_validate({"id": raw}).id == expected


def test_unreachable_host_raises_upstream_error():
    client = BankFeedClient("http://127.0.0.1:1/feed", ORIGIN)
    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(client.fetch())
    assert excinfo.value.status is None
