"""Tests for the RobotEvents roster source."""

import httpx
import pytest
from src.scraper.base_strategy import RosterFetchError
from src.scraper.robotevents_strategy import RobotEventsStrategy, PAGE_SIZE

BASE_URL = "https://robotevents.test/api/v2"

ROSTER = {
    "meta": {"total": 2},
    "data": [
        {"id": 1, "number": "1A", "organization": "Alpha", "registered": True},
        {"id": 2, "number": "2B", "organization": "Beta", "registered": True},
    ],
}


def make_strategy(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client, RobotEventsStrategy(client, "secret", BASE_URL + "/")


class TestFetchRoster:
    @pytest.mark.asyncio
    async def test_parses_roster(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=ROSTER)

        client, strategy = make_strategy(handler)
        async with client:
            roster = await strategy.fetch_roster("51234")

        assert [t.number for t in roster.data] == ["1A", "2B"]
        assert roster.meta.total == 2
        request = seen[0]
        assert request.url.path == "/api/v2/events/51234/teams"
        assert request.url.params["per_page"] == str(PAGE_SIZE)
        assert request.url.params["page"] == "1"
        assert request.headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_error_status(self):
        client, strategy = make_strategy(lambda request: httpx.Response(401, json={"message": "no"}))
        async with client:
            with pytest.raises(RosterFetchError, match="401"):
                await strategy.fetch_roster("51234")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client, strategy = make_strategy(lambda request: httpx.Response(200, text="<html>"))
        async with client:
            with pytest.raises(RosterFetchError):
                await strategy.fetch_roster("51234")

    @pytest.mark.asyncio
    async def test_malformed_payload(self):
        payload = {"meta": {"total": 1}, "data": [{"number": "1A"}]}
        client, strategy = make_strategy(lambda request: httpx.Response(200, json=payload))
        async with client:
            with pytest.raises(RosterFetchError, match="Malformed"):
                await strategy.fetch_roster("51234")

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client, strategy = make_strategy(handler)
        async with client:
            with pytest.raises(RosterFetchError):
                await strategy.fetch_roster("51234")

    @pytest.mark.asyncio
    async def test_null_team_fields_use_defaults(self):
        payload = {
            "meta": {"total": 2},
            "data": [
                {"id": 1, "number": "1A", "organization": "Alpha",
                 "location": None, "registered": None},
                {"id": 2, "number": None, "organization": None, "location": {"city": None}},
            ],
        }
        client, strategy = make_strategy(lambda request: httpx.Response(200, json=payload))
        async with client:
            roster = await strategy.fetch_roster("51234")

        first, second = roster.data
        assert first.location.city is None
        assert first.registered is False
        assert second.number == ""
        assert second.organization is None
        assert [t.id for t in roster.data] == [1, 2]


class TestFetchEventName:
    @pytest.mark.asyncio
    async def test_returns_name(self):
        def handler(request):
            assert request.url.path == "/api/v2/events/51234"
            return httpx.Response(200, json={"id": 51234, "name": "Buckeye Signature Event"})

        client, strategy = make_strategy(handler)
        async with client:
            assert await strategy.fetch_event_name("51234") == "Buckeye Signature Event"

    @pytest.mark.asyncio
    async def test_missing_name(self):
        client, strategy = make_strategy(lambda request: httpx.Response(200, json={"id": 51234}))
        async with client:
            with pytest.raises(RosterFetchError):
                await strategy.fetch_event_name("51234")

    @pytest.mark.asyncio
    async def test_not_found(self):
        client, strategy = make_strategy(lambda request: httpx.Response(404))
        async with client:
            with pytest.raises(RosterFetchError, match="404"):
                await strategy.fetch_event_name("51234")
