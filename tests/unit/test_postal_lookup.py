from __future__ import annotations

import asyncio

import httpx
import pytest

from udyam_intake.services.postal_lookup import PinInfo, PostalLookupClient

MUMBAI_PAYLOAD = [
    {
        "Message": "Number of pincode(s) found:1",
        "Status": "Success",
        "PostOffice": [{"Name": "Mumbai G.P.O.", "District": "Mumbai", "State": "Maharashtra"}],
    }
]
NOT_FOUND_PAYLOAD = [{"Message": "No records found", "Status": "Error", "PostOffice": None}]


def _client(handler) -> PostalLookupClient:
    return PostalLookupClient("https://pins.example/", transport=httpx.MockTransport(handler))


def test_lookup_returns_city_and_state() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=MUMBAI_PAYLOAD)

    info = asyncio.run(_client(handler).lookup("400001"))

    assert info == PinInfo(city="Mumbai", state="Maharashtra")
    assert seen == ["https://pins.example/pincode/400001"]


def test_unknown_pin_is_not_found() -> None:
    info = asyncio.run(_client(lambda request: httpx.Response(200, json=NOT_FOUND_PAYLOAD)).lookup("999999"))

    assert info is None


@pytest.mark.parametrize("pin", ["40001", "4000012", "40000a", "400001\n", ""])
def test_malformed_pin_skips_request(pin: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert asyncio.run(_client(handler).lookup(pin)) is None


def test_server_error_is_not_fatal() -> None:
    info = asyncio.run(_client(lambda request: httpx.Response(503, text="down")).lookup("400001"))

    assert info is None


def test_network_error_is_not_fatal() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    assert asyncio.run(_client(handler).lookup("400001")) is None


def test_non_json_body_is_not_fatal() -> None:
    info = asyncio.run(_client(lambda request: httpx.Response(200, text="<html>")).lookup("400001"))

    assert info is None
