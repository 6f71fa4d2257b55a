"""HttpTransport tests — httpx.MockTransport stands in for the network.

Tests cover:
    - JSON decode of responses, JSON encode of bodies
    - Non-2xx responses raise TransportError with status and reason
    - Empty bodies decode to None
"""

import json

import httpx
import pytest

from effect_chain import TransportError
from effect_chain import access as A
from effect_chain.services import HttpTransport


def make_transport(handler, requests):
    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(
        transport=httpx.MockTransport(record), base_url="https://api.test",
    )
    return HttpTransport(client=client)


@pytest.mark.asyncio
async def test_get_decodes_json():
    requests = []
    transport = make_transport(lambda r: httpx.Response(200, json={"id": 1}), requests)

    assert await transport.get("/users/1") == {"id": 1}
    assert requests[0].method == "GET"
    assert str(requests[0].url) == "https://api.test/users/1"
    await transport.aclose()


@pytest.mark.asyncio
async def test_post_and_put_send_json_body():
    requests = []
    transport = make_transport(lambda r: httpx.Response(201, json={"ok": True}), requests)

    assert await transport.post("/users", {"name": "Ada"}) == {"ok": True}
    assert await transport.put("/users/1", {"name": "Grace"}) == {"ok": True}

    assert [r.method for r in requests] == ["POST", "PUT"]
    assert json.loads(requests[0].content) == {"name": "Ada"}
    assert requests[0].headers["content-type"] == "application/json"
    await transport.aclose()


@pytest.mark.asyncio
async def test_post_without_body_sends_nothing():
    requests = []
    transport = make_transport(lambda r: httpx.Response(200, json=[]), requests)

    assert await transport.post("/ping") == []
    assert requests[0].content == b""
    await transport.aclose()


@pytest.mark.asyncio
async def test_delete_with_empty_response_returns_none():
    requests = []
    transport = make_transport(lambda r: httpx.Response(204), requests)

    assert await transport.delete("/users/1") is None
    assert requests[0].method == "DELETE"
    await transport.aclose()


@pytest.mark.asyncio
async def test_error_status_raises_transport_error():
    transport = make_transport(lambda r: httpx.Response(404), [])

    with pytest.raises(TransportError) as info:
        await transport.get("/users/99")
    assert info.value.status == 404
    assert info.value.reason == "Not Found"
    assert str(info.value) == "HTTP Error: 404 Not Found"
    assert info.value.to_dict()["url"] == "https://api.test/users/99"
    await transport.aclose()


@pytest.mark.asyncio
async def test_transport_error_propagates_through_effect_unchanged():
    transport = make_transport(lambda r: httpx.Response(500), [])
    effect = A.with_transport(lambda t: t.get("/boom")).transform(lambda body: body["id"])

    with pytest.raises(TransportError) as info:
        await effect.run({"transport": transport})
    assert info.value.status == 500
    await transport.aclose()
