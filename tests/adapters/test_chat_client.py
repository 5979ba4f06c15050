from __future__ import annotations

import json

import httpx
import pytest

from hirevision.chat import ChatClient
from hirevision.errors import NetworkError


def build_client(handler) -> ChatClient:
    return ChatClient("http://chat.local/", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_reply_is_returned():
    payloads: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/recruiter-chat"
        payloads.append(json.loads(request.content))
        return httpx.Response(200, json={"reply": "You have 3 candidates in review."})

    reply = await build_client(handler).send("How is my pipeline?", "rec-1")

    assert reply is not None and reply.ok
    assert reply.text == "You have 3 candidates in review."
    assert payloads == [{"prompt": "How is my pipeline?", "recruiter_id": "rec-1"}]


@pytest.mark.asyncio
async def test_owner_is_optional():
    payloads: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        payloads.append(json.loads(request.content))
        return httpx.Response(200, json={"reply": "ok"})

    await build_client(handler).send("hello")

    assert payloads[0]["recruiter_id"] is None


@pytest.mark.asyncio
async def test_backend_error_detail_is_surfaced():
    client = build_client(lambda request: httpx.Response(422, json={"detail": "Prompt too long"}))

    reply = await client.send("x" * 10)

    assert reply is not None
    assert reply.ok is False
    assert reply.text == "Prompt too long"


@pytest.mark.asyncio
async def test_backend_error_without_detail_is_generic():
    reply = await build_client(lambda request: httpx.Response(500, json={})).send("hi")

    assert reply is not None
    assert reply.text == "Something went wrong."


@pytest.mark.asyncio
async def test_network_failure_raises_generic_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused")

    with pytest.raises(NetworkError) as excinfo:
        await build_client(handler).send("hi")

    assert excinfo.value.user_message == "Network error. Try again."


@pytest.mark.asyncio
async def test_blank_prompt_is_not_sent():
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"reply": ""})

    assert await build_client(handler).send("   ") is None
    assert calls == []
