"""Tests for the webhook client against a local aiohttp server."""

from __future__ import annotations

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from slacker.errors import WebhookDeliveryFailed, WebhookRejected
from slacker.services import WebhookClient


def _app(handler) -> web.Application:
    app = web.Application()
    app.router.add_post("/hook", handler)
    return app


@pytest.mark.asyncio
async def test_post_message_sends_json() -> None:
    received: list[dict] = []

    async def handler(request: web.Request) -> web.Response:
        received.append(await request.json())
        return web.Response(text="ok")

    async with TestServer(_app(handler)) as server:
        client = WebhookClient(str(server.make_url("/hook")))
        await client.post_message("Deploying!", "#general")

    assert received == [{"text": "Deploying!", "channel": "#general"}]


@pytest.mark.asyncio
async def test_non_200_is_rejected() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=403, text="invalid_token")

    async with TestServer(_app(handler)) as server:
        client = WebhookClient(str(server.make_url("/hook")))
        with pytest.raises(WebhookRejected) as exc_info:
            await client.post_message("x", "#general")

    err = exc_info.value
    assert err.remote_status == 403
    assert err.remote_body == "invalid_token"
    assert err.status == 500
    assert "invalid_token" in err.message


@pytest.mark.asyncio
async def test_other_success_codes_are_rejected() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=204)

    async with TestServer(_app(handler)) as server:
        client = WebhookClient(str(server.make_url("/hook")))
        with pytest.raises(WebhookRejected):
            await client.post_message("x", "#general")


@pytest.mark.asyncio
async def test_timeout_is_delivery_failure() -> None:
    async def handler(request: web.Request) -> web.Response:
        await asyncio.sleep(1)
        return web.Response(text="late")

    async with TestServer(_app(handler)) as server:
        client = WebhookClient(str(server.make_url("/hook")), timeout=0.2)
        with pytest.raises(WebhookDeliveryFailed) as exc_info:
            await client.post_message("x", "#general")

    assert "timed out" in exc_info.value.message


@pytest.mark.asyncio
async def test_connection_error_is_delivery_failure() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response()

    server = TestServer(_app(handler))
    await server.start_server()
    url = str(server.make_url("/hook"))
    await server.close()

    with pytest.raises(WebhookDeliveryFailed) as exc_info:
        await WebhookClient(url).post_message("x", "#general")
    assert exc_info.value.message.startswith("error sending public message: ")


@pytest.mark.asyncio
async def test_rejection_body_decoded_with_replacement() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=400, body=b"bad \xff\xfe")

    async with TestServer(_app(handler)) as server:
        client = WebhookClient(str(server.make_url("/hook")))
        with pytest.raises(WebhookRejected) as exc_info:
            await client.post_message("x", "#general")

    assert exc_info.value.remote_status == 400
    assert exc_info.value.remote_body.startswith("bad ")
