"""Shared fixtures: wire payloads, settings and in-memory fakes."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from core.config import AppSettings
from core.domain.errors import FeedBadRequestError, MessagingTransportError
from core.domain.models import Channel, Image


@pytest.fixture
def anyio_backend():
    return "asyncio"


def channel_json(channel_id: str, title: str) -> dict[str, Any]:
    return {
        "id": channel_id,
        "title": title,
        "description": f"{title} pictures",
        "url": f"https://beta.wall.cat/channels/{channel_id}",
    }


def image_json(channel_id: str, title: str) -> dict[str, Any]:
    base = f"https://cdn.wall.cat/{channel_id}"
    return {
        "id": f"img-{channel_id}",
        "channel": channel_json(channel_id, title),
        "title": f"Picture of {title}",
        "url": {
            "s": f"{base}/s.jpg",
            "m": f"{base}/m.jpg",
            "l": f"{base}/l.jpg",
            "o": f"{base}/o.jpg",
        },
        "sourceUrl": f"https://unsplash.com/{channel_id}",
        "webLocation": f"https://beta.wall.cat/posts/{channel_id}",
        "activeDate": "2019-12-01T00:00:00.000Z",
    }


def envelope(payload: Any, *, success: bool = True) -> bytes:
    return json.dumps({"success": success, "payload": payload}).encode("utf-8")


def make_channel(channel_id: str, title: str) -> Channel:
    return Channel.model_validate(channel_json(channel_id, title))


def make_image(channel_id: str, title: str) -> Image:
    return Image.model_validate(image_json(channel_id, title))


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        bot_token="123:TEST",
        feed_base_url="https://feed.test/api/v1",
        telegram_base_url="https://bot.test",
        http_timeout_seconds=5.0,
    )


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FakeFeed:
    """In-memory `FeedSource`. `images` maps channel id to an Image or an error."""

    def __init__(self, channels: list[Channel], images: dict[str, Any] | None = None, *, list_error=None):
        self.channels = channels
        self.images = images or {}
        self.list_error = list_error
        self.fetched: list[tuple[str, str]] = []

    async def list_channels(self) -> list[Channel]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.channels)

    async def fetch_image(self, channel_id: str, date: str) -> Image:
        self.fetched.append((channel_id, date))
        outcome = self.images.get(channel_id)
        if outcome is None:
            raise FeedBadRequestError(reason=f"no image for {channel_id}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeBot:
    """In-memory `Messenger` recording every request body."""

    def __init__(self, fail_on: set[str] | None = None, fail_documents: set[str] | None = None):
        self.sent: list[Any] = []
        self.fail_on = fail_on or set()
        self.fail_documents = fail_documents or set()

    async def request(self, body: Any) -> httpx.Response:
        if body.method in self.fail_on:
            raise MessagingTransportError(body.method, "ConnectError")
        if body.method == "sendDocument" and body.document in self.fail_documents:
            raise MessagingTransportError(body.method, "ConnectError")
        self.sent.append(body)
        return httpx.Response(200, json={"ok": True})

    def methods(self) -> list[str]:
        return [body.method for body in self.sent]
