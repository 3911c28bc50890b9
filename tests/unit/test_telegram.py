"""Unit tests for Telegram request types and the bot client."""

import json

import httpx
import pytest

from adapters.telegram import (
    InputMediaPhoto,
    SendDocument,
    SendMediaGroup,
    SendMessage,
    SendPhoto,
    SendPoll,
    TelegramBot,
)
from conftest import mock_client
from core.domain.errors import MessagingTransportError


class TestRequestTypes:
    @pytest.mark.parametrize(
        ("request_type", "method"),
        [
            (SendMessage, "sendMessage"),
            (SendPhoto, "sendPhoto"),
            (SendDocument, "sendDocument"),
            (SendMediaGroup, "sendMediaGroup"),
            (SendPoll, "sendPoll"),
        ],
    )
    def test_method_is_fixed_per_type(self, request_type, method):
        assert request_type.method == method

    def test_method_is_not_serialised(self):
        payload = SendMessage(chat_id="@c", text="hi").to_payload()
        assert "method" not in payload
        assert payload == {
            "chat_id": "@c",
            "text": "hi",
            "disable_notification": False,
            "parse_mode": "HTML",
        }

    def test_media_group_items(self):
        group = SendMediaGroup(chat_id="@c")
        group.add_photo(InputMediaPhoto(media="https://x/1.jpg", caption="One"))
        group.add_photo(InputMediaPhoto(media="https://x/2.jpg"))

        payload = group.to_payload()

        assert payload["media"] == [
            {"type": "photo", "media": "https://x/1.jpg", "caption": "One", "parse_mode": "HTML"},
            {"type": "photo", "media": "https://x/2.jpg", "parse_mode": "HTML"},
        ]
        assert payload["disable_notification"] is False

    def test_document_omits_missing_optionals(self):
        payload = SendDocument(chat_id="@c", document="https://x/o.jpg").to_payload()
        assert payload == {"chat_id": "@c", "document": "https://x/o.jpg"}

    def test_poll_options(self):
        poll = SendPoll(chat_id="@c", question="Best?").add_option("cats").add_option("dogs")
        assert poll.to_payload()["options"] == ["cats", "dogs"]



class TestTelegramBot:
    pytestmark = pytest.mark.anyio

    async def test_posts_json_to_method_url(self, settings):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True, "result": {}})

        async with TelegramBot("123:TEST", settings, client=mock_client(handler)) as bot:
            response = await bot.request(
                SendMessage(chat_id="@c", text="<b>01.12.2019</b>", disable_notification=True)
            )

        assert response.status_code == 200
        assert seen[0].method == "POST"
        assert str(seen[0].url) == "https://bot.test/bot123:TEST/sendMessage"
        assert json.loads(seen[0].content) == {
            "chat_id": "@c",
            "text": "<b>01.12.2019</b>",
            "disable_notification": True,
            "parse_mode": "HTML",
        }

    async def test_platform_error_body_is_returned_untouched(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"ok": False, "description": "chat not found"})

        async with TelegramBot("123:TEST", settings, client=mock_client(handler)) as bot:
            response = await bot.request(SendPhoto(chat_id="@c", photo="https://x/o.jpg"))

        assert response.status_code == 400

    async def test_transport_failure(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with TelegramBot("123:SECRET", settings, client=mock_client(handler)) as bot:
            with pytest.raises(MessagingTransportError) as exc_info:
                await bot.request(SendDocument(chat_id="@c", document="https://x/o.jpg"))

        assert exc_info.value.method == "sendDocument"
        assert "SECRET" not in str(exc_info.value)
