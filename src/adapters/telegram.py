"""Messaging client: Telegram Bot API.

Every request type is a Pydantic model with a fixed `method` (the Bot API
endpoint name) as a class attribute. `TelegramBot.request` serialises the
model to JSON and POSTs it to `{base}/bot{token}/{method}`.

The Bot API's own `{"ok": ..., "result": ...}` envelope is not interpreted:
the raw `httpx.Response` is handed back to the caller.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Literal

import httpx
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import MessagingTransportError
from core.interfaces.messenger import Messenger

logger = logging.getLogger(__name__)


class TelegramMethod(BaseModel):
    """Base of the outbound request bodies."""

    model_config = ConfigDict(populate_by_name=True)

    method: ClassVar[str]

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SendMessage(TelegramMethod):
    method: ClassVar[str] = "sendMessage"

    chat_id: str = Field(
        ...,
        description="Target chat id or channel username (@channelusername).",
    )
    text: str = Field(..., description="Text of the message.")
    disable_notification: bool = Field(
        default=False,
        description="Deliver silently (notification without sound).",
    )
    parse_mode: str = Field(default="HTML", description="HTML or Markdown.")


class SendPhoto(TelegramMethod):
    method: ClassVar[str] = "sendPhoto"

    chat_id: str
    photo: str = Field(..., description="file_id or HTTP URL of the photo.")
    caption: str | None = Field(default=None, max_length=1024)


class SendDocument(TelegramMethod):
    method: ClassVar[str] = "sendDocument"

    chat_id: str
    document: str = Field(..., description="file_id or HTTP URL of the file.")
    # Telegram ignores thumbnails that are not uploaded with multipart/form-data.
    thumb: str | None = Field(default=None, description="Thumbnail of the file.")
    caption: str | None = Field(default=None, max_length=1024)


class InputMediaPhoto(BaseModel):
    """A photo inside a media group. Not sendable on its own."""

    model_config = ConfigDict(populate_by_name=True)

    media_type: Literal["photo"] = Field(default="photo", alias="type")
    media: str = Field(..., description="file_id or HTTP URL of the photo.")
    caption: str | None = Field(default=None, max_length=1024)
    parse_mode: str = "HTML"


class SendMediaGroup(TelegramMethod):
    """An album. The Bot API expects 2-10 items."""

    method: ClassVar[str] = "sendMediaGroup"

    chat_id: str
    media: list[InputMediaPhoto] = Field(default_factory=list)
    disable_notification: bool = False

    def add_photo(self, photo: InputMediaPhoto) -> SendMediaGroup:
        self.media.append(photo)
        return self


class SendPoll(TelegramMethod):
    """A native poll; cannot be sent to a private chat."""

    method: ClassVar[str] = "sendPoll"

    chat_id: str
    question: str = Field(..., min_length=1, max_length=255)
    options: list[str] = Field(default_factory=list)
    disable_notification: bool = False
    parse_mode: str = "HTML"

    def add_option(self, option: str) -> SendPoll:
        self.options.append(option)
        return self


class TelegramBot(Messenger):
    """Posts request bodies to the Bot API for one bot token."""

    def __init__(
        self,
        token: str,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._token = token
        self._base_url = self._settings.telegram_base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings)

    async def __aenter__(self) -> TelegramBot:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def method_url(self, method: str) -> str:
        return f"{self._base_url}/bot{self._token}/{method}"

    async def request(self, body: TelegramMethod) -> httpx.Response:
        method = body.method
        logger.info("Calling %s", method)
        try:
            response = await self._client.post(self.method_url(method), json=body.to_payload())
        except httpx.RequestError as exc:
            # The exception text may carry the URL, hence the token; keep it out.
            raise MessagingTransportError(method, exc.__class__.__name__) from exc
        logger.debug("%s -> HTTP %s", method, response.status_code)
        return response
