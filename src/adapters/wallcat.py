"""Feed client: wall.cat API.

Implementation:
- One GET per call, no retries.
- The status code is not checked; every body goes through
  `adapters.envelope.decode_envelope`.
- Transport failures become `FeedNetworkError`.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from adapters.envelope import decode_envelope
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import FeedNetworkError
from core.domain.models import Channel, Image, ImagePayload
from core.interfaces.feed import FeedSource

logger = logging.getLogger(__name__)


def _path_segment(value: str) -> str:
    # RFC 3339 timestamps keep ':' and '+' readable; both are valid in a segment.
    return quote(value, safe=":+@")


class WallcatClient(FeedSource):
    """Reads channels and daily images from the feed."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._base_url = self._settings.feed_base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings)

    async def __aenter__(self) -> WallcatClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, url: str) -> bytes:
        try:
            response = await self._client.get(url)
        except httpx.RequestError as exc:
            raise FeedNetworkError(url, str(exc) or exc.__class__.__name__) from exc
        logger.debug("GET %s -> HTTP %s", url, response.status_code)
        return response.content

    async def list_channels(self) -> list[Channel]:
        logger.info("Fetching channels")
        body = await self._get(f"{self._base_url}/channels")
        channels = decode_envelope(body, list[Channel])
        logger.debug("Fetched channels: %r", channels)
        return channels

    async def fetch_image(self, channel_id: str, date: str) -> Image:
        logger.info("Fetching image in channel %s for %s", channel_id, date)
        url = (
            f"{self._base_url}/channels/{_path_segment(channel_id)}"
            f"/image/{_path_segment(date)}"
        )
        body = await self._get(url)
        payload = decode_envelope(body, ImagePayload)
        logger.debug("Fetched image: %r", payload.image)
        return payload.image
