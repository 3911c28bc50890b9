"""Daily publish orchestration.

This module turns a list of feed channels into a best-effort sequence of
outbound messages:

1. list channels (fatal on error)
2. fetch one image per channel, dropping failures
3. stop when nothing was collected
4. heading message, 5. album, 6. one document per image (fatal on error)

Side-effects for UI layers (printing, progress) go through `PipelineHooks`;
the core only logs.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from adapters.telegram import (
    InputMediaPhoto,
    SendDocument,
    SendMediaGroup,
    SendMessage,
)
from core.dates import format_heading_date
from core.domain.errors import FeedError, RelayError
from core.domain.models import Channel, Image
from core.interfaces.feed import FeedSource
from core.interfaces.messenger import Messenger

logger = logging.getLogger(__name__)

STEP_LIST = "list"
STEP_HEADING = "heading"
STEP_ALBUM = "album"
STEP_DOCUMENTS = "documents"


@dataclass
class PublishRequest:
    """Parameters of one run."""

    chat_id: str
    date: str
    crop_width: int = 1000
    fetch_concurrency: int = 1
    # When set, a failing document is recorded and the next one is still sent.
    isolate_documents: bool = False


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    step_start: Callable[[str], None] | None = None
    step_done: Callable[[str], None] | None = None
    image_skipped: Callable[[Channel, FeedError], None] | None = None
    document_sent: Callable[[Image], None] | None = None
    document_failed: Callable[[Image, RelayError], None] | None = None


@dataclass
class CollectResult:
    images: list[Image] = field(default_factory=list)
    failures: list[tuple[Channel, FeedError]] = field(default_factory=list)


@dataclass
class PublishResult:
    """Output of a pipeline invocation."""

    channels: list[Channel]
    images: list[Image] = field(default_factory=list)
    skipped: list[tuple[Channel, FeedError]] = field(default_factory=list)
    document_failures: list[tuple[Image, RelayError]] = field(default_factory=list)
    published: bool = False


def create_caption(title: str) -> str:
    """`Sunset Over Bay` -> `#SunsetOverBay`."""

    return "#" + title.replace(" ", "")


def build_album(*, chat_id: str, images: Sequence[Image], crop_width: int) -> SendMediaGroup:
    group = SendMediaGroup(chat_id=chat_id)
    for image in images:
        group.add_photo(
            InputMediaPhoto(media=image.url.crop(crop_width), caption=image.channel.title)
        )
    return group


def build_document(*, chat_id: str, image: Image) -> SendDocument:
    return SendDocument(
        chat_id=chat_id,
        document=image.url.original,
        thumb=image.url.small,
        caption=create_caption(image.channel.title),
    )


async def collect_images(
    feed: FeedSource,
    channels: Sequence[Channel],
    date: str,
    *,
    concurrency: int = 1,
    hooks: PipelineHooks | None = None,
) -> CollectResult:
    """Fetch each channel's image for `date`, keeping channel order.

    Feed errors are recorded in `failures`; anything else propagates.
    """

    hooks = hooks or PipelineHooks()
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def safe_fetch(channel: Channel) -> Image | FeedError:
        async with semaphore:
            try:
                return await feed.fetch_image(channel.id, date)
            except FeedError as exc:
                return exc

    outcomes = await asyncio.gather(*(safe_fetch(channel) for channel in channels))

    result = CollectResult()
    for channel, outcome in zip(channels, outcomes):
        if isinstance(outcome, FeedError):
            logger.warning("Skipping channel %s (%s): %s", channel.id, channel.title, outcome)
            result.failures.append((channel, outcome))
            if hooks.image_skipped:
                hooks.image_skipped(channel, outcome)
        else:
            result.images.append(outcome)
    return result


async def publish_for_a_day(
    *,
    feed: FeedSource,
    bot: Messenger,
    request: PublishRequest,
    hooks: PipelineHooks | None = None,
) -> PublishResult:
    hooks = hooks or PipelineHooks()

    def start(step: str) -> None:
        if hooks.step_start:
            hooks.step_start(step)

    def done(step: str) -> None:
        if hooks.step_done:
            hooks.step_done(step)

    start(STEP_LIST)
    channels = list(await feed.list_channels())
    collected = await collect_images(
        feed,
        channels,
        request.date,
        concurrency=request.fetch_concurrency,
        hooks=hooks,
    )
    done(STEP_LIST)

    result = PublishResult(
        channels=channels,
        images=collected.images,
        skipped=collected.failures,
    )
    if not collected.images:
        logger.info("Nothing to publish for %s", request.date)
        return result

    start(STEP_HEADING)
    await bot.request(
        SendMessage(
            chat_id=request.chat_id,
            text=f"<b>{format_heading_date(request.date)}</b>",
            disable_notification=True,
            parse_mode="HTML",
        )
    )
    done(STEP_HEADING)

    # An album failure aborts the run: documents are not sent either.
    start(STEP_ALBUM)
    await bot.request(
        build_album(
            chat_id=request.chat_id,
            images=collected.images,
            crop_width=request.crop_width,
        )
    )
    done(STEP_ALBUM)

    start(STEP_DOCUMENTS)
    for image in collected.images:
        try:
            await bot.request(build_document(chat_id=request.chat_id, image=image))
        except RelayError as exc:
            if not request.isolate_documents:
                raise
            logger.warning("Document for %s failed: %s", image.channel.title, exc)
            result.document_failures.append((image, exc))
            if hooks.document_failed:
                hooks.document_failed(image, exc)
            continue
        if hooks.document_sent:
            hooks.document_sent(image)
    done(STEP_DOCUMENTS)

    result.published = True
    return result
