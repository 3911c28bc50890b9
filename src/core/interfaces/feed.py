"""Feed source contract.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- Lets the pipeline run against the wall.cat adapter or an in-memory fake.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import Channel, Image


@runtime_checkable
class FeedSource(Protocol):
    """Read side of a run: channels and their image for a day.

    Implementations raise `core.domain.errors.FeedError` subclasses.
    """

    async def list_channels(self) -> Sequence[Channel]:
        ...

    async def fetch_image(self, channel_id: str, date: str) -> Image:
        ...
