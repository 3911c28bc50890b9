"""Messenger contract (write side of a run)."""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, runtime_checkable


class OutboundRequest(Protocol):
    """Anything that knows its bot platform method name."""

    method: ClassVar[str]


@runtime_checkable
class Messenger(Protocol):
    async def request(self, body: OutboundRequest) -> Any:
        """Send `body`; raise `MessagingTransportError` when the POST fails."""

        ...
