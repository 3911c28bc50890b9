"""Error taxonomy of a relay run.

Feed errors and messaging errors share a base so the CLI can report any
fatal failure with its kind and message.
"""

from __future__ import annotations


class RelayError(Exception):
    """Base class for every failure raised by the relay."""

    kind = "error"


class FeedError(RelayError):
    """The feed could not deliver the requested payload."""

    kind = "feed"


class FeedNetworkError(FeedError):
    """Transport-level failure while talking to the feed."""

    kind = "network"

    def __init__(self, url: str, detail: str = "") -> None:
        self.url = url
        self.detail = detail
        message = f"Network error: {url}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class FeedBadRequestError(FeedError):
    """The feed answered with a failure envelope."""

    kind = "bad_request"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Bad request: {reason}")


class FeedMalformedError(FeedError):
    """The body matched neither the success nor the failure envelope."""

    kind = "malformed"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = "Malformed response"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MessagingTransportError(RelayError):
    """A POST to the bot platform failed before a response was received."""

    kind = "transport"

    def __init__(self, method: str, detail: str = "") -> None:
        self.method = method
        self.detail = detail
        message = f"Transport error on {method}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
