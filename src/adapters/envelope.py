"""Decoding of feed response envelopes.

The feed never uses HTTP status codes for domain errors. Every body is a
`{success, payload}` envelope and the payload shape says which outcome it is:

- `ResponseEnvelope[T]`            -> the payload is returned
- `ResponseEnvelope[ErrorPayload]` -> `FeedBadRequestError(reason=message)`
- anything else                    -> `FeedMalformedError`

Shapes are tried in that order; `success` is parsed but never used to pick
one. A `T` whose schema also accepts `{"message": "..."}` is therefore always
read as a success.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from core.domain.errors import FeedBadRequestError, FeedMalformedError
from core.domain.models import ErrorPayload, ResponseEnvelope

T = TypeVar("T")

logger = logging.getLogger(__name__)

_ERROR_ADAPTER: TypeAdapter[ResponseEnvelope[ErrorPayload]] = TypeAdapter(
    ResponseEnvelope[ErrorPayload]
)


@lru_cache(maxsize=None)
def _success_adapter(payload_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(ResponseEnvelope[payload_type])


def decode_envelope(raw: bytes | str, payload_type: type[T] | Any) -> T:
    """Decode `raw` as `OptionalResponse[payload_type]` and unwrap it."""

    try:
        envelope = _success_adapter(payload_type).validate_json(raw)
    except ValidationError as success_exc:
        try:
            failure = _ERROR_ADAPTER.validate_json(raw)
        except ValidationError:
            logger.debug("Body matches no envelope shape: %s", success_exc)
            raise FeedMalformedError(_summarise(success_exc)) from success_exc
        raise FeedBadRequestError(reason=failure.payload.message) from None

    return envelope.payload


def _summarise(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    summary = first.get("msg", "invalid")
    if location:
        summary = f"{location}: {summary}"
    if len(errors) > 1:
        summary = f"{summary} (+{len(errors) - 1} more)"
    return summary
