"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Wire payloads from the feed are validated at the edge and become typed,
  immutable values for the rest of the run.
- Aliases keep the wire names (`s`, `sourceUrl`...) out of the Python API.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.config import ConfigDict

T = TypeVar("T")

_WIRE_CONFIG = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class Channel(BaseModel):
    """A photo category on the feed. `id` is the key used for image fetches."""

    model_config = _WIRE_CONFIG

    id: str = Field(..., min_length=1, description="Stable channel identifier.")
    title: str = Field(..., description="Human readable channel title.")
    description: str = Field(default="", description="Channel description.")
    url: str = Field(default="", description="Public channel URL.")


class UrlMap(BaseModel):
    """Four size variants of one image."""

    model_config = _WIRE_CONFIG

    small: str = Field(..., validation_alias=AliasChoices("s", "small"))
    middle: str = Field(..., validation_alias=AliasChoices("m", "middle"))
    large: str = Field(..., validation_alias=AliasChoices("l", "large"))
    original: str = Field(..., validation_alias=AliasChoices("o", "original"))

    @field_validator("small", "middle", "large", "original")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"expected an absolute http(s) URL, got {value!r}")
        return value

    def crop(self, width: int) -> str:
        """URL of the original image bounded to `width` pixels."""

        return f"{self.original}?crop=fit&w={width}"


class Image(BaseModel):
    """One day's picture for one channel."""

    model_config = _WIRE_CONFIG

    id: str = Field(..., min_length=1)
    channel: Channel
    title: str = Field(default="")
    url: UrlMap
    source_url: str = Field(
        default="",
        validation_alias=AliasChoices("sourceUrl", "source_url"),
        description="Where the picture was originally published.",
    )
    web_location: str = Field(
        default="",
        validation_alias=AliasChoices("webLocation", "web_location"),
        description="Page of the picture on the feed website.",
    )
    active_date: str | None = Field(
        default=None,
        validation_alias=AliasChoices("activeDate", "active_date"),
        description="Day the picture is scheduled for (feed timestamp).",
    )


class ImagePayload(BaseModel):
    model_config = _WIRE_CONFIG

    image: Image


class ErrorPayload(BaseModel):
    """Payload shape of a failure envelope."""

    model_config = _WIRE_CONFIG

    message: str


class ResponseEnvelope(BaseModel, Generic[T]):
    """`{success, payload}` wrapper used by every feed response."""

    model_config = _WIRE_CONFIG

    success: bool
    payload: T
