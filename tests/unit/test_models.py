"""Unit tests for domain models and small pure helpers."""

import pytest
from pydantic import ValidationError

from conftest import image_json, make_image
from core.dates import day_start_utc, format_heading_date, parse_day
from core.domain.models import Image, UrlMap
from core.services.publish_pipeline import create_caption


class TestUrlMap:
    def test_short_wire_keys_map_to_names(self):
        urls = UrlMap.model_validate(
            {"s": "https://x/s.jpg", "m": "https://x/m.jpg", "l": "https://x/l.jpg", "o": "https://x/o.jpg"}
        )
        assert urls.small == "https://x/s.jpg"
        assert urls.middle == "https://x/m.jpg"
        assert urls.large == "https://x/l.jpg"
        assert urls.original == "https://x/o.jpg"

    def test_crop_appends_width(self):
        urls = UrlMap(small="https://x/s.jpg", middle="https://x/m.jpg", large="https://x/l.jpg", original="https://x/o.jpg")
        assert urls.crop(1000) == "https://x/o.jpg?crop=fit&w=1000"
        assert urls.original == "https://x/o.jpg"

    def test_rejects_relative_url(self):
        with pytest.raises(ValidationError):
            UrlMap.model_validate({"s": "/s.jpg", "m": "https://x/m.jpg", "l": "https://x/l.jpg", "o": "https://x/o.jpg"})


class TestImage:
    def test_camel_case_fields(self):
        image = Image.model_validate(image_json("cats", "Cute Cats"))
        assert image.source_url == "https://unsplash.com/cats"
        assert image.web_location == "https://beta.wall.cat/posts/cats"
        assert image.active_date == "2019-12-01T00:00:00.000Z"
        assert image.channel.title == "Cute Cats"

    def test_is_immutable(self):
        image = make_image("cats", "Cute Cats")
        with pytest.raises(ValidationError):
            image.title = "other"

    def test_unknown_fields_are_ignored(self):
        data = image_json("cats", "Cute Cats")
        data["likes"] = 42
        assert Image.model_validate(data).id == "img-cats"


class TestCaption:
    def test_strips_spaces_and_prefixes_hash(self):
        assert create_caption("Sunset Over Bay") == "#SunsetOverBay"

    def test_empty_title(self):
        assert create_caption("") == "#"

    def test_no_spaces_left(self):
        assert " " not in create_caption("  a  b c ")


class TestDates:
    def test_heading_date(self):
        assert format_heading_date("2019-12-01T00:00:00+00:00") == "01.12.2019"

    def test_heading_date_with_zulu(self):
        assert format_heading_date("2020-02-29T13:45:00Z") == "29.02.2020"

    def test_day_start_utc(self):
        assert day_start_utc(parse_day("2019-12-01")) == "2019-12-01T00:00:00+00:00"

    def test_parse_day_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_day("01/12/2019")
