import pytest
from pydantic import ValidationError

from geo_gallery.core.models import Coordinates, ImageRecord, ViewProjection


def test_image_record_with_and_without_location() -> None:
    tagged = ImageRecord(
        id=1, uri="file://a.jpg", timestamp="2024-05-01T10:00:00.000Z", latitude=37.0, longitude=-122.0
    )
    assert tagged.is_geotagged
    assert tagged.coordinates == Coordinates(latitude=37.0, longitude=-122.0)

    untagged = ImageRecord(id=2, uri="file://b.jpg", timestamp="2024-05-01T10:00:01.000Z")
    assert not untagged.is_geotagged
    assert untagged.coordinates is None


def test_half_tagged_record_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ImageRecord(id=1, uri="file://a.jpg", timestamp="t", latitude=37.0)
    with pytest.raises(ValidationError):
        ImageRecord(id=1, uri="file://a.jpg", timestamp="t", longitude=-122.0)


def test_records_are_immutable() -> None:
    record = ImageRecord(id=1, uri="file://a.jpg", timestamp="t")
    with pytest.raises(ValidationError):
        record.uri = "file://other.jpg"


def test_coordinates_range_checked() -> None:
    with pytest.raises(ValidationError):
        Coordinates(latitude=91.0, longitude=0.0)
    with pytest.raises(ValidationError):
        Coordinates(latitude=0.0, longitude=-181.0)


def test_empty_projection_defaults() -> None:
    projection = ViewProjection()
    assert projection.gallery == []
    assert projection.markers == []
