from datetime import datetime

import pytest
from pydantic import ValidationError

from cms_file_client.exceptions import FileClientError
from cms_file_client.models import FileRecord, normalize_tags


def test_tags_string_is_split_and_empty_segments_dropped():
    record = FileRecord(tags="a,b,,c")
    assert record.tags == ["a", "b", "c"]


def test_tags_deduplicated_in_insertion_order():
    assert normalize_tags(["b", "a", "b", "", "c", "a"]) == ["b", "a", "c"]


def test_tag_segments_are_kept_verbatim():
    assert normalize_tags("a, b,a") == ["a", " b"]


def test_tags_assignment_is_normalized():
    record = FileRecord()
    record.tags = "x,,y,x"
    assert record.tags == ["x", "y"]
    record.tags = ["z", "z"]
    assert record.tags == ["z"]


@pytest.mark.parametrize(
    "path, expected",
    [
        ("photo.jpg", ".jpg"),
        ("folder/archive.tar.gz", ".gz"),
        ("photo", None),
        ("photo.", None),
        (None, None),
    ],
)
def test_extension(path, expected):
    assert FileRecord(path=path).extension == expected


def test_resolution_prefers_stored_value():
    record = FileRecord(img_res="1920x1080", img_width=10, img_height=20)
    assert record.resolution == "1920x1080"


def test_resolution_synthesized_from_dimensions():
    assert FileRecord(img_width=640, img_height=480).resolution == "640x480"
    assert FileRecord().resolution == "x"


def test_width_and_height_alias_image_fields():
    record = FileRecord()
    record.width = 300
    record.height = 200
    assert record.image_width == 300
    assert record.image_height == 200

    record.image_width = 5
    assert record.width == 5


def test_path_is_read_only():
    record = FileRecord(path="a.png")
    with pytest.raises(ValidationError):
        record.path = "b.png"
    assert record.path == "a.png"


def test_casts_from_backend_payload():
    record = FileRecord.model_validate({
        "id": "12",
        "userid": "42",
        "public": "1",
        "created": "2021-03-04 05:06:07",
        "img_o_date": "0000-00-00 00:00:00",
        "related_entries": "1,2",
        "related_customers": None,
        "img_width": "",
        "img_lat": "",
        "img_lon": "",
    })
    assert record.id == 12
    assert record.owner_user_id == 42
    assert record.is_public is True
    assert record.created_at == datetime(2021, 3, 4, 5, 6, 7)
    assert record.image_original_date is None
    assert record.related_entry_ids == [1, 2]
    assert record.related_customer_ids == []
    assert record.image_width is None
    assert record.image_latitude is None
    assert record.image_longitude is None


def test_payload_uses_api_keys():
    record = FileRecord(id=3, path="p.png", name="P", tags=["a", "b"], created="2020-01-02 03:04:05", unknown="kept")
    payload = record.to_payload()
    assert "id" not in payload and "path" not in payload
    assert payload["name"] == "P"
    assert payload["tags"] == "a,b"
    assert payload["created"] == "2020-01-02 03:04:05"
    assert payload["unknown"] == "kept"


def test_coordinates_are_parsed_as_floats():
    record = FileRecord.model_validate({"img_lat": "59.93", "img_lon": 30.31})
    assert record.image_latitude == 59.93
    assert record.image_longitude == 30.31


def test_unbound_record_cannot_save():
    with pytest.raises(FileClientError):
        FileRecord(name="x").save()
