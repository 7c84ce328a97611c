from datetime import datetime

import orjson
import pytest

from slidedata.core.errors import PresentationDataFormatError
from slidedata.core.model import (
    ContentType,
    PresentationData,
    Slide,
    SlideContent,
    TableCell,
    TableContent,
    TableRow,
    Theme,
    load_presentation_data,
    loads_presentation_data,
    save_presentation_data,
)


def _sample() -> PresentationData:
    table = TableContent(rows=[TableRow(cells=[TableCell(text="a"), TableCell(text="b\nc")])])
    return PresentationData(
        title="Q3",
        creator="Jane Doe",
        created=datetime(2024, 1, 2, 3, 4, 5),
        global_theme=Theme(accent1="4F81BD"),
        slides=[
            Slide(
                256,
                layout_name="Blank",
                contents=[
                    SlideContent.text_entry("Hello"),
                    SlideContent.image_entry("/ppt/media/image1.png"),
                    SlideContent.table_entry(table),
                ],
            )
        ],
    )


def test_to_dict_uses_interchange_field_names():
    d = _sample().to_dict()
    assert list(d) == [
        "Title",
        "Subject",
        "Description",
        "Creator",
        "Created",
        "Modified",
        "SlideSize",
        "NoteSize",
        "GlobalTheme",
        "SlideMasters",
        "Slides",
    ]
    assert d["Created"] == "2024-01-02T03:04:05"
    assert d["Modified"] is None
    assert d["GlobalTheme"]["Accent1"] == "4F81BD"
    assert d["GlobalTheme"]["FollowedHyperlink"] == ""


def test_contents_emit_only_their_payload():
    contents = _sample().to_dict()["Slides"][0]["Contents"]
    assert contents[0] == {"ContentType": "text", "Text": "Hello"}
    assert contents[1] == {"ContentType": "image", "ImageUrl": "/ppt/media/image1.png"}
    assert contents[2] == {
        "ContentType": "table",
        "Table": {"Rows": [{"Cells": [{"ContentType": "text", "Text": "a"}, {"ContentType": "text", "Text": "b\nc"}]}]},
    }


def test_from_dict_restores_equal_model():
    data = _sample()
    assert PresentationData.from_dict(data.to_dict()) == data


def test_from_dict_is_tolerant_of_absent_fields():
    data = PresentationData.from_dict({"Slides": [{"SlideId": 257}], "Title": None})
    assert data.title == ""
    assert data.creator == ""
    assert data.created is None
    assert data.slide_size.width == 0
    assert data.global_theme.is_empty()
    assert data.slides == [Slide(257)]


@pytest.mark.parametrize("legacy", ["", "0001-01-01T00:00:00", "0001-01-01T00:00:00Z"])
def test_legacy_unset_timestamp_reads_as_none(legacy):
    assert PresentationData.from_dict({"Created": legacy}).created is None


def test_aware_timestamp_is_normalized_to_utc():
    data = PresentationData.from_dict({"Modified": "2024-05-06T12:00:00+02:00", "Created": "2024-05-06T08:00:00Z"})
    assert data.modified == datetime(2024, 5, 6, 10, 0, 0)
    assert data.created == datetime(2024, 5, 6, 8, 0, 0)


def test_unparseable_timestamp_is_rejected():
    with pytest.raises(PresentationDataFormatError):
        PresentationData.from_dict({"Created": "yesterday"})


@pytest.mark.parametrize(
    "obj",
    [
        {"Title": 5},
        {"Slides": [{"LayoutName": "Blank"}]},
        {"Slides": [{"SlideId": "256"}]},
        {"Slides": [{"SlideId": 256, "Contents": [{"ContentType": "chart"}]}]},
        {"SlideSize": {"Width": "wide"}},
        [],
    ],
)
def test_wrong_shape_raises_format_error(obj):
    with pytest.raises(PresentationDataFormatError) as exc:
        PresentationData.from_dict(obj)
    assert exc.value.problems


def test_invalid_json_raises_format_error():
    with pytest.raises(PresentationDataFormatError, match="not valid JSON"):
        loads_presentation_data(b"{not json")


def test_save_and_load(tmp_path):
    data = _sample()
    path = tmp_path / "nested" / "data.json"
    save_presentation_data(data, path)

    raw = orjson.loads(path.read_bytes())
    assert raw["Slides"][0]["SlideId"] == 256
    assert load_presentation_data(path) == data


def test_table_entry_without_table_serializes_empty_rows():
    content = PresentationData(slides=[Slide(1, contents=[SlideContent(content_type=ContentType.TABLE)])])
    assert content.to_dict()["Slides"][0]["Contents"][0]["Table"] == {"Rows": []}
