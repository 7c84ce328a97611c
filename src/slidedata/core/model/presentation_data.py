"""
presentation_data.py — Typed snapshot of a presentation package.

Every extraction pass builds a fresh PresentationData; the modifier consumes one
(usually read back from JSON) and writes into the live package, never into the
model. The interchange form (`to_dict` / `from_dict`) uses PascalCase field
names.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import orjson

from slidedata.core.errors import PresentationDataFormatError
from slidedata.core.validate.schema_validate import validate_instance

DEFAULT_CREATOR = "slidedata"

# Older interchange files encode "unset" as the .NET minimum date.
_LEGACY_UNSET_TIMESTAMPS = frozenset({"", "0001-01-01T00:00:00", "0001-01-01T00:00:00Z"})


class ContentType:
    TEXT = "text"
    IMAGE = "image"
    TABLE = "table"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass
class SlideSize:
    width: int = 0
    height: int = 0
    type: str = ""


@dataclass
class NoteSize:
    width: int = 0
    height: int = 0


@dataclass
class Theme:
    """Twelve color-scheme slots, each 'RRGGBB' or '' when not resolvable."""

    dark1: str = ""
    light1: str = ""
    dark2: str = ""
    light2: str = ""
    accent1: str = ""
    accent2: str = ""
    accent3: str = ""
    accent4: str = ""
    accent5: str = ""
    accent6: str = ""
    hyperlink: str = ""
    followed_hyperlink: str = ""

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))


@dataclass
class SlideLayout:
    name: str = ""
    type_name: str = ""


@dataclass
class SlideMaster:
    name: str = ""
    slide_layout_ids: list[str] = field(default_factory=list)
    slide_layouts: list[SlideLayout] = field(default_factory=list)
    theme: Theme = field(default_factory=Theme)


@dataclass
class TableCell:
    content_type: str = ContentType.TEXT
    text: str | None = None


@dataclass
class TableRow:
    cells: list[TableCell] = field(default_factory=list)


@dataclass
class TableContent:
    rows: list[TableRow] = field(default_factory=list)


@dataclass
class SlideContent:
    """Tagged variant: `content_type` selects which payload field is meaningful."""

    content_type: str
    text: str | None = None
    image_url: str | None = None
    table: TableContent | None = None

    @classmethod
    def text_entry(cls, text: str) -> SlideContent:
        return cls(content_type=ContentType.TEXT, text=text)

    @classmethod
    def image_entry(cls, image_url: str) -> SlideContent:
        return cls(content_type=ContentType.IMAGE, image_url=image_url)

    @classmethod
    def table_entry(cls, table: TableContent) -> SlideContent:
        return cls(content_type=ContentType.TABLE, table=table)

    @property
    def is_text(self) -> bool:
        return self.content_type == ContentType.TEXT


@dataclass
class Slide:
    slide_id: int
    layout_name: str = ""
    contents: list[SlideContent] = field(default_factory=list)


@dataclass
class PresentationData:
    title: str = ""
    subject: str = ""
    description: str = ""
    creator: str = DEFAULT_CREATOR
    created: datetime | None = None  # None == unset
    modified: datetime | None = None
    slide_size: SlideSize = field(default_factory=SlideSize)
    note_size: NoteSize = field(default_factory=NoteSize)
    global_theme: Theme = field(default_factory=Theme)
    slide_masters: list[SlideMaster] = field(default_factory=list)
    slides: list[Slide] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "Title": self.title,
            "Subject": self.subject,
            "Description": self.description,
            "Creator": self.creator,
            "Created": _timestamp_to_str(self.created),
            "Modified": _timestamp_to_str(self.modified),
            "SlideSize": {
                "Width": self.slide_size.width,
                "Height": self.slide_size.height,
                "Type": self.slide_size.type,
            },
            "NoteSize": {"Width": self.note_size.width, "Height": self.note_size.height},
            "GlobalTheme": _theme_to_dict(self.global_theme),
            "SlideMasters": [
                {
                    "Name": m.name,
                    "SlideLayoutIds": list(m.slide_layout_ids),
                    "SlideLayouts": [{"Name": lay.name, "TypeName": lay.type_name} for lay in m.slide_layouts],
                    "Theme": _theme_to_dict(m.theme),
                }
                for m in self.slide_masters
            ],
            "Slides": [
                {
                    "SlideId": s.slide_id,
                    "LayoutName": s.layout_name,
                    "Contents": [_content_to_dict(c) for c in s.contents],
                }
                for s in self.slides
            ],
        }

    @classmethod
    def from_dict(cls, obj: Any) -> PresentationData:
        """Build from an interchange dict; absent fields take their defaults.

        Raises PresentationDataFormatError when `obj` does not match the schema.
        """
        problems = validate_instance(obj)
        if problems:
            raise PresentationDataFormatError("presentation data does not match the expected shape", problems)

        slide_size = obj.get("SlideSize") or {}
        note_size = obj.get("NoteSize") or {}
        return cls(
            title=_s(obj.get("Title")),
            subject=_s(obj.get("Subject")),
            description=_s(obj.get("Description")),
            creator=_s(obj.get("Creator")),
            created=_timestamp_from_str(obj.get("Created")),
            modified=_timestamp_from_str(obj.get("Modified")),
            slide_size=SlideSize(
                width=int(slide_size.get("Width", 0)),
                height=int(slide_size.get("Height", 0)),
                type=_s(slide_size.get("Type")),
            ),
            note_size=NoteSize(width=int(note_size.get("Width", 0)), height=int(note_size.get("Height", 0))),
            global_theme=_theme_from_dict(obj.get("GlobalTheme")),
            slide_masters=[
                SlideMaster(
                    name=_s(m.get("Name")),
                    slide_layout_ids=list(m.get("SlideLayoutIds") or []),
                    slide_layouts=[
                        SlideLayout(name=_s(lay.get("Name")), type_name=_s(lay.get("TypeName")))
                        for lay in m.get("SlideLayouts") or []
                    ],
                    theme=_theme_from_dict(m.get("Theme")),
                )
                for m in obj.get("SlideMasters") or []
            ],
            slides=[
                Slide(
                    slide_id=int(s["SlideId"]),
                    layout_name=_s(s.get("LayoutName")),
                    contents=[_content_from_dict(c) for c in s.get("Contents") or []],
                )
                for s in obj.get("Slides") or []
            ],
        )


# ---------------------------------------------------------------------------
# Interchange helpers
# ---------------------------------------------------------------------------

_THEME_KEYS: tuple[tuple[str, str], ...] = (
    ("Dark1", "dark1"),
    ("Light1", "light1"),
    ("Dark2", "dark2"),
    ("Light2", "light2"),
    ("Accent1", "accent1"),
    ("Accent2", "accent2"),
    ("Accent3", "accent3"),
    ("Accent4", "accent4"),
    ("Accent5", "accent5"),
    ("Accent6", "accent6"),
    ("Hyperlink", "hyperlink"),
    ("FollowedHyperlink", "followed_hyperlink"),
)


def _s(v: Any) -> str:
    return v if isinstance(v, str) else ""


def _theme_to_dict(theme: Theme) -> dict[str, str]:
    return {key: getattr(theme, attr) for key, attr in _THEME_KEYS}


def _theme_from_dict(obj: Any) -> Theme:
    if not isinstance(obj, dict):
        return Theme()
    return Theme(**{attr: _s(obj.get(key)) for key, attr in _THEME_KEYS})


def _content_to_dict(content: SlideContent) -> dict[str, Any]:
    out: dict[str, Any] = {"ContentType": content.content_type}
    if content.content_type == ContentType.TEXT:
        out["Text"] = content.text
    elif content.content_type == ContentType.IMAGE:
        out["ImageUrl"] = content.image_url
    elif content.content_type == ContentType.TABLE:
        rows = content.table.rows if content.table is not None else []
        out["Table"] = {
            "Rows": [
                {"Cells": [{"ContentType": c.content_type, "Text": c.text} for c in row.cells]}
                for row in rows
            ]
        }
    return out


def _content_from_dict(obj: dict[str, Any]) -> SlideContent:
    table = None
    tbl = obj.get("Table")
    if isinstance(tbl, dict):
        table = TableContent(
            rows=[
                TableRow(
                    cells=[
                        TableCell(content_type=c.get("ContentType", ContentType.TEXT), text=c.get("Text"))
                        for c in row.get("Cells") or []
                    ]
                )
                for row in tbl.get("Rows") or []
            ]
        )
    return SlideContent(
        content_type=obj["ContentType"],
        text=obj.get("Text"),
        image_url=obj.get("ImageUrl"),
        table=table,
    )


def _timestamp_to_str(v: datetime | None) -> str | None:
    if v is None:
        return None
    return v.isoformat()


def _timestamp_from_str(v: Any) -> datetime | None:
    if v is None:
        return None
    s = str(v).strip()
    if s in _LEGACY_UNSET_TIMESTAMPS:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        ts = datetime.fromisoformat(s)
    except ValueError as e:
        raise PresentationDataFormatError(f"invalid timestamp: {v!r}") from e
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


# ---------------------------------------------------------------------------
# JSON text
# ---------------------------------------------------------------------------


def dumps_presentation_data(data: PresentationData) -> bytes:
    return orjson.dumps(data.to_dict(), option=orjson.OPT_INDENT_2)


def loads_presentation_data(raw: bytes | str) -> PresentationData:
    try:
        obj = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise PresentationDataFormatError(f"not valid JSON: {e}") from e
    return PresentationData.from_dict(obj)


def load_presentation_data(path: str | Path) -> PresentationData:
    return loads_presentation_data(Path(path).read_bytes())


def save_presentation_data(data: PresentationData, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(dumps_presentation_data(data))
