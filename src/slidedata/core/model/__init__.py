"""Presentation data model.

Thin re-export layer so callers can import a stable path:

    from slidedata.core.model import PresentationData, SlideContent
"""

from __future__ import annotations

from .presentation_data import (
    DEFAULT_CREATOR,
    ContentType,
    NoteSize,
    PresentationData,
    Slide,
    SlideContent,
    SlideLayout,
    SlideMaster,
    SlideSize,
    TableCell,
    TableContent,
    TableRow,
    Theme,
    dumps_presentation_data,
    load_presentation_data,
    loads_presentation_data,
    save_presentation_data,
)

__all__ = [
    "DEFAULT_CREATOR",
    "ContentType",
    "NoteSize",
    "PresentationData",
    "Slide",
    "SlideContent",
    "SlideLayout",
    "SlideMaster",
    "SlideSize",
    "TableCell",
    "TableContent",
    "TableRow",
    "Theme",
    "dumps_presentation_data",
    "load_presentation_data",
    "loads_presentation_data",
    "save_presentation_data",
]
