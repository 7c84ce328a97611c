"""slidedata — presentation package <-> flat presentation data.

    from slidedata import open_package, extract_presentation, apply_presentation_data
"""

from __future__ import annotations

from slidedata.core.errors import (
    MissingPresentationRootError,
    PackageClosedError,
    PackageNotWritableError,
    PresentationDataFormatError,
    SlidedataError,
)
from slidedata.core.extract import extract_presentation, extract_pptx
from slidedata.core.model import PresentationData
from slidedata.core.modify import apply_presentation_data, replace_text, update_from_json
from slidedata.core.package import PresentationPackage, open_package

__version__ = "0.1.0"

__all__ = [
    "MissingPresentationRootError",
    "PackageClosedError",
    "PackageNotWritableError",
    "PresentationData",
    "PresentationDataFormatError",
    "PresentationPackage",
    "SlidedataError",
    "apply_presentation_data",
    "extract_presentation",
    "extract_pptx",
    "open_package",
    "replace_text",
    "update_from_json",
]
