"""Write-back of edited content into a live package.

    from slidedata.core.modify import replace_text, apply_presentation_data
"""

from __future__ import annotations

from .pptx_modifier import (
    UpdateReport,
    apply_metadata,
    apply_presentation_data,
    apply_slide_contents,
    replace_text,
    update_from_json,
)

__all__ = [
    "UpdateReport",
    "apply_metadata",
    "apply_presentation_data",
    "apply_slide_contents",
    "replace_text",
    "update_from_json",
]
