"""Extraction: presentation package -> PresentationData.

Public API:
- `extract_pptx(path)`
- `extract_presentation(package)`
- `extract_slides(package)`
- `classify_shape_tree(package, slide_part, sp_tree)`
- `resolve_theme(theme_el)`
"""

from __future__ import annotations

from .masters import extract_masters
from .pptx_extractor import extract_presentation, extract_pptx, extract_slides
from .shape_tree import NodeKind, classify, classify_shape_tree
from .theme import resolve_theme, resolve_theme_part
from .tree_dump import describe_slide_trees

__all__ = [
    "NodeKind",
    "classify",
    "classify_shape_tree",
    "describe_slide_trees",
    "extract_masters",
    "extract_presentation",
    "extract_pptx",
    "extract_slides",
    "resolve_theme",
    "resolve_theme_part",
]
