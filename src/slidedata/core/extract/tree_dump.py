from __future__ import annotations

from typing import Any

from pptx.oxml.ns import qn

from slidedata.core.extract.shape_tree import kind_name
from slidedata.core.package import PresentationPackage


def describe_tree(element: Any, level: int = 1) -> list[str]:
    """Indented local-name outline of `element` and all of its element descendants."""
    lines = [f"{'  ' * level}{kind_name(element)}"]
    for child in element:
        if not isinstance(child.tag, str):
            continue
        lines.extend(describe_tree(child, level + 1))
    return lines


def describe_slide(slide_id: int, slide_part: Any) -> list[str]:
    trees = list(slide_part._element.iter(qn("p:spTree")))
    lines = [f"slide {slide_id}: {len(trees)} shape tree(s)"]
    for tree in trees:
        lines.extend(describe_tree(tree, 1))
    return lines


def describe_slide_trees(package: PresentationPackage) -> list[str]:
    lines: list[str] = []
    for slide_id, part in package.iter_slide_parts():
        lines.extend(describe_slide(slide_id, part))
    return lines
