from __future__ import annotations

import logging
from typing import Any, Optional

from pptx.oxml.ns import qn

from slidedata.core.extract.theme import resolve_theme_part
from slidedata.core.model import SlideLayout, SlideMaster
from slidedata.core.package import PresentationPackage

logger = logging.getLogger(__name__)

DEFAULT_MASTER_NAME = "slide-master-part"
DEFAULT_LAYOUT_NAME = "Default layout"
DEFAULT_LAYOUT_TYPE = ""


def common_slide_data_name(part: Any) -> Optional[str]:
    """`p:cSld/@name` of a slide, layout or master part, or None when absent/empty."""
    if part is None:
        return None
    csld = part._element.find(qn("p:cSld"))
    if csld is None:
        return None
    return csld.get("name") or None


def slide_layout_ids(master_el: Any) -> list[str]:
    """Inner text of each `p:sldLayoutIdLst` child, empties skipped, order and duplicates kept."""
    lst = master_el.find(qn("p:sldLayoutIdLst"))
    if lst is None:
        return []
    out: list[str] = []
    for child in lst:
        if not isinstance(child.tag, str):
            continue
        txt = "".join(child.itertext())
        if txt:
            out.append(txt)
    return out


def extract_layout(layout_part: Any) -> SlideLayout:
    name = common_slide_data_name(layout_part)
    if name is None:
        logger.info("layout %s has no name; using %r", layout_part.partname, DEFAULT_LAYOUT_NAME)
        name = DEFAULT_LAYOUT_NAME
    return SlideLayout(
        name=name,
        type_name=layout_part._element.get("type") or DEFAULT_LAYOUT_TYPE,
    )


def extract_master(package: PresentationPackage, master_part: Any) -> SlideMaster:
    name = common_slide_data_name(master_part)
    if name is None:
        name = DEFAULT_MASTER_NAME

    theme_part = package.theme_part(master_part)
    if theme_part is None:
        logger.info("master %s has no theme part", master_part.partname)

    return SlideMaster(
        name=name,
        slide_layout_ids=slide_layout_ids(master_part._element),
        slide_layouts=[extract_layout(lp) for lp in package.slide_layout_parts(master_part)],
        theme=resolve_theme_part(theme_part),
    )


def extract_masters(package: PresentationPackage) -> list[SlideMaster]:
    return [extract_master(package, mp) for mp in package.slide_master_parts()]
