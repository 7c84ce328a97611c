from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

from pptx.oxml.ns import qn

from slidedata.core.extract.masters import common_slide_data_name, extract_masters
from slidedata.core.extract.shape_tree import classify_shape_tree
from slidedata.core.extract.theme import resolve_theme_part
from slidedata.core.extract.tree_dump import describe_slide
from slidedata.core.model import (
    DEFAULT_CREATOR,
    NoteSize,
    PresentationData,
    Slide,
    SlideSize,
)
from slidedata.core.package import PresentationPackage, open_package

logger = logging.getLogger(__name__)


def _emu(v: Any) -> int:
    """Sizes are EMU integers. Keep as int and clamp."""
    try:
        iv = int(v)
    except (TypeError, ValueError):
        return 0
    return iv if iv >= 0 else 0


def extract_slide_size(presentation_el: Any) -> SlideSize:
    sz = presentation_el.find(qn("p:sldSz"))
    if sz is None:
        return SlideSize()
    return SlideSize(width=_emu(sz.get("cx")), height=_emu(sz.get("cy")), type=sz.get("type") or "")


def extract_note_size(presentation_el: Any) -> NoteSize:
    sz = presentation_el.find(qn("p:notesSz"))
    if sz is None:
        return NoteSize()
    return NoteSize(width=_emu(sz.get("cx")), height=_emu(sz.get("cy")))


def shape_tree(slide_part: Any) -> Optional[Any]:
    """First `p:spTree` of a slide part (normally p:cSld/p:spTree)."""
    return next(slide_part._element.iter(qn("p:spTree")), None)


def extract_slide(package: PresentationPackage, slide_id: int, slide_part: Any) -> Optional[Slide]:
    tree = shape_tree(slide_part)
    if tree is None:
        logger.warning("slide %d (%s) has no shape tree; skipped", slide_id, slide_part.partname)
        return None

    if logger.isEnabledFor(logging.DEBUG):
        for line in describe_slide(slide_id, slide_part):
            logger.debug("%s", line)

    layout_name = common_slide_data_name(package.slide_layout_part(slide_part)) or ""
    return Slide(
        slide_id=slide_id,
        layout_name=layout_name,
        contents=classify_shape_tree(package, slide_part, tree),
    )


def extract_slides(package: PresentationPackage) -> List[Slide]:
    """Slides in slide-id list order; unresolvable entries are left out, not emitted empty."""
    slides: List[Slide] = []
    for entry in package.slide_id_entries():
        if entry.slide_id is None or entry.rel_id is None:
            logger.warning("slide-id entry %r is incomplete; skipped", entry)
            continue
        part = package.resolve_part(package.presentation_part, entry.rel_id)
        if part is None:
            logger.warning("slide %d: relationship %s does not resolve; skipped", entry.slide_id, entry.rel_id)
            continue
        slide = extract_slide(package, entry.slide_id, part)
        if slide is not None:
            slides.append(slide)
    return slides


def extract_presentation(package: PresentationPackage) -> PresentationData:
    cp = package.core_properties
    pres_el = package.presentation_element

    data = PresentationData(
        title=cp.title or "",
        subject=cp.subject or "",
        description=cp.comments or "",
        creator=cp.author or DEFAULT_CREATOR,
        created=cp.created,
        modified=cp.modified,
        slide_size=extract_slide_size(pres_el),
        note_size=extract_note_size(pres_el),
        # presentation-level theme, even when masters carry their own
        global_theme=resolve_theme_part(package.presentation_theme_part()),
        slide_masters=extract_masters(package),
        slides=extract_slides(package),
    )
    logger.info(
        "extracted %d slide(s), %d master(s)",
        len(data.slides),
        len(data.slide_masters),
    )
    return data


def extract_pptx(path: str | Path) -> PresentationData:
    with open_package(path) as package:
        return extract_presentation(package)
