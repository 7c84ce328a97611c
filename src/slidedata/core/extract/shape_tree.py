"""
shape_tree.py — Classify the top-level children of a `p:spTree` into slide contents.

Only the immediate children are visited. Each child is mapped to one NodeKind;
the kind decides which content builder (if any) runs. Group shapes are not
descended into, so text inside a group does not appear in the content list.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Optional

from lxml import etree
from pptx.oxml.ns import qn

from slidedata.core.model import (
    ContentType,
    SlideContent,
    TableCell,
    TableContent,
    TableRow,
)
from slidedata.core.package import PresentationPackage

logger = logging.getLogger(__name__)

CELL_LINE_SEPARATOR = "\n"


class NodeKind(enum.Enum):
    TEXT_SHAPE = "text_shape"
    PICTURE = "picture"
    GRAPHIC_FRAME = "graphic_frame"
    IGNORED = "ignored"
    UNKNOWN = "unknown"


_KIND_BY_TAG: dict[str, NodeKind] = {
    qn("p:sp"): NodeKind.TEXT_SHAPE,
    qn("p:pic"): NodeKind.PICTURE,
    qn("p:graphicFrame"): NodeKind.GRAPHIC_FRAME,
    # structural-only children
    qn("p:grpSp"): NodeKind.IGNORED,
    qn("p:cxnSp"): NodeKind.IGNORED,
    qn("p:nvGrpSpPr"): NodeKind.IGNORED,
    qn("p:grpSpPr"): NodeKind.IGNORED,
    qn("p:contentPart"): NodeKind.IGNORED,
    qn("p:extLst"): NodeKind.IGNORED,
}


def classify(node: Any) -> NodeKind:
    if not isinstance(node.tag, str):
        # comments / processing instructions
        return NodeKind.IGNORED
    return _KIND_BY_TAG.get(node.tag, NodeKind.UNKNOWN)


def kind_name(node: Any) -> str:
    if not isinstance(node.tag, str):
        return type(node).__name__
    return etree.QName(node).localname


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def paragraph_text(p_el: Any) -> str:
    """Concatenated `a:r/a:t` text of one `a:p` (fields and line breaks excluded)."""
    parts: list[str] = []
    for r in p_el.iterchildren(qn("a:r")):
        t = r.find(qn("a:t"))
        if t is not None and t.text:
            parts.append(t.text)
    return "".join(parts)


def text_body_paragraphs(owner_el: Any, body_tag: str) -> Optional[list[str]]:
    """Paragraph texts of the text body `body_tag` under `owner_el`; None when there is no body."""
    body = owner_el.find(qn(body_tag))
    if body is None:
        return None
    return [paragraph_text(p) for p in body.iterchildren(qn("a:p"))]


def text_contents(sp_el: Any) -> list[SlideContent]:
    paragraphs = text_body_paragraphs(sp_el, "p:txBody")
    if paragraphs is None:
        return []
    return [SlideContent.text_entry(t) for t in paragraphs if t]


# ---------------------------------------------------------------------------
# Pictures
# ---------------------------------------------------------------------------


def picture_embed_id(pic_el: Any) -> Optional[str]:
    blip_fill = pic_el.find(qn("p:blipFill"))
    if blip_fill is None:
        return None
    blip = blip_fill.find(qn("a:blip"))
    if blip is None:
        return None
    return blip.get(qn("r:embed")) or None


def picture_contents(package: PresentationPackage, slide_part: Any, pic_el: Any) -> list[SlideContent]:
    embed_id = picture_embed_id(pic_el)
    image_part = package.resolve_part(slide_part, embed_id)
    uri = str(image_part.partname) if image_part is not None else ""
    if not uri:
        logger.warning("%s: picture image %r could not be resolved; skipped", slide_part.partname, embed_id)
        return []
    return [SlideContent.image_entry(uri)]


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def frame_table(frame_el: Any) -> Optional[Any]:
    """First `a:tbl` inside `a:graphic/a:graphicData`, or None (charts, diagrams, OLE objects)."""
    graphic = frame_el.find(qn("a:graphic"))
    if graphic is None:
        return None
    data = graphic.find(qn("a:graphicData"))
    if data is None:
        return None
    return data.find(qn("a:tbl"))


def table_content(tbl_el: Any) -> TableContent:
    content = TableContent()
    for tr in tbl_el.iterchildren(qn("a:tr")):
        row = TableRow()
        for tc in tr.iterchildren(qn("a:tc")):
            paragraphs = text_body_paragraphs(tc, "a:txBody")
            text = CELL_LINE_SEPARATOR.join(paragraphs) if paragraphs is not None else ""
            row.cells.append(TableCell(content_type=ContentType.TEXT, text=text))
        content.rows.append(row)
    return content


def graphic_frame_contents(frame_el: Any) -> list[SlideContent]:
    tbl = frame_table(frame_el)
    if tbl is None:
        return []
    return [SlideContent.table_entry(table_content(tbl))]


# ---------------------------------------------------------------------------
# Shape tree
# ---------------------------------------------------------------------------


def classify_shape_tree(package: PresentationPackage, slide_part: Any, sp_tree: Any) -> list[SlideContent]:
    """Ordered contents of one shape tree (top level only, document order)."""
    contents: list[SlideContent] = []
    for node in sp_tree:
        kind = classify(node)
        if kind is NodeKind.TEXT_SHAPE:
            contents.extend(text_contents(node))
        elif kind is NodeKind.PICTURE:
            contents.extend(picture_contents(package, slide_part, node))
        elif kind is NodeKind.GRAPHIC_FRAME:
            contents.extend(graphic_frame_contents(node))
        elif kind is NodeKind.UNKNOWN:
            logger.warning("%s: unknown content type encountered: %s", slide_part.partname, kind_name(node))
    return contents
