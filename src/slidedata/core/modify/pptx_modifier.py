"""
pptx_modifier.py — Write edits back into a live presentation package.

Two strategies:
  1. replace_text: exact-match find/replace over every `a:t` of every slide.
  2. apply_presentation_data: metadata merge plus positional text replace driven
     by an edited PresentationData (slides matched by slide id, contents matched
     to live text nodes by position).

Both persist each modified slide part; saving the package is the caller's step.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timezone
from pathlib import Path
from typing import Any, Iterable

from slidedata.core.model import DEFAULT_CREATOR, PresentationData, SlideContent, load_presentation_data
from slidedata.core.package import PresentationPackage

logger = logging.getLogger(__name__)


@dataclass
class UpdateReport:
    metadata_fields: list[str] = field(default_factory=list)
    slides_updated: list[int] = field(default_factory=list)
    slides_skipped: list[int] = field(default_factory=list)
    text_nodes_replaced: int = 0


# ---------------------------------------------------------------------------
# Exact-match replace
# ---------------------------------------------------------------------------


def replace_text(package: PresentationPackage, old_text: str, new_text: str) -> bool:
    """Replace every text run equal to `old_text` on every slide. Returns True if any matched."""
    package.ensure_writable()

    matched = 0
    for slide_id, part in package.iter_slide_parts():
        hits = [t for t in package.text_nodes(part) if t.text == old_text]
        if not hits:
            continue
        for t in hits:
            t.text = new_text
        package.persist_part(part)
        matched += len(hits)
        logger.debug("slide %d: replaced %d run(s)", slide_id, len(hits))

    if not matched:
        logger.info("no slide contains text %r", old_text)
        return False
    logger.info("updated %d run(s) from %r to %r", matched, old_text, new_text)
    return True


# ---------------------------------------------------------------------------
# Positional bulk replace
# ---------------------------------------------------------------------------


def apply_metadata(package: PresentationPackage, data: PresentationData) -> list[str]:
    """Copy non-empty, non-default metadata onto the package; returns the fields written.

    A Creator equal to DEFAULT_CREATOR is the extraction fallback, not an author, and is skipped.
    """
    cp = package.core_properties
    written: list[str] = []

    for name, attr, value in (
        ("Title", "title", data.title),
        ("Subject", "subject", data.subject),
        ("Description", "comments", data.description),
        ("Creator", "author", data.creator),
    ):
        if not value or (attr == "author" and value == DEFAULT_CREATOR):
            continue
        setattr(cp, attr, value)
        written.append(name)

    for name, attr, ts in (("Created", "created", data.created), ("Modified", "modified", data.modified)):
        if ts is None:
            continue
        if ts.tzinfo is not None:
            ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
        setattr(cp, attr, ts)
        written.append(name)

    return written


def apply_slide_contents(text_nodes: Iterable[Any], contents: Iterable[SlideContent]) -> int:
    """Pair live text node i with content i; text entries overwrite, other kinds are no-ops.

    Pairing stops at the shorter sequence. Returns the number of nodes rewritten.
    """
    replaced = 0
    for node, content in zip(text_nodes, contents):
        if not content.is_text or content.text is None:
            # TODO: image and table entries once picture/table write-back exists
            continue
        node.text = content.text
        replaced += 1
    return replaced


def apply_presentation_data(package: PresentationPackage, data: PresentationData) -> UpdateReport:
    package.ensure_writable()
    report = UpdateReport()
    report.metadata_fields = apply_metadata(package, data)

    rel_by_slide_id = {
        e.slide_id: e.rel_id for e in package.slide_id_entries() if e.slide_id is not None and e.rel_id is not None
    }

    for slide in data.slides:
        part = package.resolve_part(package.presentation_part, rel_by_slide_id.get(slide.slide_id))
        if part is None:
            logger.warning("slide %d not found in package; skipped", slide.slide_id)
            report.slides_skipped.append(slide.slide_id)
            continue

        nodes = package.text_nodes(part)
        n = apply_slide_contents(nodes, slide.contents)
        if n:
            package.persist_part(part)
        report.slides_updated.append(slide.slide_id)
        report.text_nodes_replaced += n
        if len(nodes) != len(slide.contents):
            logger.debug(
                "slide %d: %d live text node(s), %d content entr(ies); paired %d",
                slide.slide_id,
                len(nodes),
                len(slide.contents),
                min(len(nodes), len(slide.contents)),
            )

    logger.info(
        "applied presentation data: metadata=%s, slides updated=%d, skipped=%d, text nodes=%d",
        report.metadata_fields,
        len(report.slides_updated),
        len(report.slides_skipped),
        report.text_nodes_replaced,
    )
    return report


def update_from_json(package: PresentationPackage, json_path: str | Path) -> UpdateReport:
    """Load an interchange file and apply it (raises PresentationDataFormatError on bad input)."""
    data = load_presentation_data(json_path)
    return apply_presentation_data(package, data)
