from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

from pptx import Presentation
from pptx.exc import PackageNotFoundError
from pptx.opc.constants import RELATIONSHIP_TYPE as RT
from pptx.oxml.ns import qn

from slidedata.core.errors import (
    MissingPresentationRootError,
    PackageClosedError,
    PackageNotWritableError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlideIdEntry:
    """One `p:sldId` of the presentation's slide-id list; either field may be missing."""

    slide_id: Optional[int]
    rel_id: Optional[str]


class PresentationPackage:
    """Accessor over a python-pptx Presentation.

    Exposes only what extraction and modification need: the presentation root,
    the declared slide-id list, relationship resolution, attached sub-parts and
    the write-back steps. Every core operation takes this handle explicitly.
    """

    def __init__(self, prs: Any, *, path: str | Path | None = None, writable: bool = False) -> None:
        part = getattr(prs, "part", None)
        if part is None or getattr(part, "_element", None) is None:
            raise MissingPresentationRootError("Presentation or PresentationPart is not found")
        if part._element.tag != qn("p:presentation"):
            raise MissingPresentationRootError(f"main part is not a presentation: {part._element.tag}")
        self._prs = prs
        self.path = Path(path) if path is not None else None
        self.writable = writable
        self._closed = False

    # -- lifecycle ----------------------------------------------------------

    def __enter__(self) -> PresentationPackage:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        self._closed = True
        self._prs = None

    @property
    def closed(self) -> bool:
        return self._closed

    def _require_open(self) -> Any:
        if self._closed:
            raise PackageClosedError("package has been closed")
        return self._prs

    def _require_writable(self) -> Any:
        prs = self._require_open()
        if not self.writable:
            raise PackageNotWritableError("package was opened read-only")
        return prs

    def ensure_writable(self) -> None:
        self._require_writable()

    # -- roots --------------------------------------------------------------

    @property
    def presentation_part(self) -> Any:
        return self._require_open().part

    @property
    def presentation_element(self) -> Any:
        return self.presentation_part._element

    @property
    def core_properties(self) -> Any:
        return self._require_open().core_properties

    # -- slide-id list ------------------------------------------------------

    def slide_id_entries(self) -> list[SlideIdEntry]:
        """`p:sldIdLst` entries in declared order (empty when the list is absent)."""
        sld_id_lst = self.presentation_element.find(qn("p:sldIdLst"))
        if sld_id_lst is None:
            return []
        out: list[SlideIdEntry] = []
        for sld_id in sld_id_lst.iterchildren(qn("p:sldId")):
            raw_id = sld_id.get("id")
            try:
                slide_id = int(raw_id) if raw_id is not None else None
            except ValueError:
                slide_id = None
            out.append(SlideIdEntry(slide_id=slide_id, rel_id=sld_id.get(qn("r:id")) or None))
        return out

    # -- relationships ------------------------------------------------------

    def resolve_part(self, source_part: Any, rel_id: Optional[str]) -> Any | None:
        """Target part of `rel_id` on `source_part`, or None when it cannot be resolved."""
        self._require_open()
        if not rel_id:
            return None
        rel = source_part.rels.get(rel_id)
        if rel is None or rel.is_external:
            return None
        return rel.target_part

    def related_parts(self, source_part: Any, reltype: str) -> list[Any]:
        """Internal parts related to `source_part` by `reltype`, in relationship order."""
        self._require_open()
        return [
            rel.target_part
            for rel in source_part.rels.values()
            if rel.reltype == reltype and not rel.is_external
        ]

    def related_part(self, source_part: Any, reltype: str) -> Any | None:
        parts = self.related_parts(source_part, reltype)
        return parts[0] if parts else None

    def slide_master_parts(self) -> list[Any]:
        return self.related_parts(self.presentation_part, RT.SLIDE_MASTER)

    def slide_layout_parts(self, master_part: Any) -> list[Any]:
        return self.related_parts(master_part, RT.SLIDE_LAYOUT)

    def presentation_theme_part(self) -> Any | None:
        return self.related_part(self.presentation_part, RT.THEME)

    def theme_part(self, master_part: Any) -> Any | None:
        return self.related_part(master_part, RT.THEME)

    def slide_layout_part(self, slide_part: Any) -> Any | None:
        return self.related_part(slide_part, RT.SLIDE_LAYOUT)

    # -- text nodes ---------------------------------------------------------

    def text_nodes(self, part: Any) -> list[Any]:
        """Every `a:t` node of an XML part, in document order."""
        self._require_open()
        return list(part._element.iter(qn("a:t")))

    def iter_slide_parts(self) -> Iterator[tuple[int, Any]]:
        """(slide_id, slide part) for each resolvable entry of the slide-id list."""
        for entry in self.slide_id_entries():
            if entry.slide_id is None or entry.rel_id is None:
                continue
            part = self.resolve_part(self.presentation_part, entry.rel_id)
            if part is None:
                continue
            yield entry.slide_id, part

    # -- write-back ---------------------------------------------------------

    def persist_part(self, part: Any) -> int:
        """Re-serialize one modified XML part; returns its serialized size in bytes.

        python-pptx serializes every part at `save`; this only re-serializes the
        edited part so the edit is checked to produce XML before the save.
        """
        self._require_writable()
        blob = part.blob
        logger.debug("persisted %s (%d bytes)", part.partname, len(blob))
        return len(blob)

    def save(self, path: str | Path | None = None) -> Path:
        prs = self._require_writable()
        target = Path(path) if path is not None else self.path
        if target is None:
            raise PackageNotWritableError("no target path: package was not opened from a file")
        target.parent.mkdir(parents=True, exist_ok=True)
        prs.save(str(target))
        logger.info("saved package: %s", target)
        return target


def open_package(path: str | Path, *, writable: bool = False) -> PresentationPackage:
    """Open a .pptx file as a PresentationPackage.

    A file python-pptx cannot open as a presentation raises MissingPresentationRootError.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"input not found: {p}")
    try:
        prs = Presentation(str(p))
    except (PackageNotFoundError, KeyError, ValueError) as e:
        raise MissingPresentationRootError(f"{p}: {e}") from e
    logger.debug("opened package %s (writable=%s)", p, writable)
    return PresentationPackage(prs, path=p, writable=writable)
