"""
Shared pytest fixtures: small decks built with python-pptx in a temp directory.
"""

import io
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from PIL import Image
from pptx import Presentation
from pptx.enum.shapes import MSO_CONNECTOR
from pptx.oxml.ns import qn
from pptx.util import Inches

from slidedata.core.package import PresentationPackage

BASIC = "Basic presentation"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


def add_textbox(slide, text: str):
    tb = slide.shapes.add_textbox(Inches(1), Inches(1), Inches(4), Inches(1))
    tb.text_frame.text = text
    return tb


def blank_layout(prs):
    return prs.slide_layouts[6]


def text_deck(*paragraph_counts: int) -> Presentation:
    """One blank slide per count, each holding a textbox with that many paragraphs t1..tN."""
    prs = Presentation()
    for n in paragraph_counts:
        slide = prs.slides.add_slide(blank_layout(prs))
        add_textbox(slide, "\n".join(f"t{i}" for i in range(1, n + 1)))
    return prs


def slide_texts(package: PresentationPackage, slide_index: int) -> list[str]:
    part = list(package.iter_slide_parts())[slide_index][1]
    return [t.text for t in package.text_nodes(part)]


@dataclass
class SampleDeck:
    path: Path
    slide_ids: list[int]
    layout_names: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_deck(tmp_path: Path) -> SampleDeck:
    """Two slides.

    slide 1 (Blank): textbox "Hello"/"World"/"", picture, 2x3 table, group with text, connector
    slide 2 (Title Slide): title, subtitle and a textbox, each reading "Basic presentation"
    """
    prs = Presentation()
    prs.core_properties.title = "Draft"
    prs.core_properties.subject = "Internal"
    prs.core_properties.author = "Jane Doe"

    s1 = prs.slides.add_slide(blank_layout(prs))
    add_textbox(s1, "Hello\nWorld\n")
    s1.shapes.add_picture(io.BytesIO(png_bytes()), Inches(5), Inches(1))
    table = s1.shapes.add_table(2, 3, Inches(1), Inches(3), Inches(6), Inches(2)).table
    for r in range(2):
        for c in range(3):
            table.cell(r, c).text = f"r{r}c{c}\nsecond"
    grp = s1.shapes.add_group_shape()
    add_textbox(grp, "grouped")
    s1.shapes.add_connector(MSO_CONNECTOR.STRAIGHT, Inches(1), Inches(6), Inches(3), Inches(6))

    s2 = prs.slides.add_slide(prs.slide_layouts[0])
    s2.shapes.title.text = BASIC
    s2.placeholders[1].text = BASIC
    add_textbox(s2, BASIC)

    path = tmp_path / "sample.pptx"
    prs.save(str(path))
    return SampleDeck(
        path=path,
        slide_ids=[s1.slide_id, s2.slide_id],
        layout_names=[s1.slide_layout.name, s2.slide_layout.name],
    )


@pytest.fixture
def reordered_deck(tmp_path: Path) -> SampleDeck:
    """Three slides whose slide-id list order differs from part creation order."""
    prs = Presentation()
    ids = []
    for label in ("first", "second", "third"):
        slide = prs.slides.add_slide(blank_layout(prs))
        add_textbox(slide, label)
        ids.append(slide.slide_id)

    sld_id_lst = prs.part._element.find(qn("p:sldIdLst"))
    first = sld_id_lst[0]
    sld_id_lst.remove(first)
    sld_id_lst.append(first)

    path = tmp_path / "reordered.pptx"
    prs.save(str(path))
    return SampleDeck(path=path, slide_ids=ids[1:] + ids[:1])


@pytest.fixture
def memory_package() -> PresentationPackage:
    """Writable package over a fresh in-memory presentation with one blank slide."""
    prs = Presentation()
    prs.slides.add_slide(blank_layout(prs))
    return PresentationPackage(prs, writable=True)
