from __future__ import annotations

import logging
from typing import Any, Optional

from lxml import etree
from pptx.oxml import parse_xml
from pptx.oxml.ns import qn

from slidedata.core.model import Theme

logger = logging.getLogger(__name__)

# Theme field -> scheme slot tag in a:theme/a:themeElements/a:clrScheme
_SLOT_BY_FIELD: dict[str, str] = {
    "dark1": "dk1",
    "light1": "lt1",
    "dark2": "dk2",
    "light2": "lt2",
    "accent1": "accent1",
    "accent2": "accent2",
    "accent3": "accent3",
    "accent4": "accent4",
    "accent5": "accent5",
    "accent6": "accent6",
    "hyperlink": "hlink",
    "followed_hyperlink": "folHlink",
}


def theme_element(theme_part: Any) -> Optional[Any]:
    """Parsed `a:theme` root of a theme part, or None (no part, or unparseable blob)."""
    if theme_part is None:
        return None
    el = getattr(theme_part, "_element", None)
    if el is not None:
        return el
    try:
        return parse_xml(theme_part.blob)
    except etree.XMLSyntaxError as e:
        logger.warning("theme part %s is not well-formed XML: %s", getattr(theme_part, "partname", "?"), e)
        return None


def color_scheme(theme_el: Optional[Any]) -> Optional[Any]:
    if theme_el is None:
        return None
    elements = theme_el.find(qn("a:themeElements"))
    if elements is None:
        return None
    return elements.find(qn("a:clrScheme"))


def resolve_color_slot(scheme_el: Any, slot: str) -> Optional[str]:
    """`a:srgbClr/@val` of one scheme slot (e.g. 'accent1'), or None.

    System colors (`a:sysClr`) and other color models are not resolved.
    """
    slot_el = scheme_el.find(qn(f"a:{slot}"))
    if slot_el is None:
        return None
    srgb = slot_el.find(qn("a:srgbClr"))
    if srgb is None:
        return None
    return srgb.get("val") or None


def resolve_theme(theme_el: Optional[Any]) -> Theme:
    """Theme from an `a:theme` element. Total: absent input yields the all-empty Theme."""
    scheme = color_scheme(theme_el)
    if scheme is None:
        return Theme()
    return Theme(**{name: resolve_color_slot(scheme, slot) or "" for name, slot in _SLOT_BY_FIELD.items()})


def resolve_theme_part(theme_part: Any) -> Theme:
    return resolve_theme(theme_element(theme_part))
