"""Package accessor over python-pptx.

    from slidedata.core.package import open_package
"""

from __future__ import annotations

from .pptx_package import PresentationPackage, SlideIdEntry, open_package

__all__ = [
    "PresentationPackage",
    "SlideIdEntry",
    "open_package",
]
