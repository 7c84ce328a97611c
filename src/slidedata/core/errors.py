from __future__ import annotations


class SlidedataError(Exception):
    """Base class for errors raised by slidedata."""


class MissingPresentationRootError(SlidedataError):
    """The package has no resolvable presentation part / `p:presentation` root."""


class PackageNotWritableError(SlidedataError):
    """A write was attempted on a package opened read-only."""


class PackageClosedError(SlidedataError):
    """The package handle was used after `close()`."""


class PresentationDataFormatError(SlidedataError):
    """An interchange document cannot be read into PresentationData.

    `problems` holds one human-readable line per violation.
    """

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems: list[str] = list(problems or [])

    def __str__(self) -> str:
        base = super().__str__()
        if not self.problems:
            return base
        return base + "\n" + "\n".join(f"  {p}" for p in self.problems)
