"""Error taxonomy for the penetration analysis pass.

Every per-element failure raised by the domain services derives from
PenetrationError. The pipeline command catches these at the per-candidate
boundary, records the element as skipped and continues with the batch.
"""

from __future__ import annotations


class PenetrationError(Exception):
    """Base class for all per-element analysis failures.

    Attributes:
        element_id: Identity of the offending element, if known.
        category: Short category tag used in skip reports.
    """

    category = "error"

    def __init__(self, message: str, element_id: str | None = None) -> None:
        self.element_id = element_id
        super().__init__(message)


class MissingGeometryError(PenetrationError):
    """An element has no bounding box or an unreadable cross-section."""

    category = "missing_geometry"


class DegenerateGeometryError(PenetrationError, ValueError):
    """A zero-length axis, normal or orientation was supplied."""

    category = "degenerate_geometry"


class PlacementSurfaceError(PenetrationError):
    """No usable placement face could be found for a candidate opening."""

    category = "no_placement_surface"


class UnsupportedElementError(PenetrationError):
    """A host or conduit of a type the analysis does not handle."""

    category = "unsupported_element"


class AnalysisAbortedError(Exception):
    """Raised when the caller asked to abort on an unsupported element."""

    pass
