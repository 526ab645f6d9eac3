"""Opening dimension calculation.

Sizes the opening for one crossing from the conduit cross-section, the
clearance, and the conduit axis expressed in the host frame. Oblique
crossings elongate the opening along the tilt direction by 1/cos(theta),
with cos(theta) clamped away from zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..entities import IntersectionRecord
from ..exceptions import DegenerateGeometryError
from ..value_objects import ShapeKind, Vector3

__all__ = [
    "FABRICATION_STEP_MM",
    "HoleDimensionCalculator",
    "MIN_COS_THETA",
    "OpeningSize",
    "PERPENDICULAR_TOLERANCE",
    "format_label",
    "round_up_5",
]

FABRICATION_STEP_MM = 5.0

# Smallest |cos(theta)| used for oblique elongation; bounds the stretch at 1000x.
MIN_COS_THETA = 1e-3

# |axis . normal| at or above 1 - tolerance counts as a perpendicular crossing.
PERPENDICULAR_TOLERANCE = 1e-3

# Sums like 0.1 + 0.2 must not round a whole multiple up by one step.
_ROUNDING_NOISE = 1e-9


def round_up_5(value: float) -> float:
    """Round up to the next multiple of 5 mm.

    Examples:
        >>> round_up_5(172)
        175.0
        >>> round_up_5(200)
        200.0
    """
    steps = value / FABRICATION_STEP_MM
    nearest = round(steps)
    if abs(steps - nearest) < _ROUNDING_NOISE:
        return nearest * FABRICATION_STEP_MM
    return math.ceil(steps) * FABRICATION_STEP_MM


def format_label(width: float, height: float) -> str:
    """Label an opening by shape family and rounded size, e.g. 'rect 300x200'."""
    w, h = int(round(width)), int(round(height))
    if w == h:
        return f"square {w}x{h}"
    return f"rect {w}x{h}"


@dataclass(frozen=True)
class OpeningSize:
    """Computed opening dimensions in millimetres.

    Attributes:
        width: Rounded opening size along the host Right axis.
        height: Rounded opening size along the host Up axis.
        raw_width: Width before 5 mm rounding.
        raw_height: Height before 5 mm rounding.
        label: Human-readable label from the rounded size.
        is_oblique: True if the oblique correction was applied.
    """

    width: float
    height: float
    raw_width: float
    raw_height: float
    label: str
    is_oblique: bool = False


class HoleDimensionCalculator:
    """Computes penetration opening sizes.

    Perpendicular crossings of circular conduits get a square opening by
    company policy. Oblique crossings stretch the dimension along the
    tilt direction (Up when the axis leans more towards Up than Right,
    otherwise Right).

    Attributes:
        clearance_mm: Margin added on each side of the conduit.
    """

    def __init__(self, clearance_mm: float = 50.0) -> None:
        if clearance_mm < 0:
            raise ValueError("Clearance must be non-negative")
        self.clearance_mm = clearance_mm

    def compute(
        self,
        shape: ShapeKind,
        width: float,
        height: float,
        local_axis: Vector3,
    ) -> OpeningSize:
        """Compute the opening for a cross-section and local axis.

        Args:
            shape: Cross-section family.
            width: Cross-section width (diameter for circular) in mm.
            height: Cross-section height in mm.
            local_axis: Conduit axis in the host frame (Right, Up, Normal).

        Returns:
            The opening size.

        Raises:
            DegenerateGeometryError: If the axis has zero length.
        """
        if local_axis.is_zero():
            raise DegenerateGeometryError("Conduit axis has zero length")
        axis = local_axis.normalized()
        add = 2.0 * self.clearance_mm
        a_r, a_u, a_n = abs(axis.x), abs(axis.y), abs(axis.z)

        if a_n >= 1.0 - PERPENDICULAR_TOLERANCE:
            if shape.is_round:
                side = round_up_5(width + add)
                return OpeningSize(
                    width=side,
                    height=side,
                    raw_width=width + add,
                    raw_height=width + add,
                    label=format_label(side, side),
                )
            raw_w, raw_h = width + add, height + add
            return self._rounded(raw_w, raw_h, is_oblique=False)

        cos_theta = max(a_n, MIN_COS_THETA)
        if shape.is_round:
            across = width + add
            along = width / cos_theta + add
        else:
            across = max(width, height) + add
            along = min(width, height) / cos_theta + add

        if a_u >= a_r:
            raw_w, raw_h = across, along
        else:
            raw_w, raw_h = along, across
        return self._rounded(raw_w, raw_h, is_oblique=True)

    def apply(self, record: IntersectionRecord) -> OpeningSize:
        """Size a record in place and return the computed size."""
        size = self.compute(
            record.shape,
            record.element_width,
            record.element_height,
            record.local_axis,
        )
        record.opening_width = size.width
        record.opening_height = size.height
        record.raw_width = size.raw_width
        record.raw_height = size.raw_height
        record.label = size.label
        return size

    def _rounded(self, raw_w: float, raw_h: float, is_oblique: bool) -> OpeningSize:
        w, h = round_up_5(raw_w), round_up_5(raw_h)
        return OpeningSize(
            width=w,
            height=h,
            raw_width=raw_w,
            raw_height=raw_h,
            label=format_label(w, h),
            is_oblique=is_oblique,
        )
