"""Enumerations shared across the penetration domain."""

from __future__ import annotations

from enum import Enum


class HostKind(str, Enum):
    """Kinds of structural barriers a conduit may penetrate."""

    WALL = "wall"
    SLAB = "slab"


class ConduitCategory(str, Enum):
    """Engineering categories of penetrating elements."""

    PIPE = "pipe"
    DUCT = "duct"
    CABLE_TRAY = "cable_tray"


class ShapeKind(str, Enum):
    """Cross-section families used for opening sizing.

    Attributes:
        CIRCULAR: Pipes and round ducts. Height equals width (diameter).
        RECTANGULAR: Rectangular or oval ducts.
        SQUARE: Rectangular ducts with equal sides.
        TRAY: Cable trays, sized like rectangular sections.
    """

    CIRCULAR = "circular"
    RECTANGULAR = "rectangular"
    SQUARE = "square"
    TRAY = "tray"

    @property
    def is_round(self) -> bool:
        return self is ShapeKind.CIRCULAR


class ExclusionKind(str, Enum):
    """Host inserts whose openings suppress penetration candidates."""

    DOOR = "door"
    WINDOW = "window"


class ObstructionKind(str, Enum):
    """Structural elements a penetration must keep away from."""

    COLUMN = "column"
    BEAM = "beam"
