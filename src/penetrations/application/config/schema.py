"""Pydantic configuration schema models for penetration scenes.

This module defines the schema of JSON scene files: the analysis settings,
linked models, host elements and conduits. It uses Pydantic v2 for
validation and serialization.

Conduit categories are kept as plain strings so that a scene mentioning a
category the analysis does not handle still loads; such conduits are
reported as unsupported during the pass instead of failing the file.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Supported schema versions for scene files
# Version 1.0: Initial schema with hosts, conduits, links and settings
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

Point3 = Annotated[list[float], Field(min_length=3, max_length=3)]


class HostKindConfig(str, Enum):
    """Host element kinds accepted in scene files."""

    WALL = "wall"
    SLAB = "slab"


class ExclusionKindConfig(str, Enum):
    """Kinds of inserts that suppress openings."""

    DOOR = "door"
    WINDOW = "window"


class ObstructionKindConfig(str, Enum):
    """Structural elements openings must keep clear of."""

    COLUMN = "column"
    BEAM = "beam"


class ProfileConfig(str, Enum):
    """Cross-section profile of a conduit.

    When omitted, pipes are round, ducts are rectangular and cable trays
    use the tray profile.
    """

    ROUND = "round"
    RECTANGULAR = "rectangular"
    SQUARE = "square"
    TRAY = "tray"


class BoxConfig(BaseModel):
    """Axis-aligned bounding box in millimetres.

    Attributes:
        min: Minimum corner [x, y, z].
        max: Maximum corner [x, y, z].
    """

    model_config = ConfigDict(extra="forbid")

    min: Point3
    max: Point3

    @model_validator(mode="after")
    def validate_min_below_max(self) -> "BoxConfig":
        """Ensure min does not exceed max on any axis."""
        if any(lo > hi for lo, hi in zip(self.min, self.max)):
            raise ValueError("Box 'min' must not exceed 'max' on any axis")
        return self


class FilterConfig(BaseModel):
    """Advanced exclusion filter constants.

    Attributes:
        opening_tolerance_mm: Expansion of door/window zones.
        obstruction_probe_mm: Probe reach along the host normal, each way.
        grazing_threshold: Minimum |axis . normal| for a real puncture.
    """

    model_config = ConfigDict(extra="forbid")

    opening_tolerance_mm: float = Field(default=50.0, ge=0)
    obstruction_probe_mm: float = Field(default=150.0, ge=0)
    grazing_threshold: float = Field(default=0.5, ge=0, le=1)


class SettingsConfig(BaseModel):
    """Engineer-tunable analysis settings.

    Attributes:
        clearance_mm: Margin added on each side of a conduit.
        merge_threshold_mm: Largest gap that still merges two openings.
            Zero disables merging.
        abort_on_unsupported: Abort the pass on an unsupported element.
        filters: Exclusion filter constants.
    """

    model_config = ConfigDict(extra="forbid")

    clearance_mm: float = Field(default=50.0, ge=0, description="Clearance per side")
    merge_threshold_mm: float = Field(
        default=0.0, ge=0, description="Merge threshold, 0 disables merging"
    )
    abort_on_unsupported: bool = False
    filters: FilterConfig = Field(default_factory=FilterConfig)


class LinkConfig(BaseModel):
    """A linked model placed in the host model by a plan rotation and offset."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    rotation_z_deg: float = 0.0
    translation: Point3 = Field(default_factory=lambda: [0.0, 0.0, 0.0])


class ExclusionZoneConfig(BaseModel):
    """Door or window volume inserted in a host."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    kind: ExclusionKindConfig
    bbox: BoxConfig


class ObstructionConfig(BaseModel):
    """Column or beam near a host, optionally from a linked model."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    kind: ObstructionKindConfig
    bbox: BoxConfig
    link: str | None = None


class PlanarFaceConfig(BaseModel):
    """Planar placement face."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    kind: Literal["planar"] = "planar"
    origin: Point3
    normal: Point3


class CylindricalFaceConfig(BaseModel):
    """Cylindrical placement face of a curved wall."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    kind: Literal["cylindrical"]
    axis_origin: Point3
    axis_direction: Point3 = Field(default_factory=lambda: [0.0, 0.0, 1.0])
    radius: float = Field(..., gt=0)
    mid_normal: Point3
    outward: bool = True


FaceConfig = Annotated[
    Union[PlanarFaceConfig, CylindricalFaceConfig], Field(discriminator="kind")
]


class HostConfig(BaseModel):
    """A wall or slab.

    A host without a bounding box, or a wall without a usable orientation,
    still loads; it is reported as skipped when the pass runs.

    Attributes:
        id: Host identity.
        kind: Wall or slab.
        bbox: World bounding box.
        orientation: Wall exterior normal. Ignored for slabs.
        origin: Local frame origin. Defaults to the bounding box center.
        exclusion_zones: Doors and windows in the host.
        obstructions: Columns and beams near the host.
        faces: Explicit placement faces. Derived from the box when empty.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    kind: HostKindConfig
    bbox: BoxConfig | None = None
    orientation: Point3 | None = None
    origin: Point3 | None = None
    exclusion_zones: list[ExclusionZoneConfig] = Field(default_factory=list)
    obstructions: list[ObstructionConfig] = Field(default_factory=list)
    faces: list[FaceConfig] = Field(default_factory=list)


class ConduitConfig(BaseModel):
    """A pipe, duct or cable tray segment.

    Attributes:
        id: Conduit identity, unique across the scene.
        category: pipe, duct or cable_tray. Other values load but are
            reported as unsupported.
        profile: Cross-section profile. Defaults by category.
        start: Centerline start point in the source model.
        end: Centerline end point in the source model.
        parameters: Raw element parameters, e.g. {"outer_diameter": 110}.
        link: Name of the linked model the conduit comes from.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    profile: ProfileConfig | None = None
    start: Point3 | None = None
    end: Point3 | None = None
    parameters: dict[str, float] = Field(default_factory=dict)
    link: str | None = None


class SceneConfiguration(BaseModel):
    """Root configuration model for a penetration scene.

    Example:
        >>> config = SceneConfiguration(schema_version="1.0")
        >>> config.settings.clearance_mm
        50.0
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    links: list[LinkConfig] = Field(default_factory=list)
    hosts: list[HostConfig] = Field(default_factory=list)
    conduits: list[ConduitConfig] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that the schema version is supported."""
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(
                f"Unsupported schema version '{v}'. Supported versions: {supported}"
            )
        return v

    @model_validator(mode="after")
    def validate_references(self) -> "SceneConfiguration":
        """Validate unique ids and that every link reference exists."""
        link_names = [link.name for link in self.links]
        if len(set(link_names)) != len(link_names):
            raise ValueError("Link names must be unique")
        host_ids = [host.id for host in self.hosts]
        if len(set(host_ids)) != len(host_ids):
            raise ValueError("Host ids must be unique")
        conduit_ids = [conduit.id for conduit in self.conduits]
        if len(set(conduit_ids)) != len(conduit_ids):
            raise ValueError("Conduit ids must be unique")

        known = set(link_names)
        referenced = [c.link for c in self.conduits] + [
            o.link for host in self.hosts for o in host.obstructions
        ]
        for name in referenced:
            if name is not None and name not in known:
                raise ValueError(f"Unknown link '{name}'")
        return self
