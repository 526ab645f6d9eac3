"""Model-query collaborator backed by a JSON scene.

Turns a validated SceneConfiguration into the host surfaces and conduit
segments of one analysis pass. Elements that cannot be read (missing
geometry, zero-length orientation, unsupported category) are left out
and reported through element_errors().
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from penetrations.application.config.adapter import config_to_link_transforms
from penetrations.application.config.schema import (
    ConduitConfig,
    CylindricalFaceConfig,
    HostConfig,
    ProfileConfig,
    SceneConfiguration,
)
from penetrations.domain import (
    BoundingBox3D,
    ConduitCategory,
    ConduitSegment,
    CylindricalFace,
    DegenerateGeometryError,
    ExclusionKind,
    ExclusionZone,
    HostFace,
    HostKind,
    HostSurface,
    MissingGeometryError,
    Obstruction,
    ObstructionKind,
    PenetrationError,
    PlanarFace,
    RigidTransform,
    ShapeKind,
    UnsupportedElementError,
    Vector3,
)
from penetrations.domain.services import CoordinateFrameMapper

logger = logging.getLogger(__name__)

# Parameter names tried in order; the first positive value wins.
PIPE_DIAMETER_PARAMS: tuple[str, ...] = ("outer_diameter", "diameter", "nominal_diameter")
ROUND_DUCT_DIAMETER_PARAMS: tuple[str, ...] = ("diameter", "outer_diameter")
WIDTH_PARAMS: tuple[str, ...] = ("width", "tray_width")
HEIGHT_PARAMS: tuple[str, ...] = ("height", "tray_height")

_DEFAULT_PROFILES = {
    ConduitCategory.PIPE: ProfileConfig.ROUND,
    ConduitCategory.DUCT: ProfileConfig.RECTANGULAR,
    ConduitCategory.CABLE_TRAY: ProfileConfig.TRAY,
}

_ALLOWED_PROFILES = {
    ConduitCategory.PIPE: {ProfileConfig.ROUND},
    ConduitCategory.DUCT: {
        ProfileConfig.ROUND,
        ProfileConfig.RECTANGULAR,
        ProfileConfig.SQUARE,
    },
    ConduitCategory.CABLE_TRAY: {ProfileConfig.TRAY, ProfileConfig.RECTANGULAR},
}


def probe_parameter(
    parameters: Mapping[str, float],
    names: Sequence[str],
    element_id: str,
) -> float:
    """Read the first positive parameter from an ordered list of names.

    Args:
        parameters: Raw element parameters.
        names: Candidate names, most specific first.
        element_id: Element identity for the error message.

    Returns:
        The first positive value found.

    Raises:
        MissingGeometryError: If none of the names holds a positive value.

    Examples:
        >>> probe_parameter({"diameter": 110}, PIPE_DIAMETER_PARAMS, "P1")
        110
    """
    for name in names:
        value = parameters.get(name)
        if value is not None and value > 0:
            return value
    raise MissingGeometryError(
        f"Element {element_id} has no positive value for any of: {', '.join(names)}",
        element_id=element_id,
    )


def _vector(values: Sequence[float]) -> Vector3:
    return Vector3.from_sequence(list(values))


def _box(cfg) -> BoundingBox3D:
    return BoundingBox3D(_vector(cfg.min), _vector(cfg.max))


class SceneModelQuery:
    """Read-only snapshot of a scene, implementing ModelQueryProtocol.

    Attributes:
        config: The scene the snapshot was built from.
    """

    def __init__(
        self,
        config: SceneConfiguration,
        frame_mapper: CoordinateFrameMapper | None = None,
    ) -> None:
        self.config = config
        self._frames = frame_mapper or CoordinateFrameMapper()
        self._transforms = config_to_link_transforms(config)
        self._hosts: list[HostSurface] = []
        self._conduits: list[tuple[ConduitSegment, RigidTransform]] = []
        self._errors: list[PenetrationError] = []

        for host_cfg in config.hosts:
            try:
                self._hosts.append(self._build_host(host_cfg))
            except PenetrationError as exc:
                logger.debug(f"Host {host_cfg.id} not loaded: {exc}")
                self._errors.append(exc)

        for conduit_cfg in config.conduits:
            try:
                self._conduits.append(self._build_conduit(conduit_cfg))
            except PenetrationError as exc:
                logger.debug(f"Conduit {conduit_cfg.id} not loaded: {exc}")
                self._errors.append(exc)

        self._by_id = {host.host_id: host for host in self._hosts}

    # ModelQueryProtocol

    def hosts(self) -> list[HostSurface]:
        return list(self._hosts)

    def conduits(self) -> list[tuple[ConduitSegment, RigidTransform]]:
        return list(self._conduits)

    def exclusion_zones(self, host_id: str) -> list[ExclusionZone]:
        host = self._by_id.get(host_id)
        return list(host.exclusion_zones) if host else []

    def obstructions(self, host_id: str) -> list[Obstruction]:
        host = self._by_id.get(host_id)
        return list(host.obstructions) if host else []

    def element_errors(self) -> list[PenetrationError]:
        return list(self._errors)

    # Conversion

    def transform_for(self, link: str | None) -> RigidTransform:
        """Transform of a linked model, identity for the primary model."""
        if link is None:
            return RigidTransform.identity()
        return self._transforms[link]

    def _build_host(self, cfg: HostConfig) -> HostSurface:
        if cfg.bbox is None:
            raise MissingGeometryError(
                f"Host {cfg.id} has no bounding box", element_id=cfg.id
            )
        box = _box(cfg.bbox)
        kind = HostKind(cfg.kind.value)
        origin = _vector(cfg.origin) if cfg.origin is not None else box.center
        orientation = _vector(cfg.orientation) if cfg.orientation is not None else None
        try:
            frame = self._frames.build_frame(kind, origin, orientation)
        except DegenerateGeometryError as exc:
            raise DegenerateGeometryError(
                f"Host {cfg.id} has no usable orientation: {exc}", element_id=cfg.id
            ) from exc

        zones = tuple(
            ExclusionZone(
                zone_id=zone.id,
                kind=ExclusionKind(zone.kind.value),
                bounding_box=_box(zone.bbox),
            )
            for zone in cfg.exclusion_zones
        )
        obstructions = tuple(
            Obstruction(
                obstruction_id=item.id,
                kind=ObstructionKind(item.kind.value),
                bounding_box=_box(item.bbox),
                transform=self.transform_for(item.link),
            )
            for item in cfg.obstructions
        )
        faces: list[HostFace] = []
        for face in cfg.faces:
            if isinstance(face, CylindricalFaceConfig):
                faces.append(
                    CylindricalFace(
                        face_id=face.id,
                        axis_origin=_vector(face.axis_origin),
                        axis_direction=_vector(face.axis_direction),
                        radius=face.radius,
                        mid_normal=_vector(face.mid_normal),
                        outward=face.outward,
                    )
                )
            else:
                faces.append(
                    PlanarFace(
                        face_id=face.id,
                        origin=_vector(face.origin),
                        normal=_vector(face.normal),
                    )
                )

        return HostSurface(
            host_id=cfg.id,
            kind=kind,
            bounding_box=box,
            frame=frame,
            exclusion_zones=zones,
            obstructions=obstructions,
            faces=tuple(faces),
        )

    def _build_conduit(self, cfg: ConduitConfig) -> tuple[ConduitSegment, RigidTransform]:
        try:
            category = ConduitCategory(cfg.category)
        except ValueError:
            raise UnsupportedElementError(
                f"Conduit {cfg.id} has unsupported category '{cfg.category}'",
                element_id=cfg.id,
            ) from None

        profile = cfg.profile or _DEFAULT_PROFILES[category]
        if profile not in _ALLOWED_PROFILES[category]:
            raise UnsupportedElementError(
                f"Conduit {cfg.id}: profile '{profile.value}' is not supported "
                f"for {category.value}",
                element_id=cfg.id,
            )

        shape, width, height = self._cross_section(cfg, category, profile)

        if cfg.start is None or cfg.end is None:
            raise MissingGeometryError(
                f"Conduit {cfg.id} has no centerline", element_id=cfg.id
            )
        source = cfg.link or "host"
        try:
            segment = ConduitSegment.from_endpoints(
                conduit_id=cfg.id,
                category=category,
                shape=shape,
                width=width,
                height=height,
                start=_vector(cfg.start),
                end=_vector(cfg.end),
                source=source,
            )
        except DegenerateGeometryError as exc:
            raise DegenerateGeometryError(
                f"Conduit {cfg.id} has a zero-length centerline", element_id=cfg.id
            ) from exc
        return segment, self.transform_for(cfg.link)

    def _cross_section(
        self,
        cfg: ConduitConfig,
        category: ConduitCategory,
        profile: ProfileConfig,
    ) -> tuple[ShapeKind, float, float]:
        if profile is ProfileConfig.ROUND:
            names = (
                PIPE_DIAMETER_PARAMS
                if category is ConduitCategory.PIPE
                else ROUND_DUCT_DIAMETER_PARAMS
            )
            diameter = probe_parameter(cfg.parameters, names, cfg.id)
            return ShapeKind.CIRCULAR, diameter, diameter

        width = probe_parameter(cfg.parameters, WIDTH_PARAMS, cfg.id)
        height = probe_parameter(cfg.parameters, HEIGHT_PARAMS, cfg.id)
        if category is ConduitCategory.CABLE_TRAY:
            return ShapeKind.TRAY, width, height
        if profile is ProfileConfig.SQUARE:
            return ShapeKind.SQUARE, width, height
        return ShapeKind.RECTANGULAR, width, height
