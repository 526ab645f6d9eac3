"""Pytest configuration and shared fixtures for penetration tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from penetrations.domain import (
    BoundingBox3D,
    HostKind,
    HostSurface,
    IntersectionRecord,
    ShapeKind,
    Vector3,
)
from penetrations.domain.services import CoordinateFrameMapper


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end tests through the scene loader")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Domain builders
# =============================================================================


@pytest.fixture
def slab_host() -> HostSurface:
    """Slab centred on the world origin, local frame equal to world axes.

    Box: x[-1000, 1000], y[-1000, 1000], z[-100, 100].
    """
    frame = CoordinateFrameMapper().build_frame(HostKind.SLAB, Vector3.zero())
    return HostSurface(
        host_id="S1",
        kind=HostKind.SLAB,
        bounding_box=BoundingBox3D(
            Vector3(-1000.0, -1000.0, -100.0), Vector3(1000.0, 1000.0, 100.0)
        ),
        frame=frame,
    )


@pytest.fixture
def wall_host() -> HostSurface:
    """200 mm wall along X with its exterior facing +Y.

    Box: x[0, 6000], y[0, 200], z[0, 3000]. Local frame origin is the box
    centre; Right = -X, Up = +Z, Normal = +Y.
    """
    box = BoundingBox3D(Vector3(0.0, 0.0, 0.0), Vector3(6000.0, 200.0, 3000.0))
    frame = CoordinateFrameMapper().build_frame(
        HostKind.WALL, box.center, Vector3(0.0, 1.0, 0.0)
    )
    return HostSurface(host_id="W1", kind=HostKind.WALL, bounding_box=box, frame=frame)


@pytest.fixture
def make_record(slab_host: HostSurface) -> Callable[..., IntersectionRecord]:
    """Factory for sized records on the slab fixture.

    Local coordinates equal world coordinates on the slab, so (u, v) is
    also the world (x, y) of the opening centre.
    """

    def _make(
        conduit_id: str,
        u: float,
        v: float,
        width: float = 100.0,
        height: float | None = None,
        axis: Vector3 | None = None,
        host_id: str = "S1",
        shape: ShapeKind = ShapeKind.RECTANGULAR,
    ) -> IntersectionRecord:
        axis = axis or Vector3(0.0, 0.0, 1.0)
        height = width if height is None else height
        local = Vector3(u, v, 0.0)
        return IntersectionRecord(
            host_id=host_id,
            conduit_id=conduit_id,
            host_kind=slab_host.kind,
            shape=shape,
            world_point=slab_host.frame.to_world_point(local),
            local_point=local,
            world_axis=axis,
            local_axis=axis,
            element_width=width,
            element_height=height,
            opening_width=width,
            opening_height=height,
        )

    return _make


# =============================================================================
# Scene fixtures
# =============================================================================

SCENE: dict[str, Any] = {
    "schema_version": "1.0",
    "settings": {"clearance_mm": 50, "merge_threshold_mm": 0},
    "hosts": [
        {
            "id": "W1",
            "kind": "wall",
            "bbox": {"min": [0, 0, 0], "max": [6000, 200, 3000]},
            "orientation": [0, 1, 0],
            "exclusion_zones": [
                {
                    "id": "D1",
                    "kind": "door",
                    "bbox": {"min": [2500, 0, 0], "max": [3500, 200, 2100]},
                }
            ],
        },
        {
            "id": "S1",
            "kind": "slab",
            "bbox": {"min": [0, 1000, 3000], "max": [2000, 3000, 3200]},
        },
    ],
    "conduits": [
        {
            "id": "P1",
            "category": "pipe",
            "start": [1000, -500, 1500],
            "end": [1000, 700, 1500],
            "parameters": {"outer_diameter": 100},
        },
        {
            "id": "P2",
            "category": "pipe",
            "start": [1150, -500, 1500],
            "end": [1150, 700, 1500],
            "parameters": {"diameter": 100},
        },
        {
            "id": "P3",
            "category": "pipe",
            "start": [3000, -500, 1000],
            "end": [3000, 700, 1000],
            "parameters": {"outer_diameter": 100},
        },
        {
            "id": "D1",
            "category": "duct",
            "start": [4000, -500, 2000],
            "end": [4000, 700, 2000],
            "parameters": {"width": 400, "height": 200},
        },
        {
            "id": "V1",
            "category": "pipe",
            "start": [500, 2000, 2500],
            "end": [500, 2000, 3700],
            "parameters": {"nominal_diameter": 150},
        },
        {
            "id": "X1",
            "category": "sprinkler",
            "start": [5000, -500, 1000],
            "end": [5000, 700, 1000],
        },
        {
            "id": "P9",
            "category": "pipe",
            "start": [5500, -500, 1000],
            "end": [5500, 700, 1000],
            "parameters": {},
        },
    ],
}


@pytest.fixture
def scene_data() -> dict[str, Any]:
    """Scene with one wall, one slab and a mix of conduits.

    Expected without merging: P1, P2, D1 and V1 get openings; P3 sits in
    door D1 and is excluded; X1 (unsupported category) and P9 (no
    diameter) are skipped.
    """
    return copy.deepcopy(SCENE)


@pytest.fixture
def scene_file(tmp_path: Path, scene_data: dict[str, Any]) -> Path:
    """The scene_data fixture written to a JSON file."""
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(scene_data), encoding="utf-8")
    return path
