"""Collaborator protocols for the analysis pass.

This module defines the contracts between the analysis pass and the host
application: the model query that supplies hosts and conduits, and the
placement sink that receives the final openings. Infrastructure
implementations depend on these protocols, so the pass can be run against
a JSON scene, a live model or a test double.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from penetrations.domain.entities import (
        ConduitSegment,
        ExclusionZone,
        FinalOpening,
        HostSurface,
        Obstruction,
    )
    from penetrations.domain.exceptions import PenetrationError
    from penetrations.domain.value_objects import RigidTransform


@runtime_checkable
class ModelQueryProtocol(Protocol):
    """Read-only snapshot of the building model.

    Example:
        ```python
        class InMemoryModelQuery:
            def hosts(self) -> list[HostSurface]:
                return self._hosts
            ...
        ```
    """

    def hosts(self) -> list[HostSurface]:
        """Walls and slabs of the model."""
        ...

    def conduits(self) -> list[tuple[ConduitSegment, RigidTransform]]:
        """Conduits paired with their source transforms.

        Elements of the primary model carry the identity transform; elements
        of a linked model carry the link's transform.
        """
        ...

    def exclusion_zones(self, host_id: str) -> list[ExclusionZone]:
        """Door and window volumes inserted in a host."""
        ...

    def obstructions(self, host_id: str) -> list[Obstruction]:
        """Columns and beams a host's openings must keep clear of."""
        ...

    def element_errors(self) -> list[PenetrationError]:
        """Elements that could not be read, with the reason.

        Returns:
            Errors for hosts and conduits left out of hosts() and
            conduits(), e.g. missing geometry or unsupported categories.
        """
        ...


@runtime_checkable
class PlacementSinkProtocol(Protocol):
    """Receiver of the final opening list, e.g. a family placer."""

    def place(self, openings: list[FinalOpening]) -> None:
        """Place the given openings in the model."""
        ...
