"""Contracts module - protocols for cross-layer communication.

Example:
    ```python
    from penetrations.contracts import ModelQueryProtocol

    def count_hosts(query: ModelQueryProtocol) -> int:
        return len(query.hosts())
    ```
"""

from .protocols import (
    ModelQueryProtocol as ModelQueryProtocol,
    PlacementSinkProtocol as PlacementSinkProtocol,
)

__all__ = [
    "ModelQueryProtocol",
    "PlacementSinkProtocol",
]
