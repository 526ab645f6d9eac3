"""Opening types shared by openings of the same size within one pass."""

from __future__ import annotations

from dataclasses import dataclass

from .sizing import round_up_5


@dataclass(frozen=True)
class OpeningType:
    """A reusable opening type, named after its label."""

    name: str
    width: float
    height: float


class OpeningTypeCatalog:
    """Label to OpeningType memo for a single analysis pass.

    The first request for a label creates the type; later requests for the
    same label return it unchanged. Types carry the rounded dimensions
    the label names. Create a new catalog for every pass.
    """

    def __init__(self) -> None:
        self._types: dict[str, OpeningType] = {}

    def get_or_create(self, label: str, width: float, height: float) -> OpeningType:
        opening_type = self._types.get(label)
        if opening_type is None:
            opening_type = OpeningType(
                name=label, width=round_up_5(width), height=round_up_5(height)
            )
            self._types[label] = opening_type
        return opening_type

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, label: object) -> bool:
        return label in self._types

    @property
    def types(self) -> list[OpeningType]:
        return list(self._types.values())
