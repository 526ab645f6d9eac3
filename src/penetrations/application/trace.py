"""Append-only decision trace for one analysis pass."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_RULE = "-" * 60


class DecisionTrace:
    """Ordered text lines describing every decision taken in a pass.

    Each line is also sent to the module logger at DEBUG level.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def add(self, line: str) -> None:
        self._lines.append(line)
        logger.debug(line)

    def hr(self) -> None:
        """Append a horizontal rule."""
        self.add(_RULE)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __str__(self) -> str:
        return "\n".join(self._lines)
