"""Application layer - use cases and orchestration."""

from .commands import AnalyzePenetrationsCommand
from .dtos import AnalysisOutput
from .factory import ServiceFactory, get_factory
from .trace import DecisionTrace

__all__ = [
    "AnalysisOutput",
    "AnalyzePenetrationsCommand",
    "DecisionTrace",
    "ServiceFactory",
    "get_factory",
]
