"""Application use cases."""

from .preview_stats import (
    ListModsUseCase,
    ListUnitsRequest,
    ListUnitsUseCase,
    PreviewStatsRequest,
    PreviewStatsUseCase,
    UseCaseResult,
)

__all__ = [
    "ListModsUseCase",
    "ListUnitsRequest",
    "ListUnitsUseCase",
    "PreviewStatsRequest",
    "PreviewStatsUseCase",
    "UseCaseResult",
]
