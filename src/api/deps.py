"""Service dependencies for FastAPI routes."""
from __future__ import annotations

from core.config import get_settings
from domain.analysis import AnalysisService


def get_analysis_service() -> AnalysisService:
    """
    FastAPI dependency that provides an analysis service.

    A new service per request keeps analyses independent; settings
    themselves are cached.

    Returns:
        AnalysisService bound to the current settings.
    """
    return AnalysisService(get_settings())
