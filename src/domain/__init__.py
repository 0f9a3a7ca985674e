"""Domain layer for referral matching.

This module provides a clean separation between the matching engine and
infrastructure (CLI, API, etc.). Callers go through the domain service.
"""
from __future__ import annotations

from .analysis import AddressInspection, AnalysisService

__all__ = [
    "AnalysisService",
    "AddressInspection",
]
