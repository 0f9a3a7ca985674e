"""API route modules."""
from __future__ import annotations

from . import analysis, health

__all__ = [
    "analysis",
    "health",
]
