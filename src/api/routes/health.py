"""Health check routes."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from core.config import get_settings

router = APIRouter()


@router.get("")
async def health_check() -> Dict[str, Any]:
    """Basic health check - always returns OK."""
    settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@router.get("/detailed")
async def detailed_health_check() -> Dict[str, Any]:
    """Health check including the active matching configuration."""
    settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "matching": {
            "prefix_length": settings.fingerprint_prefix_length,
            "suffix_length": settings.fingerprint_suffix_length,
            "normalization_mode": settings.normalization_mode,
            "reward_tiers": settings.reward_tiers,
            "reward_token": settings.reward_token,
        },
    }
