"""Core module exports."""
from __future__ import annotations

from core.config import Settings, get_settings, reload_settings
from core.exceptions import (
    ReferralMatcherError,
    ConfigurationError,
    ValidationError,
    InvalidInputError,
    ExportError,
)
from core.logging_config import (
    setup_logging,
    get_logger,
    get_context_logger,
    log_timed_operation,
    JSONFormatter,
    ContextLogger,
)
from core.types import AnalysisReport, DuplicateGroup, RewardEntry

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "reload_settings",
    # Types
    "AnalysisReport",
    "DuplicateGroup",
    "RewardEntry",
    # Exceptions
    "ReferralMatcherError",
    "ConfigurationError",
    "ValidationError",
    "InvalidInputError",
    "ExportError",
    # Logging
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "log_timed_operation",
    "JSONFormatter",
    "ContextLogger",
]
