"""Custom exceptions for the referral matcher application."""
from __future__ import annotations


class ReferralMatcherError(Exception):
    """Base exception for all application errors."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ReferralMatcherError):
    """Raised when required configuration is missing or invalid."""

    pass


# =============================================================================
# Input Errors
# =============================================================================


class ValidationError(ReferralMatcherError):
    """Raised when caller-supplied data fails validation."""

    pass


class InvalidInputError(ValidationError):
    """Raised when the analysis is called with something other than text."""

    pass


# =============================================================================
# Export Errors
# =============================================================================


class ExportError(ReferralMatcherError):
    """Raised when a report cannot be rendered in the requested format."""

    pass


__all__ = [
    "ReferralMatcherError",
    "ConfigurationError",
    "ValidationError",
    "InvalidInputError",
    "ExportError",
]
