"""Matching parameters shared by the normalizer, fingerprint and matcher."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from core.config import Settings


@dataclass(slots=True, frozen=True)
class MatchingRules:
    """
    Immutable knobs for address comparison.

    Engine functions take a rules object explicitly instead of reading
    settings, so an analysis is a pure function of its inputs.
    """

    prefix_length: int = 5
    suffix_length: int = 4
    strict: bool = False
    mask_fill: str = "******"

    def __post_init__(self) -> None:
        if self.prefix_length < 1 or self.suffix_length < 1:
            raise ConfigurationError(
                f"fingerprint edges must be positive (prefix={self.prefix_length}, suffix={self.suffix_length})"
            )

    @property
    def minimum_length(self) -> int:
        return self.prefix_length + self.suffix_length

    @classmethod
    def from_settings(cls, settings: "Settings") -> "MatchingRules":
        return cls(
            prefix_length=settings.fingerprint_prefix_length,
            suffix_length=settings.fingerprint_suffix_length,
            strict=settings.strict_normalization,
            mask_fill=settings.mask_fill,
        )


DEFAULT_RULES = MatchingRules()

__all__ = ["MatchingRules", "DEFAULT_RULES"]
