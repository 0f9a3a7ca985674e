"""Ingestion subpackage exports."""
from .parser import parse_amount, parse_invite_text, parse_referrer_text

__all__ = [
    "parse_amount",
    "parse_invite_text",
    "parse_referrer_text",
]
