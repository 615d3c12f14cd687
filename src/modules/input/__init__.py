"""Run input module."""

from src.modules.input.models import LISTING_AGE_DAYS, ProxyInput, RunInput

__all__ = [
    "LISTING_AGE_DAYS",
    "ProxyInput",
    "RunInput",
]
