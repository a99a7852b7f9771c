from __future__ import annotations

from typing import Protocol

from ..core.constants import FALLBACK_SUMMARY


class Summarizer(Protocol):
    """Narrow interface for the pay-stub note generator."""

    def summarize(self, *, hours: float, earnings: float, currency: str, shift_count: int, period: str) -> str:
        raise NotImplementedError


class NullSummarizer:
    """Used when no API key is configured."""

    def summarize(self, *, hours: float, earnings: float, currency: str, shift_count: int, period: str) -> str:
        return FALLBACK_SUMMARY
