from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import FALLBACK_SUMMARY
from .base import NullSummarizer, Summarizer

logger = logging.getLogger(__name__)


class SummaryService:
    """Wraps a Summarizer so a failure never reaches the pay stub."""

    def __init__(self, summarizer: Optional[Summarizer] = None, *, fallback: str = FALLBACK_SUMMARY):
        self._summarizer = summarizer or NullSummarizer()
        self._fallback = fallback

    def summarize(self, *, hours: float, earnings: float, currency: str, shift_count: int, period: str) -> str:
        try:
            text = self._summarizer.summarize(
                hours=hours,
                earnings=earnings,
                currency=currency,
                shift_count=shift_count,
                period=period,
            )
        except Exception as e:
            logger.warning("Summary generation failed, using fallback: %s", e)
            return self._fallback

        if not text or not text.strip():
            logger.warning("Summary generation returned no text, using fallback")
            return self._fallback
        return text.strip()
