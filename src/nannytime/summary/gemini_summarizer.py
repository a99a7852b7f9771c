"""Google Gemini implementation of the Summarizer interface."""

from __future__ import annotations

import logging
from typing import Optional

from google import genai

logger = logging.getLogger(__name__)

DEFAULT_MODEL_ID = "gemini-1.5-flash"

PROMPT_TEMPLATE = """
You are a helpful payroll assistant.
The nanny worked {hours:.2f} hours this {period}.
Total earned: {currency} {earnings:.2f}.
Number of shifts: {shift_count}.
Write a very short, cheerful, encouraging note (max 2 sentences) for the pay stub.
"""


def build_prompt(*, hours: float, earnings: float, currency: str, shift_count: int, period: str) -> str:
    return PROMPT_TEMPLATE.format(
        hours=hours,
        earnings=earnings,
        currency=currency,
        shift_count=shift_count,
        period=period.lower(),
    ).strip()


class GeminiSummarizer:
    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        client: Optional[genai.Client] = None,
        model_name: str = DEFAULT_MODEL_ID,
    ):
        if not api_key and client is None:
            raise ValueError("GOOGLE_API_KEY not configured")
        # client is injectable for tests
        self._client = client or genai.Client(api_key=api_key)
        self._model_id = model_name
        logger.info("GeminiSummarizer initialized (model=%s)", model_name)

    def summarize(self, *, hours: float, earnings: float, currency: str, shift_count: int, period: str) -> str:
        prompt = build_prompt(
            hours=hours,
            earnings=earnings,
            currency=currency,
            shift_count=shift_count,
            period=period,
        )
        response = self._client.models.generate_content(model=self._model_id, contents=prompt)
        return (getattr(response, "text", "") or "").strip()
