from __future__ import annotations

from typing import Optional

from ..core.enums import VoiceAction

CLOCK_IN_PHRASES = ("arrived", "here", "clock in", "start")
CLOCK_OUT_PHRASES = ("left", "gone", "clock out", "stop")


def interpret(transcript: str, *, has_active_shift: bool) -> Optional[VoiceAction]:
    """Map a speech transcript to an action valid for the current state."""
    text = (transcript or "").lower()
    if any(p in text for p in CLOCK_IN_PHRASES):
        return None if has_active_shift else VoiceAction.CLOCK_IN
    if any(p in text for p in CLOCK_OUT_PHRASES):
        return VoiceAction.CLOCK_OUT if has_active_shift else None
    return None
