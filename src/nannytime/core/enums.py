from __future__ import annotations

from enum import Enum


class Period(str, Enum):
    """Reporting window for the pay stub."""

    WEEK = "WEEK"
    MONTH = "MONTH"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"

    @property
    def symbol(self) -> str:
        return {
            Currency.USD: "$",
            Currency.EUR: "€",
            Currency.GBP: "£",
        }[self]


class ViewState(str, Enum):
    """Screens reachable from the bottom navigation."""

    HOME = "HOME"
    HISTORY = "HISTORY"
    PAYSTUB = "PAYSTUB"
    PROFILE = "PROFILE"


class Screen(str, Enum):
    """What the client should render right now."""

    AUTH = "AUTH"
    LOADING = "LOADING"
    HOME = "HOME"
    HISTORY = "HISTORY"
    PAYSTUB = "PAYSTUB"
    PROFILE = "PROFILE"


class SessionEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


class VoiceAction(str, Enum):
    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"
