"""Market event table and the per-round draw."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import numpy as np


class UnknownMarketEventError(KeyError):
    pass


@dataclass(frozen=True)
class MarketEvent:
    title: str
    description: str
    # Only affected investments are listed; a missing name means no impact.
    impacts: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "impacts", MappingProxyType(dict(self.impacts)))

    def impact_for(self, investment_name: str) -> float:
        return self.impacts.get(investment_name, 0.0)


MARKET_EVENTS: tuple[MarketEvent, ...] = (
    MarketEvent(
        "Crypto Hack",
        "A major exchange is hacked. Crypto investments tank.",
        {"Crypto": -30},
    ),
    MarketEvent(
        "Tech Rally",
        "Strong earnings push tech stocks up.",
        {"Stocks": 25},
    ),
    MarketEvent(
        "Housing Boom",
        "Real estate values jump.",
        {"Mortgages": 15},
    ),
    MarketEvent(
        "Regulatory Crackdown",
        "New laws shake up risky lending practices.",
        {"Payment Plans": -10, "Crypto": -10},
    ),
    MarketEvent(
        "Stimulus Package",
        "The government issues a surprise stimulus.",
        {
            "Stocks": 5,
            "Bonds": 5,
            "Crypto": 5,
            "Savings": 5,
            "Mortgages": 5,
            "Payment Plans": 5,
            "Student Loans": 5,
            "Lines of Credit": 5,
        },
    ),
    MarketEvent(
        "Interest Rate Hike",
        "Central bank raises rates to fight inflation.",
        {"Bonds": 12, "Savings": 8, "Stocks": -8},
    ),
    MarketEvent(
        "Market Volatility",
        "Uncertainty causes widespread market swings.",
        {"Stocks": -15, "Crypto": -20, "Bonds": 6},
    ),
    MarketEvent(
        "Banking Crisis",
        "Major bank failures shake confidence.",
        {"Savings": -5, "Bonds": -12, "Payment Plans": -20},
    ),
    MarketEvent(
        "Innovation Breakthrough",
        "New technology promises massive returns.",
        {"Stocks": 35, "Crypto": 40},
    ),
    MarketEvent(
        "Economic Recession",
        "GDP contracts as consumer spending plummets.",
        {
            "Stocks": -25,
            "Bonds": 10,
            "Mortgages": -15,
            "Payment Plans": -25,
            "Student Loans": -20,
            "Lines of Credit": -30,
        },
    ),
    MarketEvent(
        "Education Sector Boom",
        "Government increases education funding and loan programs.",
        {"Student Loans": 20, "Bonds": 5, "Stocks": 3},
    ),
    MarketEvent(
        "Credit Market Expansion",
        "Banks ease lending standards, credit becomes more accessible.",
        {"Lines of Credit": 18, "Payment Plans": 12, "Student Loans": 8, "Mortgages": 10},
    ),
)


def draw_market_event(rng: np.random.Generator | None = None) -> MarketEvent:
    """Pick one event uniformly at random.

    Args:
        rng: Random source. A fresh unseeded generator is used when omitted.
    """
    if rng is None:
        rng = np.random.default_rng()
    return MARKET_EVENTS[int(rng.integers(len(MARKET_EVENTS)))]


def get_market_event(title: str) -> MarketEvent:
    """Look up an event by title so a previously drawn event can be replayed."""
    for event in MARKET_EVENTS:
        if event.title == title:
            return event
    raise UnknownMarketEventError(title)
