"""Round return calculation.

Each slot gets a uniform base rate from its investment's range. A market
event shifts the rate, amplified 20% per round after the first. High and
Very High risk investments then pay a concentration penalty and get a
volatility jitter that widens 15% per round.

All rates are plain float percentages; nothing is rounded here.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from portfolio_rescue.domain.investments import InvestmentType, RiskTier
from portfolio_rescue.domain.market_events import MarketEvent

EVENT_AMPLIFICATION_PER_ROUND = 0.2
VOLATILITY_GROWTH_PER_ROUND = 0.15
VOLATILITY_SPREAD = 10.0

VERY_HIGH_RISK_THRESHOLD = 30
HIGH_RISK_THRESHOLD = 50


@dataclass(frozen=True)
class InvestmentResult:
    investment: InvestmentType
    allocation: int
    investment_amount: float
    return_rate: float
    return_amount: float
    final_amount: float


@dataclass(frozen=True)
class ReturnsCalculation:
    results: list[InvestmentResult]
    total_return: float

    @property
    def total_invested(self) -> float:
        return sum(result.investment_amount for result in self.results)


def event_amplification(round_number: int) -> float:
    return 1 + (round_number - 1) * EVENT_AMPLIFICATION_PER_ROUND


def volatility_multiplier(round_number: int) -> float:
    return 1 + (round_number - 1) * VOLATILITY_GROWTH_PER_ROUND


def event_adjustment(
    market_event: MarketEvent | None, investment_name: str, round_number: int
) -> float:
    """Return the rate shift an event gives one investment this round."""
    if market_event is None:
        return 0.0
    impact = market_event.impact_for(investment_name)
    if not impact:
        return 0.0
    return impact * event_amplification(round_number)


def concentration_penalty(
    investment: InvestmentType, allocation: float, round_number: int
) -> float:
    """Rate deduction for putting too much into one risky investment.

    Very High risk: above 30%, ((a-30)/10)^1.5 * 5, growing 30% per round.
    High risk: above 50%, ((a-50)/15)^1.3 * 3, growing 20% per round.
    """
    if investment.risk == RiskTier.very_high and allocation > VERY_HIGH_RISK_THRESHOLD:
        excess = allocation - VERY_HIGH_RISK_THRESHOLD
        base_penalty = (excess / 10) ** 1.5 * 5
        return base_penalty * (1 + (round_number - 1) * 0.3)

    if investment.risk == RiskTier.high and allocation > HIGH_RISK_THRESHOLD:
        excess = allocation - HIGH_RISK_THRESHOLD
        base_penalty = (excess / 15) ** 1.3 * 3
        return base_penalty * (1 + (round_number - 1) * 0.2)

    return 0.0


def calculate_returns(
    investments: Sequence[InvestmentType],
    allocations: Sequence[int],
    portfolio_value: float,
    round_number: int,
    market_event: MarketEvent | None = None,
    rng: np.random.Generator | None = None,
) -> ReturnsCalculation:
    """Calculate one round of returns.

    The allocation is expected to have passed the gate and restriction checks
    already; nothing is validated here.

    Args:
        investments: Investments in slot order.
        allocations: Percent of the portfolio per slot.
        portfolio_value: Portfolio value at the start of the round.
        round_number: Current round, 1..10.
        market_event: Event drawn for this round, if any.
        rng: Random source. A fresh unseeded generator is used when omitted.

    Returns:
        ReturnsCalculation: per-slot results and the summed return amount.
    """
    if rng is None:
        rng = np.random.default_rng()

    results = []
    total_return = 0.0

    for investment, allocation in zip(investments, allocations):
        investment_amount = portfolio_value * allocation / 100

        return_rate = float(rng.uniform(investment.min_return, investment.max_return))
        return_rate += event_adjustment(market_event, investment.name, round_number)

        if investment.is_high_risk:
            return_rate -= concentration_penalty(investment, allocation, round_number)
            jitter = (float(rng.random()) - 0.5) * VOLATILITY_SPREAD
            return_rate += jitter * volatility_multiplier(round_number)

        return_amount = investment_amount * (return_rate / 100)
        results.append(
            InvestmentResult(
                investment=investment,
                allocation=allocation,
                investment_amount=investment_amount,
                return_rate=return_rate,
                return_amount=return_amount,
                final_amount=investment_amount + return_amount,
            )
        )
        total_return += return_amount

    return ReturnsCalculation(results=results, total_return=total_return)
