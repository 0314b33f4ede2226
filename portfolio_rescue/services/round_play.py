from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np

from portfolio_rescue.domain.investments import InvestmentType, get_investment
from portfolio_rescue.domain.market_events import (
    MarketEvent,
    draw_market_event,
    get_market_event,
)
from portfolio_rescue.domain.performance import (
    Feedback,
    RoundPerformance,
    investment_feedback,
    overall_feedback,
    summarize_round,
)
from portfolio_rescue.domain.progression import (
    FinishedGame,
    GameState,
    advance_round,
    finish_game,
)
from portfolio_rescue.domain.restrictions import (
    ValidationResult,
    check_allocation_gate,
    validate_allocations,
)
from portfolio_rescue.domain.returns import ReturnsCalculation, calculate_returns


class AllocationRejectedError(Exception):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class RoundOutcome:
    market_event: MarketEvent
    calculation: ReturnsCalculation
    performance: RoundPerformance
    investment_feedback: list[Feedback]
    overall_feedback: Feedback
    game_state: GameState
    finished_game: FinishedGame | None


def resolve_investments(names: Sequence[str | None]) -> list[InvestmentType | None]:
    """Map slot names to catalog entries, keeping empty slots as None."""
    return [None if name is None else get_investment(name) for name in names]


def check_allocation(
    investments: Sequence[InvestmentType | None],
    allocations: Sequence[int],
    round_number: int,
) -> ValidationResult:
    """Run the completeness gate, then the round restrictions.

    Restriction errors are only reported once the gate passes.
    """
    gate = check_allocation_gate(investments, allocations)
    if not gate.is_valid:
        return gate
    return validate_allocations(investments, allocations, round_number)


def play_round(
    *,
    state: GameState,
    investment_names: Sequence[str | None],
    allocations: Sequence[int],
    market_event_title: str | None = None,
    rng: np.random.Generator | None = None,
) -> RoundOutcome:
    """Play one round: validate, pick the event, calculate and advance.

    Kept outside the HTTP router module so it can be driven directly.

    Raises:
        UnknownInvestmentError: a slot names an investment not in the catalog.
        UnknownMarketEventError: market_event_title is not a known event.
        AllocationRejectedError: the allocation fails the gate or restrictions.
        ValueError: the game has already finished.
    """
    if state.is_finished:
        raise ValueError(f"Game is already finished ({state.phase.value})")

    investments = resolve_investments(investment_names)
    validation = check_allocation(investments, allocations, state.current_round)
    if not validation.is_valid:
        logging.info(f"Round {state.current_round} allocation rejected: {validation.errors}")
        raise AllocationRejectedError(validation.errors)

    if rng is None:
        rng = np.random.default_rng()
    if market_event_title is None:
        market_event = draw_market_event(rng)
    else:
        market_event = get_market_event(market_event_title)

    calculation = calculate_returns(
        investments,
        allocations,
        state.portfolio_value,
        state.current_round,
        market_event,
        rng,
    )
    performance = summarize_round(
        state.current_round, state.portfolio_value, calculation.total_return
    )
    next_state = advance_round(state, calculation.total_return)
    logging.info(
        f"Round {state.current_round} played with '{market_event.title}': "
        f"{state.portfolio_value:.2f} -> {next_state.portfolio_value:.2f} "
        f"({next_state.phase.value})"
    )

    return RoundOutcome(
        market_event=market_event,
        calculation=calculation,
        performance=performance,
        investment_feedback=[investment_feedback(r) for r in calculation.results],
        overall_feedback=overall_feedback(calculation),
        game_state=next_state,
        finished_game=finish_game(next_state) if next_state.is_finished else None,
    )
