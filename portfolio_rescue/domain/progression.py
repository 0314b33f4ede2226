"""Game progression.

Round(1) -> Round(2) -> ... -> Round(10) -> Completed, with Won reachable
from any round once the portfolio hits the target. Both Won and Completed
are terminal.
"""

from dataclasses import dataclass, replace
from enum import Enum

from portfolio_rescue.domain.restrictions import FINAL_ROUND

INITIAL_PORTFOLIO_VALUE = 100_000_000.0
TARGET_PORTFOLIO_VALUE = 200_000_000.0


class GamePhase(str, Enum):
    round = "round"
    won = "won"
    completed = "completed"


@dataclass(frozen=True)
class GameState:
    current_round: int
    portfolio_value: float
    phase: GamePhase = GamePhase.round

    @property
    def is_finished(self) -> bool:
        return self.phase != GamePhase.round


@dataclass(frozen=True)
class FinishedGame:
    initial_value: float
    final_value: float
    rounds_played: int
    is_winner: bool


def create_initial_game_state() -> GameState:
    return GameState(current_round=1, portfolio_value=INITIAL_PORTFOLIO_VALUE)


def advance_round(state: GameState, total_return: float) -> GameState:
    """Apply a round's total return and move to the next phase.

    Reaching the target ends the game as Won in any round. Otherwise the
    final round ends as Completed and earlier rounds move on by one.
    `current_round` stays on the round the game ended in.

    Raises:
        ValueError: the game has already finished.
    """
    if state.is_finished:
        raise ValueError(f"Game is already finished ({state.phase.value})")

    portfolio_value = state.portfolio_value + total_return

    if portfolio_value >= TARGET_PORTFOLIO_VALUE:
        return replace(state, portfolio_value=portfolio_value, phase=GamePhase.won)
    if state.current_round >= FINAL_ROUND:
        return replace(state, portfolio_value=portfolio_value, phase=GamePhase.completed)
    return replace(
        state, current_round=state.current_round + 1, portfolio_value=portfolio_value
    )


def finish_game(state: GameState) -> FinishedGame:
    """Build the summary handed to the results store.

    Raises:
        ValueError: the game is still in progress.
    """
    if not state.is_finished:
        raise ValueError("Game is still in progress")
    return FinishedGame(
        initial_value=INITIAL_PORTFOLIO_VALUE,
        final_value=state.portfolio_value,
        rounds_played=state.current_round,
        is_winner=state.phase == GamePhase.won,
    )
