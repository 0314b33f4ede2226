from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional

from portfolio_rescue.domain.investments import RiskTier
from portfolio_rescue.domain.progression import GamePhase, INITIAL_PORTFOLIO_VALUE
from portfolio_rescue.domain.restrictions import FINAL_ROUND


class CamelModel(BaseModel):
    """Base for models exchanged with the client (camelCase on the wire)."""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class InvestmentModel(CamelModel):
    name: str
    risk: RiskTier
    min_return: float
    max_return: float
    description: str
    explanation: str
    strategy: str
    real_world_example: str
    warning: Optional[str] = None


class MarketEventModel(CamelModel):
    title: str
    description: str
    impacts: Dict[str, float]


class RestrictionModel(CamelModel):
    round_number: int
    title: str
    subtitle: str
    max_allocation: Dict[str, int]
    min_diversification: int
    description: str


class AllocationSlotModel(CamelModel):
    investment: Optional[str] = None  # None while the slot is still empty
    allocation: int = 0


class AllocationCheckModel(CamelModel):
    # Any round number; ones outside the table get the final round's rules.
    round_number: int
    slots: List[AllocationSlotModel]


class ValidationModel(CamelModel):
    is_valid: bool
    errors: List[str]


class GameStateModel(CamelModel):
    current_round: int = Field(default=1, ge=1, le=FINAL_ROUND)
    portfolio_value: float = INITIAL_PORTFOLIO_VALUE
    phase: GamePhase = GamePhase.round


class RoundRequestModel(CamelModel):
    game_state: GameStateModel
    slots: List[AllocationSlotModel]
    # Replays a previously drawn event; a new one is drawn when omitted.
    market_event_title: Optional[str] = None


class FeedbackModel(CamelModel):
    title: str
    message: str


class InvestmentResultModel(CamelModel):
    investment: str
    risk: RiskTier
    allocation: int
    investment_amount: float
    return_rate: float
    return_amount: float
    final_amount: float
    feedback: FeedbackModel


class RoundPerformanceModel(CamelModel):
    round_number: int
    start_value: float
    end_value: float
    gain: float
    gain_percentage: float
    rating: str
    is_early_victory: bool


class FinishedGameModel(CamelModel):
    initial_value: float
    final_value: float
    rounds_played: int
    is_winner: bool


class RoundOutcomeModel(CamelModel):
    market_event: MarketEventModel
    results: List[InvestmentResultModel]
    total_return: float
    performance: RoundPerformanceModel
    overall_feedback: FeedbackModel
    game_state: GameStateModel
    finished_game: Optional[FinishedGameModel] = None


class UserCreateModel(CamelModel):
    username: str = Field(min_length=1)


class GameResultCreateModel(CamelModel):
    user_id: int
    initial_value: float
    final_value: float
    rounds_played: int
    is_winner: bool = False
