from dataclasses import asdict

from portfolio_rescue.domain.investments import InvestmentType
from portfolio_rescue.domain.market_events import MarketEvent
from portfolio_rescue.domain.performance import Feedback
from portfolio_rescue.domain.progression import GameState
from portfolio_rescue.domain.restrictions import RestrictionSet, ValidationResult
from portfolio_rescue.domain.stages import RoundStage
from portfolio_rescue.models.dc_models import (
    FeedbackModel,
    FinishedGameModel,
    GameStateModel,
    InvestmentModel,
    InvestmentResultModel,
    MarketEventModel,
    RestrictionModel,
    RoundOutcomeModel,
    RoundPerformanceModel,
    ValidationModel,
)
from portfolio_rescue.services.round_play import RoundOutcome


class DataConverter:
    """This class is used to convert engine results to client models and back."""

    def convert_investment_to_model(self, investment: InvestmentType) -> InvestmentModel:
        return InvestmentModel.model_validate(asdict(investment))

    def convert_market_event_to_model(self, market_event: MarketEvent) -> MarketEventModel:
        return MarketEventModel(
            title=market_event.title,
            description=market_event.description,
            impacts=dict(market_event.impacts),
        )

    def convert_restrictions_to_model(
        self, round_number: int, restrictions: RestrictionSet, stage: RoundStage
    ) -> RestrictionModel:
        return RestrictionModel(
            round_number=round_number,
            title=stage.title,
            subtitle=stage.subtitle,
            max_allocation=dict(restrictions.max_allocation),
            min_diversification=restrictions.min_diversification,
            description=restrictions.description,
        )

    def convert_validation_to_model(self, validation: ValidationResult) -> ValidationModel:
        return ValidationModel(is_valid=validation.is_valid, errors=list(validation.errors))

    def convert_gamestatemodel_to_gamestate(self, game_state: GameStateModel) -> GameState:
        """Convert the GameStateModel sent by the client to the engine's GameState

        Args:
            game_state (GameStateModel): State the client is currently holding

        Returns:
            GameState: State the engine advances
        """
        return GameState(
            current_round=game_state.current_round,
            portfolio_value=game_state.portfolio_value,
            phase=game_state.phase,
        )

    def convert_gamestate_to_model(self, game_state: GameState) -> GameStateModel:
        return GameStateModel(
            current_round=game_state.current_round,
            portfolio_value=game_state.portfolio_value,
            phase=game_state.phase,
        )

    def convert_round_outcome_to_model(self, outcome: RoundOutcome) -> RoundOutcomeModel:
        """Convert a played round to the RoundOutcomeModel to send client

        Args:
            outcome (RoundOutcome): Results, event, feedback and next state of the round

        Returns:
            RoundOutcomeModel: The round outcome in the type for transmission to the client
        """
        results = [
            InvestmentResultModel(
                investment=result.investment.name,
                risk=result.investment.risk,
                allocation=result.allocation,
                investment_amount=result.investment_amount,
                return_rate=result.return_rate,
                return_amount=result.return_amount,
                final_amount=result.final_amount,
                feedback=self._convert_feedback(feedback),
            )
            for result, feedback in zip(outcome.calculation.results, outcome.investment_feedback)
        ]
        finished_game = None
        if outcome.finished_game is not None:
            finished_game = FinishedGameModel.model_validate(asdict(outcome.finished_game))

        return RoundOutcomeModel(
            market_event=self.convert_market_event_to_model(outcome.market_event),
            results=results,
            total_return=outcome.calculation.total_return,
            performance=RoundPerformanceModel.model_validate(asdict(outcome.performance)),
            overall_feedback=self._convert_feedback(outcome.overall_feedback),
            game_state=self.convert_gamestate_to_model(outcome.game_state),
            finished_game=finished_game,
        )

    def _convert_feedback(self, feedback: Feedback) -> FeedbackModel:
        return FeedbackModel(title=feedback.title, message=feedback.message)
