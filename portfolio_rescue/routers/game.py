import logging
from typing import List

import numpy as np
from fastapi import APIRouter, Depends, HTTPException, status

from portfolio_rescue.converter import DataConverter
from portfolio_rescue.domain.investments import UnknownInvestmentError, list_investments
from portfolio_rescue.domain.market_events import (
    MARKET_EVENTS,
    UnknownMarketEventError,
    draw_market_event,
)
from portfolio_rescue.domain.progression import create_initial_game_state
from portfolio_rescue.domain.restrictions import restrictions_for
from portfolio_rescue.domain.stages import stage_for
from portfolio_rescue.models.dc_models import (
    AllocationCheckModel,
    GameStateModel,
    InvestmentModel,
    MarketEventModel,
    RestrictionModel,
    RoundOutcomeModel,
    RoundRequestModel,
    ValidationModel,
)
from portfolio_rescue.services.round_play import (
    AllocationRejectedError,
    check_allocation,
    play_round,
    resolve_investments,
)

game_router = APIRouter(prefix="/api")
data_converter = DataConverter()


def get_rng() -> np.random.Generator:
    """Random source for event draws and returns; overridden in tests."""
    return np.random.default_rng()


class CatalogAPI:
    @staticmethod
    @game_router.get("/investments", response_model=List[InvestmentModel])
    async def get_investments():
        return [data_converter.convert_investment_to_model(inv) for inv in list_investments()]

    @staticmethod
    @game_router.get("/market-events", response_model=List[MarketEventModel])
    async def get_market_events():
        return [data_converter.convert_market_event_to_model(event) for event in MARKET_EVENTS]

    @staticmethod
    @game_router.get("/market-events/random", response_model=MarketEventModel)
    async def get_random_market_event(rng: np.random.Generator = Depends(get_rng)):
        return data_converter.convert_market_event_to_model(draw_market_event(rng))

    @staticmethod
    @game_router.get("/restrictions/{round_number}", response_model=RestrictionModel)
    async def get_restrictions(round_number: int):
        return data_converter.convert_restrictions_to_model(
            round_number, restrictions_for(round_number), stage_for(round_number)
        )


class RoundAPI:
    @staticmethod
    @game_router.get("/game-state/initial", response_model=GameStateModel)
    async def get_initial_game_state():
        return data_converter.convert_gamestate_to_model(create_initial_game_state())

    @staticmethod
    @game_router.post("/allocations/validate", response_model=ValidationModel)
    async def validate_allocation(allocation: AllocationCheckModel):
        """Check an allocation without playing the round.

        Args:
            allocation (AllocationCheckModel): Round number and the 4 slots

        Returns:
            ValidationModel: isValid and the messages to show the player
        """
        try:
            investments = resolve_investments([slot.investment for slot in allocation.slots])
        except UnknownInvestmentError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown investment: {e.args[0]}",
            )
        validation = check_allocation(
            investments,
            [slot.allocation for slot in allocation.slots],
            allocation.round_number,
        )
        return data_converter.convert_validation_to_model(validation)

    @staticmethod
    @game_router.post("/rounds", response_model=RoundOutcomeModel)
    async def play(
        round_request: RoundRequestModel,
        rng: np.random.Generator = Depends(get_rng),
    ):
        """Play one round from the state the client sends.

        Args:
            round_request (RoundRequestModel):
                    game_state: GameStateModel
                    slots: List[AllocationSlotModel]
                    market_event_title: str | None

        Returns:
            RoundOutcomeModel: results, event, feedback and the next game state
        """
        state = data_converter.convert_gamestatemodel_to_gamestate(round_request.game_state)
        try:
            outcome = play_round(
                state=state,
                investment_names=[slot.investment for slot in round_request.slots],
                allocations=[slot.allocation for slot in round_request.slots],
                market_event_title=round_request.market_event_title,
                rng=rng,
            )
        except AllocationRejectedError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"errors": e.errors},
            )
        except UnknownInvestmentError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown investment: {e.args[0]}",
            )
        except UnknownMarketEventError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown market event: {e.args[0]}",
            )
        except ValueError as e:
            logging.info(f"Round rejected: {e}")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

        return data_converter.convert_round_outcome_to_model(outcome)
