import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_rescue.db import get_session
from portfolio_rescue.models.dc_models import GameResultCreateModel, UserCreateModel
from portfolio_rescue.models.schema_models import (
    GameResultSchema,
    LeaderboardEntrySchema,
    UserSchema,
)
from portfolio_rescue.services import game_result_db
from portfolio_rescue.services.game_result_db import DuplicateUsernameError, UnknownUserError

rest_router = APIRouter(prefix="/api")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


class UserAPI:
    @staticmethod
    @rest_router.post("/users", response_model=UserSchema)
    async def add_user(user: UserCreateModel, session: AsyncSession = Depends(get_session)):
        try:
            return await game_result_db.create_user(user.username, session)
        except DuplicateUsernameError:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Username already taken: {user.username}",
            )

    @staticmethod
    @rest_router.get("/users/{user_id}", response_model=UserSchema)
    async def get_user(user_id: int, session: AsyncSession = Depends(get_session)):
        user = await game_result_db.read_user(user_id, session)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user


class GameResultAPI:
    @staticmethod
    @rest_router.post("/game-results", response_model=GameResultSchema)
    async def add_game_result(
        request: Request,
        session: AsyncSession = Depends(get_session),
    ):
        """Store a finished game's result exactly as the client reports it.

        Args:
            request: JSON body with userId, initialValue, finalValue, roundsPlayed, isWinner

        Returns:
            GameResultSchema: The stored record, or 400 if the payload is invalid
        """
        try:
            # Parsed here so a missing or non-JSON body gets the same 400.
            game_result = GameResultCreateModel.model_validate_json(await request.body())
            return await game_result_db.save_game_result(game_result, session)
        except (ValidationError, UnknownUserError) as e:
            logging.error(f"Error saving game result: {e}")
            return error_response(status.HTTP_400_BAD_REQUEST, "Invalid game result data")
        except SQLAlchemyError as e:
            logging.error(f"Error saving game result: {e}")
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save game result")

    @staticmethod
    @rest_router.get("/leaderboard", response_model=List[LeaderboardEntrySchema])
    async def get_leaderboard(session: AsyncSession = Depends(get_session)):
        try:
            return await game_result_db.read_leaderboard(session)
        except SQLAlchemyError as e:
            logging.error(f"Error fetching leaderboard: {e}")
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch leaderboard")

    @staticmethod
    @rest_router.get("/game-results/{user_id}", response_model=List[GameResultSchema])
    async def get_user_game_results(user_id: str, session: AsyncSession = Depends(get_session)):
        try:
            parsed_user_id = int(user_id)
        except ValueError:
            return error_response(status.HTTP_400_BAD_REQUEST, "Invalid user ID")
        try:
            return await game_result_db.read_user_game_results(parsed_user_id, session)
        except SQLAlchemyError as e:
            logging.error(f"Error fetching user game results: {e}")
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch game results")
