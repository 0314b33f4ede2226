from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, desc
from typing import List
import logging

from portfolio_rescue.models.schema_models import (
    GameResultSchema,
    LeaderboardEntrySchema,
    UserSchema,
)
from portfolio_rescue.models.dc_models import GameResultCreateModel
from portfolio_rescue.models.schemas import GameResult, User

LEADERBOARD_SIZE = 10


class ReadData:
    @staticmethod
    async def read_user(user_id: int, session: AsyncSession) -> UserSchema | None:
        """Read user data from database

        Args:
            user_id (int): To identify the user

        Returns:
            UserSchema: User data, None if no such user exists
        """
        try:
            stmt = select(User).where(User.id == user_id)
            result = await session.execute(stmt)
            result = result.scalars().first()

            if result is None:
                return None

            return UserSchema.model_validate(result)
        except SQLAlchemyError as e:
            logging.error(f"Failed to read user data: {e}")
            raise

    @staticmethod
    async def read_user_by_username(username: str, session: AsyncSession) -> UserSchema | None:
        """Read user data by its unique username

        Args:
            username (str): Name the user registered with

        Returns:
            UserSchema: User data, None if no such user exists
        """
        try:
            stmt = select(User).where(User.username == username)
            result = await session.execute(stmt)
            result = result.scalars().first()

            if result is None:
                return None

            return UserSchema.model_validate(result)
        except SQLAlchemyError as e:
            logging.error(f"Failed to read user data by username: {e}")
            raise

    @staticmethod
    async def read_user_game_results(user_id: int, session: AsyncSession) -> List[GameResultSchema]:
        """Read every game result of a user, most recent first

        Args:
            user_id (int): To identify the user

        Returns:
            List[GameResultSchema]: Game results ordered by completion time
        """
        try:
            stmt = (
                select(GameResult)
                .where(GameResult.user_id == user_id)
                .order_by(desc(GameResult.completed_at), desc(GameResult.id))
            )
            result = await session.execute(stmt)
            return [GameResultSchema.model_validate(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logging.error(f"Failed to read game results: {e}")
            raise

    @staticmethod
    async def read_leaderboard(session: AsyncSession) -> List[LeaderboardEntrySchema]:
        """Read the best winning results with the users who played them

        Returns:
            List[LeaderboardEntrySchema]: Up to 10 winning results, highest final value first
        """
        try:
            stmt = (
                select(User, GameResult)
                .join(GameResult, GameResult.user_id == User.id)
                .where(GameResult.is_winner.is_(True))
                .order_by(desc(GameResult.final_value))
                .limit(LEADERBOARD_SIZE)
            )
            result = await session.execute(stmt)
            return [
                LeaderboardEntrySchema(
                    user=UserSchema.model_validate(user),
                    result=GameResultSchema.model_validate(game_result),
                )
                for user, game_result in result.all()
            ]
        except SQLAlchemyError as e:
            logging.error(f"Failed to read leaderboard: {e}")
            raise


class CreateData:
    @staticmethod
    async def add_user(username: str, session: AsyncSession) -> User:
        """Add a user to the session and flush it to get its id

        Do not commit here; the caller owns the transaction.

        Args:
            username (str): Unique username
            session (AsyncSession): AsyncSession object to interact with database
        """
        try:
            new_user = User(username=username)
            session.add(new_user)
            await session.flush()
            return new_user
        except SQLAlchemyError as e:
            logging.error(f"Failed to add user data: {e}")
            raise

    @staticmethod
    async def add_game_result(game_result: GameResultCreateModel, session: AsyncSession) -> GameResult:
        """Add a finished game's result to the session and flush it

        Do not commit here; the caller owns the transaction.

        Args:
            game_result (GameResultCreateModel): Result reported by the client
            session (AsyncSession): AsyncSession object to interact with database
        """
        try:
            new_game_result = GameResult(
                user_id=game_result.user_id,
                initial_value=round(game_result.initial_value, 2),
                final_value=round(game_result.final_value, 2),
                rounds_played=game_result.rounds_played,
                is_winner=game_result.is_winner,
            )
            session.add(new_game_result)
            await session.flush()
            return new_game_result
        except SQLAlchemyError as e:
            logging.error(f"Failed to add game result data: {e}")
            raise
