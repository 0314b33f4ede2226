"""DB service layer for users and finished games.

- Routers should not call CRUD helpers directly; they call this module.
- This layer owns transaction boundaries (commit/rollback).
- CRUD helpers only add and flush.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_rescue.crud import CreateData, ReadData
from portfolio_rescue.models.dc_models import GameResultCreateModel
from portfolio_rescue.models.schema_models import (
    GameResultSchema,
    LeaderboardEntrySchema,
    UserSchema,
)


class UnknownUserError(LookupError):
    pass


class DuplicateUsernameError(ValueError):
    pass


async def read_user(user_id: int, session: AsyncSession) -> UserSchema | None:
    return await ReadData.read_user(user_id, session)


async def read_user_game_results(user_id: int, session: AsyncSession) -> List[GameResultSchema]:
    return await ReadData.read_user_game_results(user_id, session)


async def read_leaderboard(session: AsyncSession) -> List[LeaderboardEntrySchema]:
    return await ReadData.read_leaderboard(session)


async def create_user(username: str, session: AsyncSession) -> UserSchema:
    if await ReadData.read_user_by_username(username, session) is not None:
        raise DuplicateUsernameError(username)
    try:
        user = await CreateData.add_user(username, session)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise DuplicateUsernameError(username) from None
    logging.info(f"Created user {user.id} ({username})")
    return UserSchema.model_validate(user)


async def save_game_result(game_result: GameResultCreateModel, session: AsyncSession) -> GameResultSchema:
    """Store one finished game.

    The reported values are trusted as they are; only the user must exist.

    Raises:
        UnknownUserError: user_id does not belong to any user.
    """
    if await ReadData.read_user(game_result.user_id, session) is None:
        raise UnknownUserError(game_result.user_id)
    try:
        stored = await CreateData.add_game_result(game_result, session)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise UnknownUserError(game_result.user_id) from None
    logging.info(
        f"Saved game result {stored.id} for user {stored.user_id}: "
        f"final_value={stored.final_value}, is_winner={stored.is_winner}"
    )
    return GameResultSchema.model_validate(stored)
