"""Pytest configuration for portfolio-rescue tests.

Fixtures:
    - make_fixed_rng: factory for a random source with fixed draws
    - db_engine / session_maker: isolated aiosqlite database per test
    - app / client: FastAPI app wired to the test database, httpx client
"""

from typing import AsyncGenerator

import numpy as np
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from portfolio_rescue.db import get_session
from portfolio_rescue.models.schemas import Base
from portfolio_rescue.routers import game, restapi


class FixedRandom:
    """Stands in for numpy's Generator with predictable draws.

    uniform() returns the low or high end of the range, random() a fixed
    value and integers() a fixed index.
    """

    def __init__(self, uniform: str = "low", random: float = 0.5, index: int = 0):
        self._uniform = uniform
        self._random = random
        self._index = index

    def uniform(self, low, high):
        return low if self._uniform == "low" else high

    def random(self):
        return self._random

    def integers(self, high):
        return self._index


@pytest.fixture()
def make_fixed_rng():
    return FixedRandom


@pytest.fixture()
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
def app(session_maker) -> FastAPI:
    app = FastAPI()
    app.include_router(game.game_router)
    app.include_router(restapi.rest_router)

    async def override_get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[game.get_rng] = lambda: np.random.default_rng(2024)
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
