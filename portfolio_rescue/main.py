import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from portfolio_rescue.db import engine
from portfolio_rescue.load_secrets import log_level
from portfolio_rescue.models.schemas import Base
from portfolio_rescue.routers import game, restapi

logging.basicConfig(
    level=getattr(logging, log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)


@asynccontextmanager
async def lifespan(app):
    """Create the users and game_results tables if they do not exist yet.
    This function is called to start the server.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logging.info("Start Server")
    try:
        yield
    finally:
        await engine.dispose()
        logging.info("Stop Server")


app = FastAPI(title="Portfolio Rescue", lifespan=lifespan)
app.include_router(game.game_router)
app.include_router(restapi.rest_router)
