from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio_rescue.load_secrets import db_backend

if db_backend == "postgres":
    from portfolio_rescue.create_postgres_engine import engine
else:
    from portfolio_rescue.create_sqlite_engine import engine

# Centralized session factory to avoid creating it in router modules.
Session = async_sessionmaker(
    autocommit=False,
    class_=AsyncSession,
    autoflush=True,
    expire_on_commit=False,
    bind=engine,
)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Request-scoped session for FastAPI dependencies."""
    async with Session() as session:
        yield session
