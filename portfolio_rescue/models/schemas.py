from sqlalchemy import ForeignKey
from sqlalchemy.orm import DeclarativeBase, relationship
from sqlalchemy.schema import Column
from sqlalchemy.types import Boolean, DateTime, Integer, Numeric, String
from datetime import datetime


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    game_results = relationship(
        "GameResult",
        back_populates="user",
        cascade="all, delete",
    )


class GameResult(Base):
    __tablename__ = "game_results"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    # Two decimals, wide enough for values above $100M.
    initial_value = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    final_value = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    rounds_played = Column(Integer, nullable=False)
    is_winner = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=False, default=datetime.now)

    user = relationship(
        "User",
        back_populates="game_results",
    )
