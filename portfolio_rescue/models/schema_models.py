from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime


class UserSchema(BaseModel):
    id: int
    username: str
    created_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class GameResultSchema(BaseModel):
    id: int
    user_id: int
    initial_value: float
    final_value: float
    rounds_played: int
    is_winner: bool
    completed_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class LeaderboardEntrySchema(BaseModel):
    user: UserSchema
    result: GameResultSchema

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel
