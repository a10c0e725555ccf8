from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


class SessionModel(BaseModel):
    """One identity's game state. All counters are unsigned."""

    model_config = ConfigDict(from_attributes=True)

    total_score: int = Field(default=0, ge=0)
    turn_score: int = Field(default=0, ge=0)
    last_roll: int = Field(default=0, ge=0, le=6)
    round: int = Field(default=0, ge=0)
    turn: int = Field(default=0, ge=0)
    game_over: bool = False
    completed: bool = False
    games_played: int = Field(default=0, ge=0)


class AggregateModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slot: str
    total_completions: int = Field(default=0, ge=0)


class GlobalCompletionsModel(BaseModel):
    total_completions: int


class SessionFieldModel(str, Enum):
    last_roll = "last_roll"
    round = "round"
    turn = "turn"
    turn_score = "turn_score"
    total_score = "total_score"
    game_over = "game_over"
    user_completions = "user_completions"


class SessionFieldValueModel(BaseModel):
    identity: str
    field: SessionFieldModel
    value: int | bool
