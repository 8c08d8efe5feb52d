"""Canonical player model shared by the catalog source, views and favorites."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Player(BaseModel):
    """Single catalog entry as served by the players endpoint."""

    player_id: str = Field(..., min_length=1, alias="id")
    name: str = Field(..., alias="playerName")
    team: str = Field(..., alias="teamName")
    is_captain: bool = Field(default=False, alias="isCaptain")
    age: int = Field(..., ge=0)
    minutes_played: int = Field(..., ge=0, alias="minutesPlayed")
    passing_accuracy: float = Field(..., ge=0.0, le=100.0, alias="passingAccuracy")
    image_url: str = Field(default="", alias="image")
    position: str = ""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("player_id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
