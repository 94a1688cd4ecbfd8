"""Leaderboard models for API responses."""

from pydantic import BaseModel, Field, ConfigDict


class LeaderboardEntry(BaseModel):
    """
    A single entry in the leaderboard.
    """
    model_config = ConfigDict(populate_by_name=True)

    rank: int = Field(ge=1)
    player: str
    score: str = Field(description="Best score as a decimal string")
    playTime: str = Field(description="Play time of the best score, decimal string")


class LeaderboardResponse(BaseModel):
    """Body of GET /api/data."""
    model_config = ConfigDict(populate_by_name=True)

    totalPlayers: int
    leaderboard: list[LeaderboardEntry]
