"""Leaderboard entry models."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class CardEntry(BaseModel):
    """Vote tally for one card within one format."""

    model_config = ConfigDict(populate_by_name=True)

    votes: int = Field(0, description="Current vote count (may be negative)")
    is_banned: bool = Field(
        False,
        alias="isBanned",
        description="Banlist membership captured when the card received its first vote",
    )


# Ordered by descending votes; ties keep first-vote order.
Leaderboard = Dict[str, CardEntry]
