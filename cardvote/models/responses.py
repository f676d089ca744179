"""Response models for API endpoints."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .leaderboard import CardEntry


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""
    error: str = Field(..., description="Human readable error message")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str = Field(..., description="Outcome of the operation")


class AddVoteResponse(BaseModel):
    """Response model for the add-vote endpoint."""
    message: str = Field(..., description="Outcome of the operation")
    leaderboard: Dict[str, CardEntry] = Field(..., description="Updated leaderboard for the format")


class ModifyVoteResponse(BaseModel):
    """Response model for the modify-vote endpoint."""
    new_vote_count: int = Field(..., alias="newVoteCount", description="Vote count after applying the delta")


class BanlistRefreshResponse(BaseModel):
    """Response model for the refresh-banlist endpoint."""
    message: str = Field(..., description="Outcome of the operation")
    refreshed_at: str = Field(..., description="Refresh timestamp")
    formats: Dict[str, int] = Field(default_factory=dict, description="Banned card count per format")
    cards_added: int = Field(0, description="Cards newly added to the banlist by this refresh")


class BanlistFormatResponse(BaseModel):
    """Banned cards currently cached for one format."""
    format: str = Field(..., description="Format name")
    cards: List[str] = Field(default_factory=list, description="Banned card names, sorted")
    count: int = Field(0, description="Number of banned cards")


class BanlistInfoResponse(BaseModel):
    """Status of the banlist cache."""
    is_loaded: bool = Field(..., description="Whether a refresh has succeeded since startup")
    refreshed_at: Optional[str] = Field(None, description="Timestamp of the last successful refresh")
    last_error: Optional[str] = Field(None, description="Error from the last failed refresh, if any")
    source_url: str = Field(..., description="Banlist feed URL")
    formats: Dict[str, int] = Field(default_factory=dict, description="Banned card count per format")
