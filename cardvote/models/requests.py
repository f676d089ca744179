"""Request models for API endpoints.

Fields are optional so that missing values are reported with the API's own
400 messages instead of a generic schema error.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AddVoteRequest(BaseModel):
    """Request body for ``POST /add-vote``."""

    model_config = ConfigDict(populate_by_name=True)

    card_name: Optional[str] = Field(None, alias="cardName", description="Exact card name")
    format: Optional[str] = Field(None, description="Format the vote applies to")


class ModifyVoteRequest(BaseModel):
    """Request body for ``POST /modify-vote``."""

    model_config = ConfigDict(populate_by_name=True)

    card_name: Optional[str] = Field(None, alias="cardName", description="Exact card name")
    format: Optional[str] = Field(None, description="Format the vote applies to")
    # Left untyped so a non-integer delta gets a specific error message.
    delta: Optional[Any] = Field(None, description="Signed amount to add to the vote count")
