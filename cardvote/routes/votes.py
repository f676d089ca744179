"""Vote tally endpoints: add, modify, leaderboard and reset."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from cardvote.constants import MODIFY_VOTE_REQUIRED_MESSAGE, VOTE_ADDED_MESSAGE, VOTES_RESET_MESSAGE
from cardvote.dependencies import get_vote_store
from cardvote.exceptions import ValidationError
from cardvote.models import (
    AddVoteRequest,
    AddVoteResponse,
    ErrorResponse,
    Leaderboard,
    MessageResponse,
    ModifyVoteRequest,
    ModifyVoteResponse,
)
from cardvote.services.vote_store import VoteStore

router = APIRouter(tags=["votes"])
logger = logging.getLogger(__name__)


@router.post(
    "/add-vote",
    response_model=AddVoteResponse,
    responses={400: {"model": ErrorResponse}},
)
async def add_vote(
    request: Optional[AddVoteRequest] = Body(None),
    store: VoteStore = Depends(get_vote_store),
) -> AddVoteResponse:
    """Add one vote for a card in a format and return that format's leaderboard."""
    request = request or AddVoteRequest()
    leaderboard = store.add_vote(request.format, request.card_name)
    return AddVoteResponse(message=VOTE_ADDED_MESSAGE, leaderboard=leaderboard)


@router.post(
    "/modify-vote",
    response_model=ModifyVoteResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def modify_vote(
    request: Optional[ModifyVoteRequest] = Body(None),
    store: VoteStore = Depends(get_vote_store),
) -> ModifyVoteResponse:
    """Apply a signed delta to a card that already has votes."""
    request = request or ModifyVoteRequest()
    if not request.card_name or not request.format or request.delta is None:
        raise ValidationError(MODIFY_VOTE_REQUIRED_MESSAGE)

    new_count = store.modify_vote(request.format, request.card_name, request.delta)
    logger.info(f"Modified {request.format} votes for {request.card_name} by {request.delta} -> {new_count}")
    return ModifyVoteResponse(newVoteCount=new_count)


@router.get(
    "/leaderboard/{format_name}",
    response_model=Leaderboard,
    responses={400: {"model": ErrorResponse}},
)
async def get_leaderboard(
    format_name: str,
    limit: Optional[int] = Query(None, ge=1, description="Only return the top N cards"),
    store: VoteStore = Depends(get_vote_store),
) -> Leaderboard:
    """Cards of a format ranked by votes, highest first."""
    return store.get_leaderboard(format_name, limit)


@router.post("/reset", response_model=MessageResponse)
async def reset_votes(store: VoteStore = Depends(get_vote_store)) -> MessageResponse:
    """Clear every format's votes. The banlist is kept."""
    store.reset()
    return MessageResponse(message=VOTES_RESET_MESSAGE)
