"""Aggregate exports for API models."""
from .leaderboard import CardEntry, Leaderboard
from .requests import AddVoteRequest, ModifyVoteRequest
from .responses import (
    AddVoteResponse,
    BanlistFormatResponse,
    BanlistInfoResponse,
    BanlistRefreshResponse,
    ErrorResponse,
    MessageResponse,
    ModifyVoteResponse,
)

__all__ = [
    "CardEntry",
    "Leaderboard",
    "AddVoteRequest",
    "ModifyVoteRequest",
    "AddVoteResponse",
    "BanlistFormatResponse",
    "BanlistInfoResponse",
    "BanlistRefreshResponse",
    "ErrorResponse",
    "MessageResponse",
    "ModifyVoteResponse",
]
