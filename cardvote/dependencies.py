"""FastAPI dependencies resolving the stores attached to the running app."""
from fastapi import Request

from cardvote.services.banlist_cache import BanlistCache
from cardvote.services.vote_store import VoteStore


def get_vote_store(request: Request) -> VoteStore:
    return request.app.state.vote_store


def get_banlist_cache(request: Request) -> BanlistCache:
    return request.app.state.banlist_cache
