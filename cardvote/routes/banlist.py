"""Banlist endpoints: manual refresh and inspection."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from cardvote.constants import BANLIST_UPDATED_MESSAGE, REFRESH_FAILED_MESSAGE
from cardvote.dependencies import get_banlist_cache
from cardvote.exceptions import FetchError
from cardvote.models import (
    BanlistFormatResponse,
    BanlistInfoResponse,
    BanlistRefreshResponse,
    ErrorResponse,
)
from cardvote.services.banlist_cache import BanlistCache

router = APIRouter(tags=["banlist"])
logger = logging.getLogger(__name__)


@router.post(
    "/refresh-banlist",
    response_model=BanlistRefreshResponse,
    responses={500: {"model": ErrorResponse}},
)
async def refresh_banlist(cache: BanlistCache = Depends(get_banlist_cache)) -> BanlistRefreshResponse:
    """Re-fetch the banlist feed and merge it into the cache."""
    try:
        result = await cache.refresh()
    except FetchError as e:
        logger.error(f"Manual banlist refresh failed: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=REFRESH_FAILED_MESSAGE,
        )

    return BanlistRefreshResponse(message=BANLIST_UPDATED_MESSAGE, **result)


@router.get("/banlist", response_model=BanlistInfoResponse)
async def banlist_info(cache: BanlistCache = Depends(get_banlist_cache)) -> BanlistInfoResponse:
    """Cache status: last refresh, last error and banned counts per format."""
    return BanlistInfoResponse(**cache.get_cache_info())


@router.get(
    "/banlist/{format_name}",
    response_model=BanlistFormatResponse,
    responses={400: {"model": ErrorResponse}},
)
async def banlist_for_format(
    format_name: str,
    cache: BanlistCache = Depends(get_banlist_cache),
) -> BanlistFormatResponse:
    """Banned cards currently cached for a format."""
    cards = cache.banned_cards(format_name)
    return BanlistFormatResponse(format=format_name, cards=cards, count=len(cards))
