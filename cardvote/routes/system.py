"""System endpoints such as status and root."""
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends

from cardvote.constants import API_VERSION, FORMATS, SERVICE_NAME
from cardvote.dependencies import get_banlist_cache, get_vote_store
from cardvote.services.banlist_cache import BanlistCache
from cardvote.services.vote_store import VoteStore

router = APIRouter(tags=["system"])


@router.get("/api/v1/status", response_model=Dict[str, Any])
async def api_status(
    store: VoteStore = Depends(get_vote_store),
    cache: BanlistCache = Depends(get_banlist_cache),
) -> Dict[str, Any]:
    """API status endpoint with vote totals and banlist state."""
    return {
        "success": True,
        "status": "online",
        "timestamp": datetime.utcnow().isoformat(),
        "version": API_VERSION,
        "formats": list(FORMATS),
        "votes": store.summary(),
        "banlist": cache.get_cache_info(),
    }


@router.get("/", response_model=Dict[str, Any])
async def root() -> Dict[str, Any]:
    """Root endpoint."""
    return {
        "success": True,
        "message": SERVICE_NAME,
        "version": API_VERSION,
        "docs": "/docs",
        "status": "/api/v1/status",
    }


@router.get("/health", response_model=Dict[str, Any])
async def health_check() -> Dict[str, Any]:
    """Health check endpoint expected by hosting environments."""
    return {
        "success": True,
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "service": SERVICE_NAME,
    }
