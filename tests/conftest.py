import sys
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import create_app
from cardvote.services.banlist_cache import BanlistCache
from cardvote.services.vote_store import VoteStore
from config import Settings

FEED_URL = "https://banlist.test/feed.json"


@pytest.fixture
def test_settings():
    """Settings that never touch the network on startup and never sleep between retries."""
    return Settings(
        banlist_url=FEED_URL,
        banlist_refresh_on_startup=False,
        banlist_fetch_retries=0,
        banlist_backoff_base_s=0,
        log_level="DEBUG",
    )


@pytest.fixture
def feed():
    """Mutable feed served by the fake banlist source.

    Set ``feed["status"]`` to answer with an error status, ``feed["body"]``
    to a raw string to send non-JSON, or ``feed["error"]`` to an httpx
    exception to simulate a network failure.
    """
    return {"payload": {"banlist": {}}, "status": 200, "body": None, "error": None, "calls": 0}


@pytest.fixture
def transport(feed):
    def handler(request: httpx.Request) -> httpx.Response:
        feed["calls"] += 1
        if feed["error"] is not None:
            raise feed["error"]
        if feed["body"] is not None:
            return httpx.Response(feed["status"], text=feed["body"])
        return httpx.Response(feed["status"], json=feed["payload"])

    return httpx.MockTransport(handler)


@pytest.fixture
def banlist_cache(test_settings, transport):
    return BanlistCache(settings=test_settings, transport=transport)


@pytest.fixture
def vote_store(banlist_cache):
    return VoteStore(banlist_cache)


@pytest.fixture
def client(test_settings, banlist_cache, vote_store):
    """TestClient over a fresh app so no state leaks between tests."""
    app = create_app(test_settings, banlist_cache=banlist_cache, vote_store=vote_store)
    return TestClient(app)
