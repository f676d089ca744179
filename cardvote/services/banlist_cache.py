"""
Banlist cache for the supported formats.

Banned card names are fetched from a bulk JSON feed shaped like
``{"banlist": {"Modern": ["Card", ...], ...}}`` and kept in memory until the
process exits. Refreshes only ever add names: a card that disappears from the
feed stays cached until restart.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import httpx

from cardvote.constants import FORMATS, is_valid_format
from cardvote.exceptions import FetchError, InvalidFormatError
from cardvote.utils.timeout_config import get_external_client
from config import Settings, get_settings

logger = logging.getLogger(__name__)


class BanlistCache:
    """In-memory mapping of format -> set of banned card names."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        source_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize an empty banlist cache.

        Args:
            settings: Settings providing timeouts and retry policy. Defaults to
                the process settings.
            source_url: Feed URL. Defaults to ``settings.banlist_url``.
            transport: Optional httpx transport, used to fake the feed in tests.
        """
        self.settings = settings or get_settings()
        self.source_url = source_url or self.settings.banlist_url
        self._transport = transport
        self._banlist: Dict[str, Set[str]] = {}
        self._refreshed_at: Optional[str] = None
        self._last_error: Optional[str] = None
        self._refresh_lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._refreshed_at is not None

    async def refresh(self) -> Dict[str, Any]:
        """
        Fetch the feed and merge its banned cards into the cache.

        Every supported format ends up with an entry, empty when the feed does
        not mention it. Formats outside the supported set are ignored. The
        merged state is swapped in only once the whole payload has been
        validated.

        Returns:
            Dictionary with the refresh timestamp, the banned count per format
            and the number of names added by this refresh.

        Raises:
            FetchError: the feed was unreachable, timed out, answered with an
                error status or returned a malformed payload. The cache is left
                exactly as it was.
        """
        async with self._refresh_lock:
            logger.info(f"Refreshing banlist from {self.source_url}...")
            try:
                payload = await self._fetch_payload()
                updated, cards_added = self._merge(payload)
            except FetchError as e:
                self._last_error = e.message
                logger.error(f"Failed to refresh banlist: {e.message}")
                raise

            self._banlist = updated
            self._refreshed_at = datetime.utcnow().isoformat()
            self._last_error = None

            counts = self.format_counts()
            logger.info(
                f"Banlist refreshed: {sum(counts.values()):,} banned cards across "
                f"{len(counts)} formats ({cards_added} new)"
            )
            return {
                "refreshed_at": self._refreshed_at,
                "formats": counts,
                "cards_added": cards_added,
            }

    async def _fetch_payload(self) -> Any:
        """GET the feed, retrying network errors, timeouts and 5xx responses.

        A malformed URL fails at once.
        """
        attempts = self.settings.banlist_fetch_retries + 1

        async with get_external_client(self.settings, self._transport) as client:
            for attempt in range(1, attempts + 1):
                try:
                    response = await client.get(self.source_url)
                    response.raise_for_status()
                except httpx.InvalidURL as e:
                    raise FetchError(f"Invalid banlist URL: {e}") from e
                except httpx.HTTPStatusError as e:
                    status_code = e.response.status_code
                    error = f"Banlist source returned HTTP {status_code}"
                    if status_code < 500 or attempt == attempts:
                        raise FetchError(error) from e
                except httpx.TimeoutException as e:
                    error = "Timed out fetching banlist"
                    if attempt == attempts:
                        raise FetchError(error) from e
                except httpx.HTTPError as e:
                    error = f"Could not reach banlist source: {e}"
                    if attempt == attempts:
                        raise FetchError(error) from e
                else:
                    try:
                        return response.json()
                    except ValueError as e:
                        raise FetchError("Banlist source returned invalid JSON") from e

                delay = self._backoff_delay(attempt)
                logger.warning(f"{error} (attempt {attempt}/{attempts}), retrying in {delay:.1f}s")
                await asyncio.sleep(delay)

        raise FetchError("Banlist fetch was not attempted")

    def _backoff_delay(self, attempt: int) -> float:
        delay = self.settings.banlist_backoff_base_s * (2 ** (attempt - 1))
        return min(delay, self.settings.banlist_backoff_max_s)

    def _merge(self, payload: Any) -> Tuple[Dict[str, Set[str]], int]:
        """Build the next cache state from a feed payload without touching the current one."""
        if not isinstance(payload, dict) or not isinstance(payload.get("banlist"), dict):
            raise FetchError("Banlist payload is missing a 'banlist' object")

        updated = {format_name: set(cards) for format_name, cards in self._banlist.items()}
        for format_name in FORMATS:
            updated.setdefault(format_name, set())

        cards_added = 0
        for format_name, cards in payload["banlist"].items():
            if not is_valid_format(format_name):
                logger.debug(f"Ignoring banlist for unsupported format: {format_name}")
                continue
            if not isinstance(cards, list) or not all(isinstance(card, str) for card in cards):
                raise FetchError(f"Banlist for {format_name} is not a list of card names")

            before = len(updated[format_name])
            updated[format_name].update(cards)
            cards_added += len(updated[format_name]) - before

        return updated, cards_added

    def is_banned(self, format_name: str, card_name: str) -> bool:
        """Exact, case-sensitive membership test. Unknown formats ban nothing."""
        return card_name in self._banlist.get(format_name, ())

    def banned_cards(self, format_name: str) -> List[str]:
        """Return the banned card names of a format, sorted."""
        if not is_valid_format(format_name):
            raise InvalidFormatError(format_name)
        return sorted(self._banlist.get(format_name, ()))

    def seed(self, banlist: Mapping[str, Iterable[str]]) -> None:
        """Replace membership for the given formats directly, without a fetch."""
        updated = {format_name: set(cards) for format_name, cards in self._banlist.items()}
        for format_name, cards in banlist.items():
            if not is_valid_format(format_name):
                raise InvalidFormatError(format_name)
            updated[format_name] = set(cards)
        for format_name in FORMATS:
            updated.setdefault(format_name, set())
        self._banlist = updated

    def format_counts(self) -> Dict[str, int]:
        return {format_name: len(self._banlist.get(format_name, ())) for format_name in FORMATS}

    def get_cache_info(self) -> Dict[str, Any]:
        """Get information about the current cache."""
        return {
            "is_loaded": self.is_loaded,
            "refreshed_at": self._refreshed_at,
            "last_error": self._last_error,
            "source_url": self.source_url,
            "formats": self.format_counts(),
        }
