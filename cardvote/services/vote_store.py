"""In-memory vote tallies per format."""

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from cardvote.constants import ADD_VOTE_REQUIRED_MESSAGE, FORMATS, INVALID_DELTA_MESSAGE, is_valid_format
from cardvote.exceptions import CardNotFoundError, InvalidFormatError, ValidationError
from cardvote.models import CardEntry, Leaderboard
from cardvote.services.banlist_cache import BanlistCache

logger = logging.getLogger(__name__)


class VoteStore:
    """
    Per-format vote tallies with ranked retrieval.

    Each format's board is stored in its last-ranked order and re-sorted
    stably on every added vote, so cards with equal votes keep their previous
    relative order. Reads sort the stored order again, which also ranks
    counts changed by modify_vote. All mutations hold a lock; readers get
    copies.
    """

    def __init__(self, banlist: BanlistCache):
        self._banlist = banlist
        self._votes: Dict[str, Dict[str, CardEntry]] = {format_name: {} for format_name in FORMATS}
        self._lock = threading.Lock()

    @staticmethod
    def _require_format(format_name: Any) -> str:
        if not is_valid_format(format_name):
            raise InvalidFormatError(format_name)
        return format_name

    @staticmethod
    def _require_card_and_format(format_name: Any, card_name: Any) -> None:
        if not card_name or not format_name or not isinstance(card_name, str):
            raise ValidationError(ADD_VOTE_REQUIRED_MESSAGE)
        VoteStore._require_format(format_name)

    def _get_or_create(self, format_name: str, card_name: str) -> CardEntry:
        """Return the entry for a card, creating it with zero votes on first sight.

        The banned flag is read from the banlist once, here, and never updated.
        """
        board = self._votes[format_name]
        entry = board.get(card_name)
        if entry is None:
            entry = CardEntry(votes=0, is_banned=self._banlist.is_banned(format_name, card_name))
            board[card_name] = entry
            logger.info(f"New {format_name} card on leaderboard: {card_name} (banned: {entry.is_banned})")
        return entry

    def _sorted_items(self, format_name: str) -> List[Tuple[str, CardEntry]]:
        return sorted(self._votes[format_name].items(), key=lambda item: item[1].votes, reverse=True)

    def _ranked(self, format_name: str, limit: Optional[int] = None) -> Leaderboard:
        ranked = self._sorted_items(format_name)
        if limit is not None:
            ranked = ranked[:limit]
        return {card_name: entry.model_copy() for card_name, entry in ranked}

    def add_vote(self, format_name: str, card_name: str) -> Leaderboard:
        """
        Add one vote for a card and return the format's updated leaderboard.

        Banned cards are counted like any other; legality is not enforced here.

        Raises:
            ValidationError: card name or format missing.
            InvalidFormatError: format not in the supported set.
        """
        self._require_card_and_format(format_name, card_name)
        with self._lock:
            entry = self._get_or_create(format_name, card_name)
            entry.votes += 1
            self._votes[format_name] = dict(self._sorted_items(format_name))
            return self._ranked(format_name)

    def modify_vote(self, format_name: str, card_name: str, delta: int) -> int:
        """
        Add ``delta`` to an existing card's votes and return the new count.

        The delta may be any signed integer and counts may go below zero.

        Raises:
            ValidationError: card name or format missing, or delta not an integer.
            InvalidFormatError: format not in the supported set.
            CardNotFoundError: the card has no votes in this format yet.
        """
        self._require_card_and_format(format_name, card_name)
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError(INVALID_DELTA_MESSAGE)

        with self._lock:
            entry = self._votes[format_name].get(card_name)
            if entry is None:
                raise CardNotFoundError(format_name, card_name)
            entry.votes += delta
            return entry.votes

    def get_leaderboard(self, format_name: str, limit: Optional[int] = None) -> Leaderboard:
        """Return the format's cards ranked by votes, optionally only the top ``limit``."""
        self._require_format(format_name)
        with self._lock:
            return self._ranked(format_name, limit)

    def get_entry(self, format_name: str, card_name: str) -> Optional[CardEntry]:
        self._require_format(format_name)
        with self._lock:
            entry = self._votes[format_name].get(card_name)
            return entry.model_copy() if entry is not None else None

    def reset(self) -> None:
        """Empty every format's leaderboard. The banlist is untouched."""
        with self._lock:
            for format_name in FORMATS:
                self._votes[format_name] = {}
        logger.info("All votes have been reset")

    def summary(self) -> Dict[str, Dict[str, int]]:
        """Card and vote totals per format."""
        with self._lock:
            return {
                format_name: {
                    "cards": len(board),
                    "votes": sum(entry.votes for entry in board.values()),
                }
                for format_name, board in self._votes.items()
            }
