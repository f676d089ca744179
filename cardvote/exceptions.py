"""Exception types shared by the services and the HTTP layer."""
from __future__ import annotations

from cardvote.constants import CARD_NOT_FOUND_MESSAGE, INVALID_FORMAT_MESSAGE


class CardVoteError(Exception):
    """Base exception for application-level errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CardVoteError):
    """Raised when a format or card name fails validation."""

    status_code = 400


class InvalidFormatError(ValidationError):
    """Raised when a format is not in the supported set."""

    def __init__(self, format_name: object = None):
        super().__init__(INVALID_FORMAT_MESSAGE)
        self.format_name = format_name


class CardNotFoundError(CardVoteError):
    """Raised when a vote is modified for a card that was never voted on."""

    status_code = 404

    def __init__(self, format_name: str, card_name: str):
        super().__init__(CARD_NOT_FOUND_MESSAGE)
        self.format_name = format_name
        self.card_name = card_name


class FetchError(CardVoteError):
    """Raised when the banlist source is unreachable or returns malformed data."""

    status_code = 500
