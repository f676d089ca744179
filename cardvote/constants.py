"""Shared constants for the Card Vote API."""
from __future__ import annotations

from typing import Tuple

API_VERSION = "1.0.0"
SERVICE_NAME = "Card Vote API"

# Closed set of formats accepted at every boundary. Order is the display order.
FORMATS: Tuple[str, ...] = (
    "Standard",
    "Modern",
    "Legacy",
    "Pioneer",
    "Historic",
    "Vintage",
    "Commander",
)

INVALID_FORMAT_MESSAGE = "Invalid format."
ADD_VOTE_REQUIRED_MESSAGE = "Card name and format are required."
MODIFY_VOTE_REQUIRED_MESSAGE = "Card name, format and delta are required."
INVALID_DELTA_MESSAGE = "Delta must be an integer."
CARD_NOT_FOUND_MESSAGE = "Card not found in leaderboard."
REFRESH_FAILED_MESSAGE = "Error updating banlist."

VOTE_ADDED_MESSAGE = "Vote added successfully."
BANLIST_UPDATED_MESSAGE = "Banlist updated successfully."
VOTES_RESET_MESSAGE = "All votes have been reset."


def is_valid_format(value: object) -> bool:
    """Return True when ``value`` is one of the supported formats."""
    return isinstance(value, str) and value in FORMATS


__all__ = [
    "API_VERSION",
    "SERVICE_NAME",
    "FORMATS",
    "INVALID_FORMAT_MESSAGE",
    "ADD_VOTE_REQUIRED_MESSAGE",
    "MODIFY_VOTE_REQUIRED_MESSAGE",
    "INVALID_DELTA_MESSAGE",
    "CARD_NOT_FOUND_MESSAGE",
    "REFRESH_FAILED_MESSAGE",
    "VOTE_ADDED_MESSAGE",
    "BANLIST_UPDATED_MESSAGE",
    "VOTES_RESET_MESSAGE",
    "is_valid_format",
]
