import pytest

from cardvote.constants import FORMATS
from cardvote.exceptions import CardNotFoundError, InvalidFormatError, ValidationError


def test_first_vote_starts_at_one_and_counts_up(vote_store):
    board = vote_store.add_vote("Modern", "Lightning Bolt")
    assert board["Lightning Bolt"].votes == 1

    for _ in range(4):
        board = vote_store.add_vote("Modern", "Lightning Bolt")

    assert board["Lightning Bolt"].votes == 5


def test_leaderboard_is_sorted_by_votes_descending(vote_store):
    vote_store.add_vote("Modern", "Lightning Bolt")
    vote_store.add_vote("Modern", "Lightning Bolt")
    board = vote_store.add_vote("Modern", "Ragavan, Nimble Pilferer")

    assert [(name, entry.votes) for name, entry in board.items()] == [
        ("Lightning Bolt", 2),
        ("Ragavan, Nimble Pilferer", 1),
    ]


def test_later_card_overtakes_earlier_one(vote_store):
    vote_store.add_vote("Legacy", "Brainstorm")
    vote_store.add_vote("Legacy", "Force of Will")
    board = vote_store.add_vote("Legacy", "Force of Will")

    assert list(board) == ["Force of Will", "Brainstorm"]


def test_ties_keep_previous_ranking_order(vote_store):
    vote_store.add_vote("Pioneer", "Thoughtseize")
    vote_store.add_vote("Pioneer", "Fatal Push")
    vote_store.add_vote("Pioneer", "Fatal Push")
    vote_store.add_vote("Pioneer", "Thoughtseize")

    board = vote_store.get_leaderboard("Pioneer")

    assert list(board) == ["Fatal Push", "Thoughtseize"]
    assert all(entry.votes == 2 for entry in board.values())


def test_card_names_are_case_sensitive(vote_store):
    vote_store.add_vote("Modern", "Lightning Bolt")
    board = vote_store.add_vote("Modern", "lightning bolt")

    assert set(board) == {"Lightning Bolt", "lightning bolt"}


def test_formats_are_tallied_separately(vote_store):
    vote_store.add_vote("Modern", "Lightning Bolt")

    assert vote_store.get_leaderboard("Legacy") == {}
    assert vote_store.get_leaderboard("Modern")["Lightning Bolt"].votes == 1


def test_limit_returns_top_entries(vote_store):
    for name, count in [("A", 1), ("B", 3), ("C", 2)]:
        for _ in range(count):
            vote_store.add_vote("Vintage", name)

    assert list(vote_store.get_leaderboard("Vintage", limit=2)) == ["B", "C"]


def test_returned_leaderboard_is_a_copy(vote_store):
    board = vote_store.add_vote("Modern", "Lightning Bolt")
    board["Lightning Bolt"].votes = 100
    board["Snapcaster Mage"] = board.pop("Lightning Bolt")

    fresh = vote_store.get_leaderboard("Modern")
    assert list(fresh) == ["Lightning Bolt"]
    assert fresh["Lightning Bolt"].votes == 1


def test_banned_flag_is_captured_on_first_vote(vote_store, banlist_cache):
    banlist_cache.seed({"Vintage": {"Black Lotus"}})

    board = vote_store.add_vote("Vintage", "Black Lotus")
    assert board["Black Lotus"].is_banned is True

    board = vote_store.add_vote("Vintage", "Mox Pearl")
    assert board["Mox Pearl"].is_banned is False


def test_banned_flag_does_not_follow_later_banlist_changes(vote_store, banlist_cache):
    vote_store.add_vote("Modern", "Hogaak, Arisen Necropolis")
    banlist_cache.seed({"Modern": {"Hogaak, Arisen Necropolis"}})

    board = vote_store.add_vote("Modern", "Hogaak, Arisen Necropolis")

    assert board["Hogaak, Arisen Necropolis"].is_banned is False
    assert board["Hogaak, Arisen Necropolis"].votes == 2


@pytest.mark.parametrize("format_name", ["Pauper", "modern", "", None])
def test_invalid_formats_are_rejected(vote_store, format_name):
    with pytest.raises(ValidationError):
        vote_store.add_vote(format_name, "Lightning Bolt")


def test_get_leaderboard_rejects_unknown_format(vote_store):
    with pytest.raises(InvalidFormatError) as exc:
        vote_store.get_leaderboard("Pauper")
    assert exc.value.message == "Invalid format."


def test_empty_card_name_is_rejected(vote_store):
    with pytest.raises(ValidationError) as exc:
        vote_store.add_vote("Modern", "")
    assert exc.value.message == "Card name and format are required."


def test_modify_vote_applies_signed_delta(vote_store):
    vote_store.add_vote("Standard", "Sheoldred, the Apocalypse")

    assert vote_store.modify_vote("Standard", "Sheoldred, the Apocalypse", 5) == 6
    assert vote_store.modify_vote("Standard", "Sheoldred, the Apocalypse", -2) == 4


def test_modify_vote_down_to_zero_and_below(vote_store):
    vote_store.add_vote("Historic", "Oko, Thief of Crowns")

    assert vote_store.modify_vote("Historic", "Oko, Thief of Crowns", -1) == 0
    assert vote_store.modify_vote("Historic", "Oko, Thief of Crowns", -1) == -1
    assert vote_store.get_entry("Historic", "Oko, Thief of Crowns").votes == -1


def test_modify_vote_reorders_leaderboard_on_read(vote_store):
    vote_store.add_vote("Modern", "Lightning Bolt")
    vote_store.add_vote("Modern", "Lightning Bolt")
    vote_store.add_vote("Modern", "Counterspell")

    vote_store.modify_vote("Modern", "Counterspell", 3)

    assert list(vote_store.get_leaderboard("Modern")) == ["Counterspell", "Lightning Bolt"]


def test_modify_vote_on_unseen_card_raises_not_found(vote_store):
    with pytest.raises(CardNotFoundError):
        vote_store.modify_vote("Modern", "Lightning Bolt", 1)

    assert vote_store.get_entry("Modern", "Lightning Bolt") is None


@pytest.mark.parametrize("delta", [1.5, "2", True, None])
def test_modify_vote_requires_integer_delta(vote_store, delta):
    vote_store.add_vote("Modern", "Lightning Bolt")

    with pytest.raises(ValidationError) as exc:
        vote_store.modify_vote("Modern", "Lightning Bolt", delta)
    assert exc.value.message == "Delta must be an integer."


def test_reset_empties_every_format(vote_store, banlist_cache):
    banlist_cache.seed({"Legacy": {"Sensei's Divining Top"}})
    vote_store.add_vote("Modern", "Lightning Bolt")
    vote_store.add_vote("Legacy", "Brainstorm")

    vote_store.reset()

    for format_name in FORMATS:
        assert vote_store.get_leaderboard(format_name) == {}
    assert banlist_cache.is_banned("Legacy", "Sensei's Divining Top")


def test_reset_is_idempotent(vote_store):
    vote_store.reset()
    vote_store.reset()

    assert vote_store.get_leaderboard("Commander") == {}
    board = vote_store.add_vote("Commander", "Sol Ring")
    assert board["Sol Ring"].votes == 1


def test_summary_counts_cards_and_votes(vote_store):
    vote_store.add_vote("Modern", "Lightning Bolt")
    vote_store.add_vote("Modern", "Lightning Bolt")
    vote_store.add_vote("Modern", "Counterspell")

    summary = vote_store.summary()

    assert summary["Modern"] == {"cards": 2, "votes": 3}
    assert summary["Legacy"] == {"cards": 0, "votes": 0}


def test_tie_after_overtake_keeps_leader_first(vote_store):
    vote_store.add_vote("Modern", "A")
    vote_store.add_vote("Modern", "B")
    vote_store.add_vote("Modern", "B")
    board = vote_store.add_vote("Modern", "A")

    assert list(board) == ["B", "A"]
    assert list(vote_store.get_leaderboard("Modern")) == ["B", "A"]


def test_ties_keep_first_vote_order_when_never_reordered(vote_store):
    vote_store.add_vote("Modern", "A")
    board = vote_store.add_vote("Modern", "B")

    assert list(board) == ["A", "B"]
