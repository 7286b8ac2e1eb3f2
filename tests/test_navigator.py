"""Tests for the saturating slide cursor."""

import pytest

from storyboard_toolkit.navigator import NEXT_KEY, PREVIOUS_KEY, DeckNavigator
from storyboard_toolkit.schema import Deck
from storyboard_toolkit.views import BulletsView, TitleView


def test_starts_at_first_slide(sample_deck):
    nav = DeckNavigator(sample_deck)
    assert nav.index == 0
    assert nav.at_start
    assert not nav.at_end


def test_next_reaches_last_slide_and_saturates(sample_deck):
    nav = DeckNavigator(sample_deck)
    n = nav.slide_count
    for expected in range(1, n):
        assert nav.next() == expected
    assert nav.index == n - 1
    assert nav.at_end
    assert nav.next() == n - 1
    assert nav.next() == n - 1


def test_previous_saturates_at_zero(sample_deck):
    nav = DeckNavigator(sample_deck)
    assert nav.previous() == 0
    nav.next()
    nav.next()
    assert nav.previous() == 1
    assert nav.previous() == 0
    assert nav.previous() == 0


def test_single_slide_deck_never_moves(deck_payload):
    deck_payload["slides"] = deck_payload["slides"][:1]
    nav = DeckNavigator(Deck.model_validate(deck_payload))
    assert nav.next() == 0
    assert nav.previous() == 0
    assert nav.at_start and nav.at_end


@pytest.mark.parametrize("keys,expected", [
    ([NEXT_KEY], 1),
    ([NEXT_KEY, NEXT_KEY, PREVIOUS_KEY], 1),
    ([PREVIOUS_KEY], 0),
    ([NEXT_KEY] * 20, 5),
])
def test_key_bindings(sample_deck, keys, expected):
    nav = DeckNavigator(sample_deck)
    for key in keys:
        assert nav.handle_key(key) is True
    assert nav.index == expected


def test_unbound_key_is_ignored(sample_deck):
    nav = DeckNavigator(sample_deck)
    assert nav.handle_key("ArrowUp") is False
    assert nav.handle_key("Enter") is False
    assert nav.index == 0


def test_current_view_follows_cursor(sample_deck):
    nav = DeckNavigator(sample_deck)
    assert isinstance(nav.current_view(), TitleView)
    nav.next()
    assert isinstance(nav.current_view(), BulletsView)


def test_navigation_does_not_change_deck(sample_deck):
    before = sample_deck.model_dump()
    nav = DeckNavigator(sample_deck)
    for _ in range(3):
        nav.next()
    assert nav.deck is sample_deck
    assert sample_deck.model_dump() == before
