"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by the engine tests: a fresh event
bus, a ledger, and helpers that script the entropy source so that every deal,
spin and drop is known in advance.
"""

import pytest

from highroller.blackjack.game import BlackjackGame
from highroller.common.card import Card, Rank, Suit
from highroller.common.rng import FixedSequenceSource
from highroller.events import EventBus
from highroller.ledger import Ledger


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def ledger():
    return Ledger(starting_balance=1000)


@pytest.fixture
def recorded_events():
    """Collect every event emitted on the bus as (event name, data) pairs."""
    events = []
    EventBus.get_instance().on_any(events.append)
    return events


def card(rank: str, suit: Suit = Suit.SPADES) -> Card:
    """Shorthand: card("A"), card("10"), card("K")."""
    return Card(suit, Rank(rank))


def stacked_rng(deck_size: int) -> FixedSequenceSource:
    """A source whose Fisher-Yates pass leaves a deck of this size untouched."""
    if deck_size < 2:
        return FixedSequenceSource([0])
    return FixedSequenceSource(range(deck_size - 1, 0, -1))


@pytest.fixture
def stacked_blackjack(ledger):
    """
    Build a card game that deals the given ranks in order: player, dealer,
    player, dealer, then every later draw.
    """

    def build(ranks, config=None, pad=20):
        order = [card(rank) for rank in ranks]
        # Cards are dealt from the end; filler at the bottom is only reached by long rounds
        deck = [card("5", Suit.HEARTS)] * pad + list(reversed(order))
        return BlackjackGame(
            ledger,
            config=config,
            rng=stacked_rng(len(deck)),
            deck_factory=lambda: list(deck),
        )

    return build
