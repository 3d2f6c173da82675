"""
This module contains the Deck class, which represents a deck of cards, and the
DeckService that decides when the card game gets a fresh deck.

>>> deck = Deck.standard()
>>> deck.size
52
>>> deck.deal()
Card(Suit.SPADES, Rank.KING)
>>> deck.size
51
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from highroller.common.card import Card, Rank, Suit
from highroller.common.rng import RandomSource
from highroller.exceptions import DeckExhaustedError

logger = logging.getLogger("highroller.deck")


def standard_cards() -> List[Card]:
    """Return the 52 cards of a standard deck in suit/rank order."""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


class Deck:
    """
    An ordered pile of cards, consumed from the end.
    """

    def __init__(self, cards: Optional[List[Card]] = None):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, a standard 52-card deck is constructed.
        """
        self.cards: List[Card] = standard_cards() if cards is None else list(cards)

    @classmethod
    def standard(cls) -> "Deck":
        return cls()

    def shuffle(self, rng: RandomSource) -> "Deck":
        """Shuffle the cards in place using the injected entropy source."""
        rng.shuffle(self.cards)
        return self

    def deal(self) -> Card:
        """
        Pop one card from the deck.

        :raises DeckExhaustedError: if the deck is empty.
        """
        if not self.cards:
            raise DeckExhaustedError("Cannot deal from an empty deck")
        return self.cards.pop()

    @property
    def size(self) -> int:
        """Return the number of remaining cards in the deck."""
        return len(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"


class DeckPolicy(Enum):
    """
    When the card game receives a freshly shuffled deck.

    PER_ROUND: one fresh deck per round.
    PER_ACTION: a fresh deck for the initial deal, for every hit and for the
        dealer's turn. Card counting is meaningless under this policy.
    SHOE: one continuous shoe, reshuffled once penetration is reached.
    """

    PER_ROUND = "per_round"
    PER_ACTION = "per_action"
    SHOE = "shoe"


class DeckService:
    """
    Produces shuffled decks for the card game according to a DeckPolicy.
    """

    def __init__(
        self,
        rng: RandomSource,
        policy: DeckPolicy = DeckPolicy.PER_ROUND,
        num_decks: int = 1,
        penetration: float = 0.75,
        deck_factory: Optional[Callable[[], List[Card]]] = None,
    ):
        """
        :param rng: Entropy source used for every shuffle
        :param policy: When a fresh deck is produced
        :param num_decks: Number of decks combined into the shoe (SHOE policy)
        :param penetration: Fraction of the shoe dealt before reshuffling
        :param deck_factory: Optional callable that returns the cards of one deck
        """
        if num_decks < 1:
            raise ValueError("Number of decks must be at least 1")
        if not 0 < penetration <= 1:
            raise ValueError("Penetration must be between 0 and 1")

        self.rng = rng
        self.policy = DeckPolicy(policy)
        self.num_decks = num_decks
        self.penetration = penetration
        self.deck_factory = deck_factory or standard_cards
        self.deck: Optional[Deck] = None
        self.total_cards = 0
        self.shuffle_count = 0

    def _fresh_deck(self) -> Deck:
        cards: List[Card] = []
        decks = self.num_decks if self.policy is DeckPolicy.SHOE else 1
        for _ in range(decks):
            cards.extend(self.deck_factory())
        self.total_cards = len(cards)
        self.shuffle_count += 1
        logger.debug("Shuffling fresh deck of %d cards (%s)", len(cards), self.policy.value)
        return Deck(cards).shuffle(self.rng)

    def _needs_reshuffle(self) -> bool:
        if self.deck is None:
            return True
        dealt = self.total_cards - self.deck.size
        return dealt >= int(self.total_cards * self.penetration)

    def begin_round(self) -> None:
        """Prepare the deck for a new round."""
        if self.policy is DeckPolicy.SHOE:
            if self._needs_reshuffle():
                self.deck = self._fresh_deck()
        else:
            self.deck = self._fresh_deck()

    def begin_action(self) -> None:
        """Prepare the deck for a player hit or the dealer's turn."""
        if self.policy is DeckPolicy.PER_ACTION:
            self.deck = self._fresh_deck()

    def draw(self) -> Card:
        """Deal one card from the current deck."""
        if self.deck is None:
            self.begin_round()
        if self.deck.is_empty() and self.policy is DeckPolicy.SHOE:
            self.deck = self._fresh_deck()
        return self.deck.deal()

    @property
    def cards_remaining(self) -> int:
        return self.deck.size if self.deck is not None else 0
