"""
The casino facade: one ledger shared by every game engine.
"""

import logging
from typing import Dict, Optional

from highroller.blackjack.game import BlackjackGame
from highroller.common.rng import RandomSource, default_source
from highroller.config import CasinoConfig
from highroller.engine.base import WagerEngine
from highroller.events import EventBus, EventEmitter
from highroller.ledger import Ledger, WagerAccount
from highroller.mines.game import MinesGame
from highroller.plinko.game import PlinkoGame
from highroller.roulette.game import RouletteGame
from highroller.slots.game import SlotMachine

logger = logging.getLogger("highroller.casino")


class Casino:
    """
    Builds the ledger and all five engines from a single configuration.

    Attributes:
        ledger: The shared player ledger
        blackjack, roulette, mines, slots, plinko: The game engines
    """

    def __init__(
        self,
        config: Optional[CasinoConfig] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventEmitter] = None,
        ledger: Optional[Ledger] = None,
    ):
        self.config = config or CasinoConfig()
        self.rng = rng or default_source()
        self.event_bus = event_bus or EventBus.get_instance()
        self.ledger = ledger or Ledger(
            starting_balance=self.config.starting_balance,
            experience_per_level=self.config.experience_per_level,
            event_bus=self.event_bus,
        )

        shared = {"rng": self.rng, "event_bus": self.event_bus}
        self.blackjack = BlackjackGame(self.ledger, self.config.blackjack, **shared)
        self.roulette = RouletteGame(self.ledger, self.config.roulette, **shared)
        self.mines = MinesGame(self.ledger, self.config.mines, **shared)
        self.slots = SlotMachine(self.ledger, self.config.slots, **shared)
        self.plinko = PlinkoGame(self.ledger, self.config.plinko, **shared)
        logger.debug("Casino opened with balance %d", self.ledger.balance)

    @property
    def account(self) -> WagerAccount:
        return self.ledger.snapshot

    @property
    def games(self) -> Dict[str, WagerEngine]:
        return {
            engine.game_id: engine
            for engine in (self.blackjack, self.roulette, self.mines, self.slots, self.plinko)
        }

    def game(self, game_id: str) -> WagerEngine:
        """
        Raises:
            KeyError: if no game has that identifier
        """
        try:
            return self.games[game_id]
        except KeyError:
            raise KeyError(f"Unknown game {game_id!r}, expected one of {sorted(self.games)}") from None
