"""
Tile-reveal game engine.

The player stakes on a board hiding a chosen number of hazards, reveals cells
one at a time and may cash out at the current multiplier after any safe
reveal. Revealing a hazard ends the round with nothing returned.
"""

import logging
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Dict, Optional, Union
import uuid

from highroller.common.result import GameResult, OutcomeKind, scaled_payout
from highroller.common.rng import RandomSource
from highroller.config import MinesConfig
from highroller.engine.base import WagerEngine
from highroller.events import CasinoEventType, EventEmitter
from highroller.exceptions import (
    InvalidActionError,
    InvalidCellError,
    InvalidHazardCountError,
    NothingToCashOutError,
)
from highroller.ledger import Ledger
from highroller.mines.board import Board
from highroller.mines.multiplier import get_curve

logger = logging.getLogger("highroller.mines")


class BoardStage(Enum):
    IDLE = auto()
    ACTIVE = auto()
    BUSTED = auto()
    CASHED_OUT = auto()


@dataclass(frozen=True)
class BoardState:
    """
    Immutable snapshot of a board round.

    Attributes:
        id: Unique identifier for this round
        board: The board, hazards included
        stake: Chips staked on the round
        stage: Current stage
        revealed_gems: Safe cells revealed so far
        multiplier: Cash-out multiplier for the gems revealed so far
        next_multiplier: Multiplier the next safe reveal would reach
        payout: Chips returned once the round ended
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    board: Optional[Board] = None
    stake: int = 0
    stage: BoardStage = BoardStage.IDLE
    revealed_gems: int = 0
    multiplier: float = 1.0
    next_multiplier: float = 1.0
    payout: int = 0

    @property
    def is_active(self) -> bool:
        return self.stage is BoardStage.ACTIVE

    @property
    def is_over(self) -> bool:
        return self.stage in (BoardStage.BUSTED, BoardStage.CASHED_OUT)

    @property
    def cash_out_value(self) -> int:
        return scaled_payout(self.stake, self.multiplier)

    def to_dict(self) -> Dict[str, Any]:
        """Board view for a presentation layer; hazards stay hidden until the round ends."""
        grid = []
        if self.board is not None:
            for row in self.board.grid():
                view = []
                for cell in row:
                    if cell.revealed:
                        view.append("hazard" if cell.is_hazard else "gem")
                    elif self.is_over and cell.is_hazard:
                        view.append("hazard")
                    else:
                        view.append("hidden")
                grid.append(view)
        return {
            "id": self.id,
            "stage": self.stage.name,
            "stake": self.stake,
            "hazards": self.board.hazard_count if self.board else 0,
            "revealed_gems": self.revealed_gems,
            "multiplier": self.multiplier,
            "next_multiplier": self.next_multiplier,
            "cash_out_value": self.cash_out_value,
            "payout": self.payout,
            "grid": grid,
        }


class MinesGame(WagerEngine):
    """
    Board engine with a configurable multiplier curve.
    """

    game_id = "mines"

    def __init__(
        self,
        ledger: Ledger,
        config: Optional[MinesConfig] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        self.config = config or MinesConfig()
        super().__init__(ledger, self.config.limits, rng, event_bus)
        self.curve = get_curve(self.config.multiplier_curve)
        self.state = BoardState()
        # Paid multiplier of the last rounds, 0.0 for a bust
        self.history = deque(maxlen=10)

    def multiplier(self, revealed: int, hazards: int) -> float:
        """Cash-out multiplier after ``revealed`` safe reveals with ``hazards`` on the board."""
        return self.curve(revealed, hazards, self.config.cells, self.config.edge_factor)

    def start(self, stake: int, hazard_count: int) -> BoardState:
        """
        Charge the stake and lay out a fresh board.

        Raises:
            InvalidActionError: if a round is already in progress
            InvalidHazardCountError: if the hazard count is outside the configured range
            StakeLimitError: if the stake is outside table limits
            InsufficientFundsError: if the stake exceeds the balance
        """
        with self._lock:
            if self.state.is_active:
                raise InvalidActionError("A board round is already in progress")
            if not self.config.min_hazards <= hazard_count <= self.config.max_hazards:
                raise InvalidHazardCountError(
                    f"Hazard count {hazard_count} outside "
                    f"[{self.config.min_hazards}, {self.config.max_hazards}]"
                )

            self._charge(stake)
            board = Board.place(self.config.rows, self.config.cols, hazard_count, self.rng)
            self.state = BoardState(
                board=board,
                stake=stake,
                stage=BoardStage.ACTIVE,
                next_multiplier=self.multiplier(1, hazard_count),
            )
            logger.debug("Board round %s started with %d hazards", self.state.id, hazard_count)
            self._emit(
                CasinoEventType.ROUND_STARTED,
                {"round_id": self.state.id, "stake": stake, "hazards": hazard_count},
            )
            return self.state

    def reveal(self, row: int, col: int) -> Union[BoardState, GameResult]:
        """
        Reveal one cell.

        Returns the unchanged state if the round already ended, the updated
        state after a safe reveal, or the result if the reveal ended the round.

        Raises:
            InvalidActionError: if no round was ever started
            InvalidCellError: if the cell is out of range or already revealed
        """
        with self._lock:
            state = self.state
            if state.stage is BoardStage.IDLE:
                raise InvalidActionError("Start a board round before revealing cells")
            if state.is_over:
                return state

            board = state.board
            if not board.in_range(row, col):
                raise InvalidCellError(row, col, "out of range")
            if board.cell(row, col).revealed:
                raise InvalidCellError(row, col, "already revealed")

            board = board.reveal(row, col)
            hazard = board.cell(row, col).is_hazard
            self._emit(
                CasinoEventType.CELL_REVEALED,
                {"round_id": state.id, "row": row, "col": col, "hazard": hazard},
            )

            if hazard:
                self.state = replace(
                    state,
                    board=board.reveal_hazards(),
                    stage=BoardStage.BUSTED,
                    payout=0,
                )
                self.history.append(0.0)
                return self._settle(
                    stake=state.stake,
                    payout=0,
                    outcome=OutcomeKind.LOSS,
                    experience=self.config.experience_on_loss,
                    state=self.state,
                    details={"revealed_gems": state.revealed_gems, "hit": [row, col]},
                )

            gems = state.revealed_gems + 1
            hazards = board.hazard_count
            self.state = replace(
                state,
                board=board,
                revealed_gems=gems,
                multiplier=self.multiplier(gems, hazards),
                next_multiplier=self.multiplier(min(gems + 1, board.safe_count), hazards),
            )
            if gems == board.safe_count:
                logger.debug("Every safe cell revealed, cashing out round %s", state.id)
                return self._cash_out()
            return self.state

    def cash_out(self) -> GameResult:
        """
        End the round at the current multiplier.

        Raises:
            InvalidActionError: if no round is active
            NothingToCashOutError: if no safe cell has been revealed yet
        """
        with self._lock:
            if not self.state.is_active:
                raise InvalidActionError("No active board round to cash out")
            if self.state.revealed_gems == 0:
                raise NothingToCashOutError("Reveal at least one safe cell before cashing out")
            return self._cash_out()

    def _cash_out(self) -> GameResult:
        state = self.state
        payout = state.cash_out_value
        self.state = replace(state, stage=BoardStage.CASHED_OUT, payout=payout)
        self.history.append(state.multiplier)
        profit = payout - state.stake
        return self._settle(
            stake=state.stake,
            payout=payout,
            outcome=OutcomeKind.WIN,
            experience=max(0, profit // self.config.experience_profit_divisor),
            state=self.state,
            details={
                "revealed_gems": state.revealed_gems,
                "multiplier": state.multiplier,
            },
        )
