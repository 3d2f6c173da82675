"""
Exceptions raised by the highroller engines.

Every recoverable error below is raised before any state is touched: no
partial charge, no partial reveal. Callers report them to the player and
carry on.

- `InsufficientFundsError`: a stake exceeds the current balance.
- `InvalidActionError`: an action was attempted in a state that does not allow it.
- `InvalidBetError`: a wheel bet selector could not be understood.
- `InvalidCellError`: a board cell is out of range or already revealed.
- `NoStakesPlacedError`: a wheel spin was requested with nothing on the table.
- `NothingToCashOutError`: a board cash-out was requested before any safe reveal.
- `StakeLimitError`: a stake falls outside the game's table limits.
- `InvalidHazardCountError`: a board was requested with an unsupported hazard count.
- `DeckExhaustedError`: a card was requested from an empty deck.

`LedgerIntegrityError` is different: it signals a broken invariant (a counter
going negative, more wins than games). It indicates a defect in the calling
code and is not meant to be caught.
"""


class CasinoError(Exception):
    """Base class for all highroller errors."""

    pass


class InsufficientFundsError(CasinoError):
    """Raised when a stake exceeds the player's current balance."""

    def __init__(self, requested: int, available: int):
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}"
        )
        self.requested = requested
        self.available = available


class InvalidActionError(CasinoError):
    """Raised when an action is attempted in a state that does not permit it."""

    pass


class InvalidBetError(InvalidActionError):
    """Raised when a bet selector is not recognised by the wheel."""

    pass


class InvalidCellError(CasinoError):
    """Raised when a board cell is out of range or has already been revealed."""

    def __init__(self, row: int, col: int, reason: str):
        super().__init__(f"Invalid cell ({row}, {col}): {reason}")
        self.row = row
        self.col = col


class NoStakesPlacedError(CasinoError):
    """Raised when the wheel is spun without any stakes on the table."""

    pass


class NothingToCashOutError(CasinoError):
    """Raised when cashing out a board round before any safe cell was revealed."""

    pass


class StakeLimitError(CasinoError):
    """Raised when a stake falls outside the table limits."""

    def __init__(self, amount: int, min_stake: int, max_stake: int):
        super().__init__(
            f"Stake {amount} outside table limits [{min_stake}, {max_stake}]"
        )
        self.amount = amount
        self.min_stake = min_stake
        self.max_stake = max_stake


class InvalidHazardCountError(CasinoError, ValueError):
    """Raised when a board round is started with an unsupported hazard count."""

    pass


class DeckExhaustedError(CasinoError, IndexError):
    """Raised when dealing from an empty deck."""

    pass


class LedgerIntegrityError(CasinoError, AssertionError):
    """Raised when a ledger delta would break an account invariant."""

    pass
