"""Domain errors raised by the FairMines round controller.

Configuration problems are never raised (inputs are clamped instead) and a
failed commitment check is a ``False`` result, not an exception.
"""


class GameError(Exception):
    """Base class for rejected game operations."""

    kind = "game_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InsufficientBalanceError(GameError):
    """The bet exceeds the available balance."""

    kind = "insufficient_balance"
    status_code = 402


class IllegalStateTransitionError(GameError):
    """The operation is not allowed in the round's current state."""

    kind = "illegal_state_transition"
    status_code = 409


class InvalidTileError(IllegalStateTransitionError):
    """The tile index is outside the board."""

    kind = "invalid_tile"
    status_code = 422


class CryptoProviderError(GameError):
    """The digest or MAC primitive failed. Fatal for the current operation."""

    kind = "crypto_provider_failure"
    status_code = 500
