"""Round controller for FairMines.

This module owns the single-player game session:
- Clamping round configuration (bet, mines, house edge)
- Committing to a server seed and deriving the mine set
- Tile reveals and multiplier updates
- Cash-out settlement and balance bookkeeping
- Post-round commitment verification

Every fallible step of an operation runs before any state is mutated, so a
rejected call leaves balance, nonce and round untouched.
"""

import logging
import math
from typing import Any, Optional

from fairmines.config import settings
from fairmines.constants import MAX_MINES, MIN_HOUSE_EDGE, MIN_MINES, TOTAL_TILES
from fairmines.exceptions import (
    IllegalStateTransitionError,
    InsufficientBalanceError,
    InvalidTileError,
)
from fairmines.models.game import Round
from fairmines.services.balance_store import BalanceStore
from fairmines.utils.commit_reveal import (
    commit_server_seed,
    generate_client_seed,
    hash_server_seed,
    verify_commitment,
)
from fairmines.utils.shuffle import derive_mine_positions

log = logging.getLogger(__name__)


def _as_float(value: Any) -> Optional[float]:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def clamp_bet(bet: Any) -> float:
    """Bets must be positive; anything else becomes 1.00. Rounded to cents."""
    value = _as_float(bet)
    if value is not None:
        value = round(value, 2)
    if value is None or value <= 0:
        value = 1.00
    return value


def clamp_mines(mines: Any, default: Optional[int] = None) -> int:
    """Mine count as an integer in [1, 24]."""
    if default is None:
        default = settings.default_mines
    if isinstance(mines, bool):
        mines = None
    try:
        value = int(mines)
    except (TypeError, ValueError, OverflowError):
        value = default
    else:
        if isinstance(mines, float) and not mines.is_integer():
            value = default
    return max(MIN_MINES, min(MAX_MINES, value))


def clamp_house_edge(edge: Any, default: Optional[float] = None) -> float:
    """House edge percent in [0, max_house_edge], one decimal place."""
    if default is None:
        default = settings.default_house_edge
    value = _as_float(edge)
    if value is None:
        value = default
    value = max(MIN_HOUSE_EDGE, min(settings.max_house_edge, value))
    return round(value, 1)


class GameController:
    """Explicit state machine driving one player's rounds."""

    def __init__(self, store: Optional[BalanceStore] = None):
        self.store = store or BalanceStore()
        self.balance = self.store.load()
        self.nonce = 0
        self.round: Optional[Round] = None

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------
    def start_round(
        self,
        bet: Any = None,
        mines: Any = None,
        house_edge_pct: Any = None,
        client_seed: Optional[str] = None,
    ) -> dict:
        """Commit to a server seed and fix the mine set for a new round.

        Args:
            bet: Stake, clamped to a positive amount
            mines: Mine count, clamped to [1, 24]
            house_edge_pct: House edge percent, clamped to [0, 10]
            client_seed: Public seed; generated when blank or not a string

        Returns:
            Commitment view with the server seed hash (the seed stays hidden)

        Raises:
            IllegalStateTransitionError: A round is still active
            InsufficientBalanceError: The bet exceeds the balance
            CryptoProviderError: Seed hashing or derivation failed
            OSError: The debited balance could not be persisted
        """
        if self.round is not None and self.round.is_active:
            raise IllegalStateTransitionError("A round is already in progress")

        bet = clamp_bet(settings.default_bet if bet is None else bet)
        mines = clamp_mines(mines)
        house_edge_pct = clamp_house_edge(house_edge_pct)

        if bet > self.balance:
            log.warning("Rejected bet %.2f with balance %.2f", bet, self.balance)
            raise InsufficientBalanceError(
                f"Bet {bet:.2f} exceeds balance {self.balance:.2f}"
            )

        if not isinstance(client_seed, str):
            client_seed = None
        client_seed = (client_seed or "").strip() or generate_client_seed()
        server_seed, server_seed_hash = commit_server_seed()
        nonce = self.nonce + 1

        new_round = Round(
            server_seed=server_seed,
            server_seed_hash=server_seed_hash,
            client_seed=client_seed,
            nonce=nonce,
            mines_count=mines,
            house_edge_pct=house_edge_pct,
            bet=bet,
        )
        new_round.arm(derive_mine_positions(server_seed, client_seed, nonce, mines))

        # Persist the debit before committing the round
        balance = self.balance - bet
        self.store.save(balance)
        self.nonce = nonce
        self.round = new_round
        self.balance = balance

        log.info(
            "Round %d started: bet=%.2f mines=%d edge=%.1f%% hash=%s",
            nonce, bet, mines, house_edge_pct, server_seed_hash,
        )
        return self.commitment_view()

    def reveal_tile(self, index: int) -> dict:
        """Reveal one tile of the active round.

        Args:
            index: Board index, 0..24

        Returns:
            Tile outcome with the current multiplier; includes the revealed
            server seed when a mine ends the round

        Raises:
            InvalidTileError: Index is off the board
            IllegalStateTransitionError: No active round, or tile already revealed
        """
        rnd = self._require_active("reveal a tile")
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < TOTAL_TILES:
            raise InvalidTileError(f"Tile index must be between 0 and {TOTAL_TILES - 1}")
        if index in rnd.revealed:
            raise IllegalStateTransitionError(f"Tile {index} is already revealed")

        if index in rnd.mine_positions:
            rnd.hit_index = index
            rnd.status = "busted"
            rnd.payout = 0.0
            log.info("Round %d busted on tile %d after %d safe picks", rnd.nonce, index, rnd.safe_reveals)
            return {
                "index": index,
                "outcome": "mine",
                "multiplier": 0.0,
                "safe_reveals": rnd.safe_reveals,
                "status": rnd.status,
                "reveal": rnd.reveal(),
            }

        rnd.revealed.append(index)
        mult = rnd.current_multiplier()
        log.debug("Round %d tile %d safe, multiplier %.4f", rnd.nonce, index, mult)
        return {
            "index": index,
            "outcome": "safe",
            "multiplier": mult,
            "safe_reveals": rnd.safe_reveals,
            "status": rnd.status,
            "cash_out_value": rnd.cash_out_value(),
        }

    def cash_out(self) -> dict:
        """Settle the active round at the current multiplier.

        Raises:
            IllegalStateTransitionError: No active round, no safe reveals yet,
                or no finite multiplier
            OSError: The credited balance could not be persisted
        """
        rnd = self._require_active("cash out")
        if rnd.safe_reveals <= 0:
            raise IllegalStateTransitionError("Reveal at least one safe tile before cashing out")
        mult = rnd.current_multiplier()
        if not math.isfinite(mult):
            raise IllegalStateTransitionError("No finite multiplier to cash out at")

        payout = rnd.bet * mult
        balance = self.balance + payout
        self.store.save(balance)
        rnd.payout = payout
        rnd.status = "cashed_out"
        self.balance = balance

        log.info("Round %d cashed out %.2f at %.4fx", rnd.nonce, payout, mult)
        return {
            "payout": payout,
            "multiplier": mult,
            "balance": self.balance,
            "status": rnd.status,
            "reveal": rnd.reveal(),
        }

    def verify_commitment(self) -> dict:
        """Check the revealed server seed against the pre-round commitment.

        A mismatch is reported as ``verified=False``; it is a cheating signal,
        not an error.

        Raises:
            IllegalStateTransitionError: No round, or the round is not settled
        """
        rnd = self.round
        if rnd is None:
            raise IllegalStateTransitionError("No round to verify")
        if not rnd.is_settled:
            raise IllegalStateTransitionError("Server seed is not revealed until the round ends")

        recomputed = hash_server_seed(rnd.server_seed)
        verified = verify_commitment(rnd.server_seed, rnd.server_seed_hash)
        if verified:
            log.info("Round %d commitment verified", rnd.nonce)
        else:
            log.error("Round %d commitment mismatch: %s != %s", rnd.nonce, recomputed, rnd.server_seed_hash)
        return {
            "verified": verified,
            "server_seed": rnd.server_seed,
            "server_seed_hash": rnd.server_seed_hash,
            "recomputed_hash": recomputed,
        }

    def next_round(self) -> dict:
        """Discard a settled round so the board is idle again."""
        if self.round is not None and self.round.is_active:
            raise IllegalStateTransitionError("Finish the current round first")
        self.round = None
        return self.state()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def commitment_view(self) -> dict:
        rnd = self.round
        return {
            "server_seed_hash": rnd.server_seed_hash,
            "client_seed": rnd.client_seed,
            "nonce": rnd.nonce,
            "bet": rnd.bet,
            "mines": rnd.mines_count,
            "house_edge_pct": rnd.house_edge_pct,
            "balance": self.balance,
            "status": rnd.status,
        }

    def state(self) -> dict:
        """Snapshot for the display layer."""
        rnd = self.round
        if rnd is None:
            return {
                "status": "idle",
                "balance": self.balance,
                "nonce": self.nonce,
                "board": ["hidden"] * TOTAL_TILES,
                "safe_reveals": 0,
                "multiplier": 1.0,
                "cash_out_value": 0.0,
                "can_cash_out": False,
                "can_verify": False,
                "round": None,
            }

        mult = rnd.current_multiplier()
        return {
            "status": rnd.status,
            "balance": self.balance,
            "nonce": self.nonce,
            "board": rnd.board(),
            "safe_reveals": rnd.safe_reveals,
            "multiplier": mult if math.isfinite(mult) else None,
            "cash_out_value": rnd.cash_out_value(),
            "can_cash_out": rnd.is_active and rnd.safe_reveals > 0 and math.isfinite(mult),
            "can_verify": rnd.is_settled,
            "round": {
                "bet": rnd.bet,
                "house_edge_pct": rnd.house_edge_pct,
                "payout": rnd.payout,
                **rnd.reveal(),
            },
        }

    def _require_active(self, action: str) -> Round:
        rnd = self.round
        if rnd is None or not rnd.is_active:
            log.warning("Rejected attempt to %s without an active round", action)
            raise IllegalStateTransitionError(f"Cannot {action}: no active round")
        return rnd


# Global controller instance
controller = GameController()


def get_controller() -> GameController:
    """FastAPI dependency returning the process-wide controller."""
    return controller
