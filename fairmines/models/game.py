"""Round state model for FairMines."""

import asyncio
import math
from dataclasses import dataclass, field
from typing import List, Optional

from fairmines.constants import TOTAL_TILES, RoundStatus, TileState
from fairmines.exceptions import IllegalStateTransitionError
from fairmines.utils.odds import payout_multiplier

# Serialises controller access from the async adapters
round_lock = asyncio.Lock()


@dataclass
class Round:
    """One round of Mines, from commitment to settlement.

    The mine set is fixed once by ``arm`` and never changes afterwards.
    ``revealed`` only grows, and only while the round is active.
    """

    server_seed: str
    server_seed_hash: str
    client_seed: str
    nonce: int
    mines_count: int
    house_edge_pct: float
    bet: float
    mine_positions: frozenset = frozenset()
    revealed: List[int] = field(default_factory=list)
    status: RoundStatus = "pending"
    hit_index: Optional[int] = None
    payout: Optional[float] = None

    def arm(self, mine_positions: frozenset) -> None:
        """Fix the mine set and open the round for reveals."""
        if self.status != "pending":
            raise IllegalStateTransitionError(f"Round already {self.status}")
        if len(mine_positions) != self.mines_count:
            raise ValueError(
                f"Expected {self.mines_count} mines, got {len(mine_positions)}"
            )
        self.mine_positions = frozenset(mine_positions)
        self.status = "active"

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def is_settled(self) -> bool:
        return self.status in ("busted", "cashed_out")

    @property
    def safe_reveals(self) -> int:
        return len(self.revealed)

    def tile_state(self, index: int, reveal_all: bool = False) -> TileState:
        """Display state of a tile, derived from the mine set and reveals."""
        if index == self.hit_index or (reveal_all and index in self.mine_positions):
            return "mine"
        if index in self.revealed or reveal_all:
            return "safe"
        return "hidden"

    def board(self) -> List[TileState]:
        """States of all tiles; fully resolved once the round is settled."""
        return [self.tile_state(i, reveal_all=self.is_settled) for i in range(TOTAL_TILES)]

    def current_multiplier(self) -> float:
        return payout_multiplier(self.safe_reveals, self.mines_count, self.house_edge_pct)

    def cash_out_value(self) -> float:
        """What cashing out now would pay, 0 when not possible."""
        mult = self.current_multiplier()
        if not self.is_active or not math.isfinite(mult):
            return 0.0
        return self.bet * mult

    def reveal(self) -> dict:
        """Return the commit-reveal data for fairness verification."""
        return {
            "server_seed": self.server_seed if self.is_settled else None,
            "server_seed_hash": self.server_seed_hash,
            "client_seed": self.client_seed,
            "nonce": self.nonce,
            "mines": self.mines_count,
            "mine_positions": sorted(self.mine_positions) if self.is_settled else None,
        }
