"""Balance persistence for FairMines.

The balance is a single scalar stored as JSON under a fixed key. Anything
unreadable falls back to the starting balance.
"""

import json
import logging
import math
from pathlib import Path
from typing import Optional

from fairmines.config import settings

log = logging.getLogger(__name__)


class BalanceStore:
    """Reads and writes the player's balance."""

    def __init__(
        self,
        path: Optional[str] = None,
        key: Optional[str] = None,
        starting_balance: Optional[float] = None,
    ):
        self.path = Path(path or settings.balance_file)
        self.key = key or settings.balance_storage_key
        self.starting_balance = (
            settings.starting_balance if starting_balance is None else starting_balance
        )

    def load(self) -> float:
        """Load the stored balance, or the starting balance if absent or corrupt."""
        if not self.path.exists():
            return self.starting_balance

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            value = float(data[self.key])
        except (OSError, ValueError, TypeError, KeyError) as e:
            log.warning("Ignoring unreadable balance file %s: %s", self.path, e)
            return self.starting_balance

        if not math.isfinite(value):
            log.warning("Ignoring non-finite balance in %s", self.path)
            return self.starting_balance
        return value

    def save(self, balance: float):
        """Persist the balance with cent precision."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({self.key: f"{balance:.2f}"}, f)
