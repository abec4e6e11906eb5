"""Reproducible Fisher-Yates shuffle and mine placement.

The loop bound, swap order and ``floor(f * (i + 1))`` index formula are part of
the verification contract: any verifier using the same keystream must get the
same permutation.
"""

import math
from typing import Iterator, List

from fairmines.constants import TOTAL_TILES
from fairmines.utils.keystream import Keystream


def shuffle_deterministic(n: int, floats: Iterator[float]) -> List[int]:
    """
    Shuffle ``range(n)`` from the end, drawing one float per swap.

    Args:
        n: Size of the index set
        floats: Source of floats in [0, 1), e.g. a Keystream

    Returns:
        Permutation of 0..n-1
    """
    arr = list(range(n))
    for i in range(n - 1, 0, -1):
        f = next(floats)
        j = math.floor(f * (i + 1))
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def derive_tile_order(server_seed: str, client_seed: str, nonce: int, total: int = TOTAL_TILES) -> List[int]:
    """Full tile permutation for a round (mines first, then safe tiles)."""
    return shuffle_deterministic(total, Keystream(server_seed, client_seed, nonce))


def derive_mine_positions(
    server_seed: str,
    client_seed: str,
    nonce: int,
    mines_count: int,
    total: int = TOTAL_TILES,
) -> frozenset:
    """
    Re-derive the mine set of a round from its seeds.

    Args:
        server_seed: Hex server seed (revealed after settlement)
        client_seed: Public client seed
        nonce: Round sequence number
        mines_count: Number of mines, 1..total-1
        total: Board size

    Returns:
        Frozen set of board indices holding a mine

    Raises:
        ValueError: If mines_count is outside 1..total-1
    """
    if not 1 <= mines_count <= total - 1:
        raise ValueError(f"mines_count must be between 1 and {total - 1}, got {mines_count}")
    order = derive_tile_order(server_seed, client_seed, nonce, total)
    return frozenset(order[:mines_count])
