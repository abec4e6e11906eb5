"""Independent round verification.

Anyone holding the revealed server seed and the public round inputs can
recompute the commitment and the mine set without access to the controller.
"""

from typing import Any, Dict

from fairmines.utils.commit_reveal import hash_server_seed, verify_commitment
from fairmines.utils.odds import multiplier_table
from fairmines.utils.shuffle import derive_mine_positions, derive_tile_order


def verify_round(
    server_seed: str,
    server_seed_hash: str,
    client_seed: str,
    nonce: int,
    mines: int,
) -> Dict[str, Any]:
    """Recompute a finished round from its seeds.

    Args:
        server_seed: Revealed server seed
        server_seed_hash: Commitment shown before the round
        client_seed: Public client seed
        nonce: Round sequence number
        mines: Mine count of the round

    Returns:
        Dictionary with the commitment check and the re-derived mine set
    """
    return {
        "commitment_valid": verify_commitment(server_seed, server_seed_hash),
        "recomputed_hash": hash_server_seed(server_seed),
        "mine_positions": sorted(derive_mine_positions(server_seed, client_seed, nonce, mines)),
        "tile_order": derive_tile_order(server_seed, client_seed, nonce),
    }


def odds_table(mines: int, house_edge_pct: float) -> Dict[str, Any]:
    """Multiplier for every pick count of a board configuration."""
    return {
        "mines": mines,
        "house_edge_pct": house_edge_pct,
        "multipliers": [
            {"safe_picks": r, "multiplier": m}
            for r, m in enumerate(multiplier_table(mines, house_edge_pct))
        ],
    }
