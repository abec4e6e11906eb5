"""Cryptographic commit-reveal mechanism for the round's server seed.

The commitment is SHA-256 over the seed's hex string form (not its raw bytes).
The same string is also the HMAC key of the keystream, so commit, verify and
derivation all use one representation.
"""

from typing import Optional, Tuple

from fairmines.constants import CLIENT_SEED_BYTES, SERVER_SEED_BYTES
from fairmines.utils.crypto import random_hex, sha256_hex


def generate_server_seed(num_bytes: int = SERVER_SEED_BYTES) -> str:
    """Create a fresh secret server seed, hex-encoded."""
    return random_hex(num_bytes)


def generate_client_seed(num_bytes: int = CLIENT_SEED_BYTES) -> str:
    """Create a client seed for players who did not supply one."""
    return random_hex(num_bytes)


def hash_server_seed(server_seed: str) -> str:
    """
    Compute the public commitment for a server seed.

    Args:
        server_seed: Hex server seed

    Returns:
        SHA-256 hex digest of the seed string
    """
    return sha256_hex(server_seed)


def commit_server_seed(server_seed: Optional[str] = None) -> Tuple[str, str]:
    """
    Create a commitment to a server seed.

    Args:
        server_seed: Seed to commit to; a new one is generated when omitted

    Returns:
        Tuple of (server_seed, server_seed_hash)
    """
    if server_seed is None:
        server_seed = generate_server_seed()
    return server_seed, hash_server_seed(server_seed)


def verify_commitment(server_seed: str, server_seed_hash: str) -> bool:
    """
    Check a revealed server seed against its earlier commitment.

    Args:
        server_seed: Revealed seed
        server_seed_hash: Commitment published before the round

    Returns:
        True if SHA-256(server_seed) equals the commitment
    """
    if not server_seed or not server_seed_hash:
        return False
    return hash_server_seed(server_seed) == server_seed_hash.strip().lower()
