"""Pydantic response models for FairMines API."""

from typing import List, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    env: str
    version: str


class BalanceResponse(BaseModel):
    """Current balance."""
    balance: float


class CommitmentResponse(BaseModel):
    """Commitment shown at round start; the server seed stays hidden."""
    server_seed_hash: str
    client_seed: str
    nonce: int
    bet: float
    mines: int
    house_edge_pct: float
    balance: float
    status: str


class RevealData(BaseModel):
    """Revealed round secrets (server seed only after settlement)."""
    server_seed: Optional[str] = None
    server_seed_hash: str
    client_seed: str
    nonce: int
    mines: int
    mine_positions: Optional[List[int]] = None


class TileOutcomeResponse(BaseModel):
    """Result of revealing one tile."""
    index: int
    outcome: str  # safe | mine
    multiplier: float
    safe_reveals: int
    status: str
    cash_out_value: Optional[float] = None
    reveal: Optional[RevealData] = None


class SettlementResponse(BaseModel):
    """Result of cashing out."""
    payout: float
    multiplier: float
    balance: float
    status: str
    reveal: RevealData


class VerificationResponse(BaseModel):
    """Commitment check of the last settled round."""
    verified: bool
    server_seed: str
    server_seed_hash: str
    recomputed_hash: str


class RoundVerificationResponse(BaseModel):
    """Independent re-derivation of a round."""
    commitment_valid: bool
    recomputed_hash: str
    mine_positions: List[int]
    tile_order: List[int]


class OddsEntry(BaseModel):
    """Multiplier after a number of safe picks."""
    safe_picks: int
    multiplier: float


class OddsResponse(BaseModel):
    """Multiplier table for a board configuration."""
    mines: int
    house_edge_pct: float
    multipliers: List[OddsEntry]
