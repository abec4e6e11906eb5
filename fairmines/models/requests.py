"""Pydantic request models for FairMines API."""

from typing import Optional

from pydantic import BaseModel, Field

from fairmines.constants import TOTAL_TILES


class StartRoundRequest(BaseModel):
    """Request to start a round. Out-of-range values are clamped, not rejected."""
    bet: Optional[float] = None
    mines: Optional[float] = None
    house_edge: Optional[float] = None
    client_seed: Optional[str] = None


class RevealTileRequest(BaseModel):
    """Request to reveal a tile."""
    index: int = Field(..., ge=0, le=TOTAL_TILES - 1)


class VerifyRoundRequest(BaseModel):
    """Public inputs of a finished round, for independent verification."""
    server_seed: str = Field(..., min_length=1)
    server_seed_hash: str = Field(..., min_length=1)
    client_seed: str
    nonce: int = Field(..., ge=0)
    mines: int = Field(..., ge=1, le=TOTAL_TILES - 1)
