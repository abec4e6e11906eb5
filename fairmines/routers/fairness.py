"""Fairness router for FairMines.

Stateless endpoints: they never touch the current round.
"""

from fastapi import APIRouter, Query

from fairmines.constants import DEFAULT_HOUSE_EDGE, DEFAULT_MINES, MAX_MINES, MIN_MINES
from fairmines.models.requests import VerifyRoundRequest
from fairmines.models.responses import OddsResponse, RoundVerificationResponse
from fairmines.services.fairness_service import odds_table, verify_round
from fairmines.services.game_service import clamp_house_edge

router = APIRouter(prefix="/fairness", tags=["fairness"])


@router.post("/verify", response_model=RoundVerificationResponse)
async def verify(request: VerifyRoundRequest):
    """Recompute the commitment and mine set of a finished round."""
    return verify_round(
        server_seed=request.server_seed,
        server_seed_hash=request.server_seed_hash,
        client_seed=request.client_seed,
        nonce=request.nonce,
        mines=request.mines,
    )


@router.get("/odds", response_model=OddsResponse)
async def odds(
    mines: int = Query(DEFAULT_MINES, ge=MIN_MINES, le=MAX_MINES),
    house_edge: float = Query(DEFAULT_HOUSE_EDGE),
):
    """Get the multiplier for every possible number of safe picks."""
    return odds_table(mines, clamp_house_edge(house_edge))
