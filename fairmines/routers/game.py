"""Round router for FairMines.

Thin HTTP adapter over the GameController state machine. Domain errors are
translated to HTTP responses by the exception handler in ``fairmines.main``.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from fairmines.models.game import round_lock
from fairmines.models.requests import RevealTileRequest, StartRoundRequest
from fairmines.models.responses import (
    CommitmentResponse,
    SettlementResponse,
    TileOutcomeResponse,
    VerificationResponse,
)
from fairmines.services.game_service import GameController, get_controller

router = APIRouter(prefix="/round", tags=["round"])


@router.post("/start", response_model=CommitmentResponse)
async def start_round(
    request: Optional[StartRoundRequest] = Body(None),
    controller: GameController = Depends(get_controller),
):
    """Start a round.

    Debits the bet and returns the server seed hash, the effective client
    seed and the nonce. The mine set is fixed before this returns.
    """
    request = request or StartRoundRequest()
    async with round_lock:
        return controller.start_round(
            bet=request.bet,
            mines=request.mines,
            house_edge_pct=request.house_edge,
            client_seed=request.client_seed,
        )


@router.post("/reveal", response_model=TileOutcomeResponse, response_model_exclude_none=True)
async def reveal_tile(
    request: RevealTileRequest,
    controller: GameController = Depends(get_controller),
):
    """Reveal a tile of the active round."""
    async with round_lock:
        return controller.reveal_tile(request.index)


@router.post("/cashout", response_model=SettlementResponse)
async def cash_out(controller: GameController = Depends(get_controller)):
    """Cash out the active round and reveal the server seed."""
    async with round_lock:
        return controller.cash_out()


@router.get("/verify", response_model=VerificationResponse)
async def verify_commitment(controller: GameController = Depends(get_controller)):
    """Verify the last settled round against its commitment."""
    async with round_lock:
        return controller.verify_commitment()


@router.post("/next")
async def next_round(controller: GameController = Depends(get_controller)):
    """Clear a finished round."""
    async with round_lock:
        return controller.next_round()


@router.get("/state")
async def round_state(controller: GameController = Depends(get_controller)):
    """Get the board and round status for rendering."""
    async with round_lock:
        return controller.state()
