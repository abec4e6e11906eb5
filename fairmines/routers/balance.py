"""Balance router for FairMines."""

from fastapi import APIRouter, Depends

from fairmines.models.game import round_lock
from fairmines.models.responses import BalanceResponse
from fairmines.services.game_service import GameController, get_controller

router = APIRouter(prefix="/balance", tags=["balance"])


@router.get("", response_model=BalanceResponse)
async def get_balance(controller: GameController = Depends(get_controller)):
    """Get the player's current balance."""
    async with round_lock:
        return {"balance": controller.balance}
