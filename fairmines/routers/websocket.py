"""WebSocket router for FairMines round sessions."""

from fastapi import APIRouter, Depends, WebSocket

from fairmines.services.game_service import GameController, get_controller
from fairmines.services.session_service import run_round_session

router = APIRouter(tags=["websocket"])


@router.websocket("/ws/round")
async def ws_round(ws: WebSocket, controller: GameController = Depends(get_controller)):
    """WebSocket endpoint driving rounds with event pushes."""
    await ws.accept()
    await run_round_session(ws, controller)
