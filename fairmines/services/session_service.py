"""Event-driven round session over a WebSocket.

Clients send JSON commands:
- {"type": "start", "bet": 1, "mines": 3, "house_edge": 3, "client_seed": "..."}
- {"type": "reveal", "index": 12}
- {"type": "cashout"} / {"type": "verify"} / {"type": "next"} / {"type": "state"}

The server pushes ``round_start``, ``tile``, ``end``, ``verify``, ``state``
and ``error`` events. ``end`` carries the status transition and the revealed
server seed.
"""

import json
import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from fairmines.exceptions import GameError, InvalidTileError
from fairmines.models.game import round_lock
from fairmines.services.game_service import GameController
from fairmines.utils.websocket_utils import ws_send, ws_send_error

log = logging.getLogger(__name__)


async def handle_command(ws: WebSocket, controller: GameController, data: dict):
    """Run one client command against the controller and emit its events."""
    mtype = data.get("type")

    async with round_lock:
        if mtype == "start":
            view = controller.start_round(
                bet=data.get("bet"),
                mines=data.get("mines"),
                house_edge_pct=data.get("house_edge"),
                client_seed=data.get("client_seed"),
            )
            await ws_send(ws, "round_start", **view)

        elif mtype == "reveal":
            index = data.get("index")
            if isinstance(index, bool) or not isinstance(index, int):
                raise InvalidTileError("Tile index must be an integer")
            outcome = controller.reveal_tile(index)
            await ws_send(ws, "tile", **outcome)
            if outcome["outcome"] == "mine":
                await ws_send(ws, "end", status=outcome["status"], payout=0.0,
                              balance=controller.balance, reveal=outcome["reveal"])

        elif mtype == "cashout":
            settlement = controller.cash_out()
            await ws_send(ws, "end", **settlement)

        elif mtype == "verify":
            await ws_send(ws, "verify", **controller.verify_commitment())

        elif mtype == "next":
            await ws_send(ws, "state", **controller.next_round())

        elif mtype == "state":
            await ws_send(ws, "state", **controller.state())

        else:
            await ws_send(ws, "error", error="unknown_command", detail=f"Unknown command: {mtype}")


async def run_round_session(ws: WebSocket, controller: GameController):
    """Read commands until the client disconnects.

    Args:
        ws: Accepted WebSocket connection
        controller: Controller owning the player's rounds
    """
    await ws_send(ws, "state", **controller.state())

    try:
        while True:
            raw = await ws.receive_text()
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                await ws_send(ws, "error", error="bad_message", detail="Message is not valid JSON")
                continue
            if not isinstance(data, dict):
                await ws_send(ws, "error", error="bad_message", detail="Message must be an object")
                continue

            try:
                await handle_command(ws, controller, data)
            except GameError as e:
                await ws_send_error(ws, e)

    except WebSocketDisconnect:
        log.debug("Round session disconnected")
