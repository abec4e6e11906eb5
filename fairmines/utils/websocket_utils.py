"""WebSocket helpers for pushing round events to the display layer."""

import json
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from fairmines.exceptions import GameError


async def ws_send(ws: WebSocket, kind: str, **payload: Any) -> bool:
    """
    Send an event through a WebSocket safely.

    Args:
        ws: The WebSocket connection
        kind: Event type identifier
        **payload: Event data

    Returns:
        True if send was successful, False otherwise
    """
    try:
        state = getattr(ws, "application_state", None)
        if state not in (None, WebSocketState.CONNECTED):
            return False
        await ws.send_text(json.dumps({"type": kind, **payload}))
        return True
    except (WebSocketDisconnect, RuntimeError):
        return False


async def ws_send_error(ws: WebSocket, error: GameError) -> bool:
    """Report a rejected operation as an ``error`` event."""
    return await ws_send(ws, "error", error=error.kind, detail=error.message)
