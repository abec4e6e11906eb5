import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from fairmines.config import settings
from fairmines.exceptions import GameError
from fairmines.utils.logging_utils import configure_logging

# Import routers
from fairmines.routers import balance, fairness, game, health, websocket

configure_logging(settings.log_level)
log = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# FastAPI + static
# ------------------------------------------------------------------------------
app = FastAPI(title="FairMines Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_here = os.path.dirname(__file__)
_static_root = os.path.join(os.path.dirname(_here), "static")
if os.path.isdir(_static_root):
    app.mount("/static", StaticFiles(directory=_static_root), name="static")


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


@app.get("/", response_class=HTMLResponse)
async def index():
    index_path = os.path.join(_static_root, "index.html")
    if os.path.exists(index_path):
        with open(index_path, "r", encoding="utf-8") as f:
            return HTMLResponse(f.read())
    return HTMLResponse("""
<!doctype html><meta charset="utf-8"><title>FairMines</title>
<h1>FairMines</h1>
<p>Static dev client missing. Place <code>static/index.html</code> in the project,
or drive the game through <code>/round/*</code> and <code>/ws/round</code>.</p>
""".strip())


# ------------------------------------------------------------------------------
# Include routers
# ------------------------------------------------------------------------------
app.include_router(health.router)
app.include_router(balance.router)
app.include_router(game.router)
app.include_router(fairness.router)
app.include_router(websocket.router)


def run():
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run("fairmines.main:app", host=settings.host, port=settings.port,
                log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
