"""Health check router for FairMines."""

from fastapi import APIRouter

from fairmines.config import settings
from fairmines.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return {"status": "ok", "env": settings.app_env, "version": settings.app_version}
