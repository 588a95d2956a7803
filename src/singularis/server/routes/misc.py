"""Miscellaneous routes (health)."""

from typing import Any

from fastapi import APIRouter

from singularis import __version__
from singularis.server.monitor import get_monitor

router = APIRouter(prefix="/api", tags=["misc"])


@router.get("/health")
async def health() -> dict[str, Any]:
    return {
        "status": "healthy",
        "version": __version__,
        "monitorClients": get_monitor().client_count,
    }
