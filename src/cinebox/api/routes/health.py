"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        API status plus whether the background job scheduler is running
    """
    scheduler = getattr(request.app.state, "scheduler", None)
    running = scheduler is not None and scheduler.running
    return {"status": "ok", "scheduler": "running" if running else "stopped"}
