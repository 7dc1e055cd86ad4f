"""Universe control routes."""

from fastapi import APIRouter, Body, Depends, Query

from ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1/control", tags=["control"])

MAX_STEPS = 1000

# Set by app.py
_engine = None


def init(engine):
    """Initialize with the engine reference."""
    global _engine
    _engine = engine


@router.post("/tick")
async def tick(steps: int = Query(1, ge=1, le=MAX_STEPS), username=Depends(verify_basic_auth)):
    """Advance the universe by `steps` generations (requires basic auth)."""
    snapshot = await _engine.tick(steps)
    return {"ok": True, "generation": snapshot.generation, "live_count": snapshot.live_count}


@router.post("/seed")
async def seed(cells: list = Body(..., embed=True), username=Depends(verify_basic_auth)):
    """Mark [row, col] pairs alive; invalid pairs are skipped (requires basic auth)."""
    accepted, rejected = await _engine.seed(cells)
    return {"ok": True, "accepted": accepted, "rejected": rejected}


@router.post("/reset")
async def reset(username=Depends(verify_basic_auth)):
    """Rebuild the universe from config (requires basic auth)."""
    snapshot = await _engine.restart()
    return {"ok": True, "generation": snapshot.generation, "live_count": snapshot.live_count}
