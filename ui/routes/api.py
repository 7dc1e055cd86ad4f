"""Read-only universe routes plus stats and subscribers."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from utils.timestamp import format_timestamp
from ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1", tags=["api"])

# Set by app.py
_engine = None
_bus = None


def init(engine, bus):
    """Initialize with engine and bus references."""
    global _engine, _bus
    _engine = engine
    _bus = bus


@router.get("/universe")
async def universe():
    """Current generation as JSON, cells row-major as 0/1."""
    snapshot = await _engine.get_snapshot()
    return snapshot.to_dict()


@router.get("/universe/render", response_class=PlainTextResponse)
async def render():
    """Human-readable grid, one line per row."""
    return await _engine.render()


@router.get("/universe/cells")
async def cells():
    """Raw row-major 0/1 bytes for hosts that draw the buffer themselves."""
    snapshot = await _engine.get_snapshot()
    return Response(
        content=snapshot.cells,
        media_type="application/octet-stream",
        headers={
            "X-Universe-Width": str(snapshot.width),
            "X-Universe-Height": str(snapshot.height),
            "X-Universe-Generation": str(snapshot.generation),
        },
    )


@router.get("/stats")
async def stats(username=Depends(verify_basic_auth)):
    """Return bus and universe statistics (requires basic auth)."""
    snapshot = await _engine.get_snapshot()
    return {
        "timestamp": format_timestamp(),
        "universe": {
            "generation": snapshot.generation,
            "width": snapshot.width,
            "height": snapshot.height,
            "live_count": snapshot.live_count,
        },
        "bus": _bus.get_stats(),
    }


@router.get("/subscribers")
async def subscribers(username=Depends(verify_basic_auth)):
    """Return info about all current subscribers (requires basic auth)."""
    return await _bus.get_subscriber_info()
