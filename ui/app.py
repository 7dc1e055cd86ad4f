"""FastAPI application factory."""

import asyncio
import html
import json
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, StreamingResponse

from communication.bus import EventBus
from config import load_config
from core.health import (
    get_health_checker,
    check_event_loop,
    create_bus_check,
    create_universe_check,
)
from internal.logging import get_logger, LogLevel, StructuredLogger
from life.engine import LifeEngine
from utils.crash import create_async_handler
from ui.routes import control, api, health

VERSION = "1.0.0"

_INDEX_TEMPLATE = """<!doctype html>
<html>
<head><meta charset="utf-8"><title>Game of Life</title></head>
<body>
<p>generation {generation} &middot; {width}x{height} &middot; {live_count} alive</p>
<pre style="line-height: 1">{grid}</pre>
</body>
</html>
"""


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    StructuredLogger.configure(min_level=LogLevel.parse(config.logging.level))
    logger_instance = get_logger()

    bus = EventBus(queue_size=100)
    engine = LifeEngine(bus=bus, config=config.universe)
    health_checker = get_health_checker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("event_bus", create_bus_check(bus), critical=False)
    health_checker.register("universe", create_universe_check(engine), critical=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=VERSION)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        logger_instance.info("Application started successfully")

        yield

        logger_instance.info("Application shutting down", generation=engine.generation)

    app = FastAPI(
        title="Game of Life",
        version=VERSION,
        description="toroidal Game of Life host",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.bus = bus

    control.init(engine)
    api.init(engine, bus)
    health.init(engine, health_checker)

    app.include_router(control.router)
    app.include_router(api.router)
    app.include_router(health.router)

    @app.get("/", response_class=HTMLResponse)
    async def index():
        """Current grid as a plain text dump."""
        snapshot = await engine.get_snapshot()
        return _INDEX_TEMPLATE.format(
            generation=snapshot.generation,
            width=snapshot.width,
            height=snapshot.height,
            live_count=snapshot.live_count,
            grid=html.escape(await engine.render()),
        )

    @app.get("/events")
    async def events(request: Request):
        """SSE endpoint - streams generation snapshots to clients."""
        subscriber_name = f"ui-{uuid.uuid4().hex[:8]}"
        sub = await bus.subscribe(subscriber_name, max_queue_size=10)

        async def event_generator():
            try:
                snapshot = await engine.get_snapshot()
                yield format_sse("generation", snapshot.to_dict())

                while True:
                    if await request.is_disconnected():
                        break

                    try:
                        item = await asyncio.wait_for(sub.queue.get(), timeout=1.0)
                    except asyncio.TimeoutError:
                        yield ": keep-alive\n\n"
                        continue

                    yield format_sse("generation", item.to_dict())
            finally:
                await bus.unsubscribe(subscriber_name)

        return StreamingResponse(event_generator(), media_type="text/event-stream")

    return app


def format_sse(event, data):
    """Format data as Server-Sent Event."""
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"
