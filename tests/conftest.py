"""Pytest fixtures for all tests."""

import io

import pytest
from httpx import AsyncClient, ASGITransport

from communication.bus import EventBus
from config import Config, UniverseConfig
from internal.logging import LogLevel, StructuredLogger
from life.engine import LifeEngine
from life.universe import Universe
from ui.app import create_app

GLIDER = [(3, 4), (4, 5), (5, 3), (5, 4), (5, 5)]


@pytest.fixture
def log_stream():
    """Capture structured log lines instead of writing to stderr."""
    stream = io.StringIO()
    StructuredLogger.configure(min_level=LogLevel.DEBUG, stream=stream)
    yield stream
    StructuredLogger.configure()


@pytest.fixture
def universe():
    """Empty 4x4 universe."""
    return Universe(4, 4)


@pytest.fixture
def glider_universe():
    """10x10 universe holding a single glider."""
    u = Universe(10, 10)
    u.seed(GLIDER)
    return u


@pytest.fixture
def universe_config():
    return UniverseConfig(width=10, height=10, pattern=GLIDER)


@pytest.fixture
async def bus():
    """Create test event bus."""
    return EventBus(queue_size=10)


@pytest.fixture
async def engine(bus, universe_config):
    """Engine over a 10x10 glider universe."""
    return LifeEngine(bus=bus, config=universe_config)


@pytest.fixture
def app_config(universe_config, tmp_path):
    config = Config(universe=universe_config)
    config.logging.crash_file = str(tmp_path / "crash.log")
    return config


@pytest.fixture
async def client(app_config):
    """Create async test client."""
    app = create_app(app_config)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
