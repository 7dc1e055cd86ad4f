import asyncio

from config import load_config
from internal.logging import get_logger
from life.state import GenerationSnapshot
from life.universe import Universe


class LifeEngine:
    """Owns the host's universe and publishes every change on the bus.

    Nothing here runs on a timer: generations only advance when a caller
    asks for them through ``tick``.
    """

    def __init__(self, bus, config=None):
        self.bus = bus
        self.config = config or load_config().universe
        self._lock = asyncio.Lock()
        self._log = get_logger()
        self.universe = None
        self.generation = 0
        self.reset()

    def reset(self):
        """Fresh universe from config, seeded with the configured pattern."""
        universe = Universe(self.config.width, self.config.height)
        universe.seed(self.config.pattern)
        self.universe = universe
        self.generation = 0
        self._log.info("universe reset", width=universe.width, height=universe.height,
                       population=universe.population)

    def _advance(self, steps):
        for _ in range(steps):
            self.universe.advance_generation()
            self.generation += 1
        return GenerationSnapshot.capture(self.universe, self.generation)

    async def tick(self, steps=1):
        # Generations are CPU bound; run them in a worker thread so the loop
        # keeps serving requests. The lock still serializes universe access.
        async with self._lock:
            snapshot = await asyncio.to_thread(self._advance, steps)
        self._log.debug("tick", generation=snapshot.generation, steps=steps, population=snapshot.live_count)
        await self.bus.publish(snapshot)
        return snapshot

    async def seed(self, coordinates):
        """Seed live cells; returns (accepted, rejected) counts."""
        coordinates = list(coordinates)
        async with self._lock:
            accepted = self.universe.seed(coordinates)
            snapshot = GenerationSnapshot.capture(self.universe, self.generation)
        rejected = len(coordinates) - accepted
        if rejected:
            self._log.warn("seed partially rejected", accepted=accepted, rejected=rejected)
        await self.bus.publish(snapshot)
        return accepted, rejected

    async def restart(self):
        async with self._lock:
            self.reset()
            snapshot = GenerationSnapshot.capture(self.universe, self.generation)
        await self.bus.publish(snapshot)
        return snapshot

    async def get_snapshot(self):
        async with self._lock:
            return GenerationSnapshot.capture(self.universe, self.generation)

    async def render(self):
        async with self._lock:
            return self.universe.render()
