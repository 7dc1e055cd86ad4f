import asyncio
import time
from enum import Enum

from core.errors import GridInvariantError
from utils.timestamp import format_timestamp


class Status(Enum):
    OK = "healthy"
    DEGRADED = "degraded"
    FAIL = "unhealthy"


class CheckResult:
    __slots__ = ("name", "status", "msg")

    def __init__(self, name, status, msg=""):
        self.name = name
        self.status = status
        self.msg = msg

    def to_dict(self):
        return {"name": self.name, "status": self.status.value, "msg": self.msg}


class HealthReport:
    __slots__ = ("status", "checks", "uptime", "timestamp")

    def __init__(self, status, checks, uptime=0):
        self.status = status
        self.checks = checks
        self.uptime = uptime
        self.timestamp = format_timestamp()

    def to_dict(self):
        return {"status": self.status.value,
                "timestamp": self.timestamp,
                "uptime": round(self.uptime, 1),
                "checks": [check.to_dict() for check in self.checks]}


_checker = None


class HealthChecker:
    def __init__(self, ttl=1.0):
        self._checks = {}
        self._cache = None
        self._cache_time = 0
        self._ttl = ttl
        self._start_time = time.time()

    def register(self, name, check_fn, critical=True):
        self._checks[name] = (check_fn, critical)
        self._cache = None

    async def check(self):
        now = time.time()
        if self._cache and now - self._cache_time < self._ttl:
            return self._cache

        results = []
        for name, (check_fn, is_critical) in self._checks.items():
            try:
                result = await asyncio.wait_for(check_fn(), timeout=5)
            except asyncio.TimeoutError:
                result = CheckResult(name, Status.FAIL, "timeout")
            except Exception as exc:
                result = CheckResult(name, Status.FAIL, str(exc))
            results.append((result, is_critical))

        status = Status.OK
        for result, is_critical in results:
            if result.status == Status.FAIL and is_critical:
                status = Status.FAIL
            elif result.status != Status.OK and status == Status.OK:
                status = Status.DEGRADED

        self._cache = HealthReport(status, [result for result, _ in results], now - self._start_time)
        self._cache_time = now
        return self._cache


def get_health_checker():
    global _checker
    if not _checker:
        _checker = HealthChecker()
    return _checker


# Checks

async def check_event_loop():
    await asyncio.sleep(0)
    return CheckResult("loop", Status.OK)


def create_bus_check(bus, max_drop_ratio=0.1):
    async def check():
        stats = bus.get_stats()
        if stats["total_published"] and stats["total_dropped"] / stats["total_published"] > max_drop_ratio:
            return CheckResult("bus", Status.DEGRADED, "drops")
        return CheckResult("bus", Status.OK, f"{stats['subscriber_count']}sub")
    return check


def create_universe_check(engine):
    async def check():
        universe = engine.universe
        try:
            universe.check_invariant()
        except GridInvariantError as exc:
            return CheckResult("universe", Status.FAIL, str(exc))
        return CheckResult("universe", Status.OK,
                           f"g{engine.generation} {universe.width}x{universe.height} pop={universe.population}")
    return check
