import json
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"


class UniverseConfig:
    __slots__ = ("width", "height", "pattern")

    def __init__(self, width=64, height=48, pattern=None):
        self.width = width
        self.height = height
        # initial live cells as [row, col] pairs; bad entries are skipped when seeding
        self.pattern = list(pattern) if pattern else []


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "crash_file")

    def __init__(self, level="INFO", crash_file="logs/crash.log"):
        self.level = level
        self.crash_file = crash_file


class Config:
    __slots__ = ("universe", "server", "logging")

    def __init__(self, universe=None, server=None, logging=None):
        self.universe = universe or UniverseConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            UniverseConfig(**d.get("universe", {})),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path, encoding="utf-8") as file:
        return Config.from_dict(json.load(file))
