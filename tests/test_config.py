"""Unit tests for configuration loading."""

import json

from config import (
    Config,
    UniverseConfig,
    ServerConfig,
    LoggingConfig,
    load_config,
)


class TestUniverseConfig:
    """Tests for UniverseConfig class."""

    def test_default_values(self):
        config = UniverseConfig()
        assert config.width == 64
        assert config.height == 48
        assert config.pattern == []

    def test_pattern_is_kept_as_given(self):
        config = UniverseConfig(width=5, height=5, pattern=[[1, 2], [3, 4]])
        assert config.pattern == [[1, 2], [3, 4]]

    def test_malformed_pattern_entries_do_not_fail(self):
        """Bad entries survive config loading; seeding skips them later."""
        config = UniverseConfig(width=5, height=5, pattern=[[1, 2], 5, None, [9, 9]])
        assert config.pattern == [[1, 2], 5, None, [9, 9]]


class TestServerConfig:
    """Tests for ServerConfig class."""

    def test_default_values(self):
        config = ServerConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8080


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_default_values(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.crash_file == "logs/crash.log"


class TestConfig:
    """Tests for main Config class."""

    def test_default_config(self):
        config = Config()
        assert isinstance(config.universe, UniverseConfig)
        assert isinstance(config.server, ServerConfig)
        assert isinstance(config.logging, LoggingConfig)

    def test_from_dict_partial(self):
        config = Config.from_dict({"universe": {"width": 5}, "logging": {"level": "DEBUG"}})
        assert config.universe.width == 5
        assert config.universe.height == 48
        assert config.logging.level == "DEBUG"
        assert config.server.port == 8080


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_config_reads_bundled_file(self):
        """The shipped config.json seeds a glider on a 32x24 grid."""
        config = load_config()
        assert config.universe.width == 32
        assert config.universe.height == 24
        assert len(config.universe.pattern) == 5

    def test_load_config_reads_path(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"universe": {"width": 7, "height": 3, "pattern": [[0, 0]]}}))
        config = load_config(path)
        assert (config.universe.width, config.universe.height) == (7, 3)
        assert config.universe.pattern == [[0, 0]]

    def test_load_config_missing_file(self, tmp_path):
        config = load_config(tmp_path / "nonexistent.json")
        assert config.universe.width == 64

    def test_load_config_with_malformed_pattern(self, tmp_path, log_stream):
        """A broken pattern entry does not stop the engine from starting."""
        from communication.bus import EventBus
        from life.engine import LifeEngine

        path = tmp_path / "config.json"
        path.write_text(json.dumps({"universe": {"width": 4, "height": 4, "pattern": [[0, 0], 5, [1, 1]]}}))
        config = load_config(path)
        engine = LifeEngine(bus=EventBus(), config=config.universe)
        assert engine.universe.live_cells() == [(0, 0), (1, 1)]
