"""Unit tests for utility modules, logging and errors."""

import json
import sys

from core.errors import BaseSimError, CoordinateError
from internal.logging import LogLevel, StructuredLogger, get_logger
from utils import crash
from utils.timestamp import format_timestamp, now_micros


class TestTimestamp:
    """Tests for timestamp utilities."""

    def test_format_timestamp_iso_format(self):
        ts = format_timestamp()
        assert "T" in ts
        assert ts.endswith("Z")

    def test_format_timestamp_has_microseconds(self):
        ts = format_timestamp(1_700_000_000_123_456)
        assert ts == "2023-11-14T22:13:20.123456Z"

    def test_now_micros_reasonable_value(self):
        micros = now_micros()
        assert isinstance(micros, int)
        assert micros > 1577836808000000  # 2020-01-01


class TestStructuredLogger:
    """Tests for the JSON logger."""

    def test_emits_json_lines(self, log_stream):
        get_logger().info("hello", generation=3)
        record = json.loads(log_stream.getvalue())
        assert record["msg"] == "hello"
        assert record["level"] == "INFO"
        assert record["generation"] == 3

    def test_filters_below_level(self, log_stream):
        logger = StructuredLogger.configure(min_level=LogLevel.WARN, stream=log_stream)
        logger.info("skipped")
        logger.warn("kept")
        lines = log_stream.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["msg"] == "kept"

    def test_error_carries_error_id(self, log_stream):
        exc = CoordinateError("bad", row=9, col=9)
        get_logger().error("failed", error=exc)
        record = json.loads(log_stream.getvalue())
        assert record["error_id"] == exc.error_id
        assert exc.error_id in record["err"]

    def test_parse_level(self):
        assert LogLevel.parse("debug") is LogLevel.DEBUG
        assert LogLevel.parse("WARNING") is LogLevel.WARN
        assert LogLevel.parse("nonsense") is LogLevel.INFO


class TestErrors:
    """Tests for tracked errors."""

    def test_error_has_id_and_context(self):
        exc = CoordinateError("outside", row=5, col=1)
        assert isinstance(exc, BaseSimError)
        assert exc.context == {"row": 5, "col": 1}
        assert str(exc) == f"[{exc.error_id}] outside"
        assert exc.timestamp

    def test_index_context(self):
        assert CoordinateError("outside", index=12).context == {"index": 12}


class TestCrashHandler:
    """Tests for crash handling utilities."""

    def test_log_crash_writes_record(self, tmp_path, capsys):
        original = crash._crash_log
        crash.configure(str(tmp_path / "logs" / "crash.log"))
        try:
            try:
                raise CoordinateError("boom", row=1, col=2)
            except CoordinateError:
                record = crash.log_crash(*sys.exc_info())
        finally:
            crash.configure(original)

        written = json.loads((tmp_path / "logs" / "crash.log").read_text().strip())
        assert written["id"] == record["id"]
        assert written["type"] == "CoordinateError"
        assert written["context"] == {"row": 1, "col": 2}
        assert "CRASH" in capsys.readouterr().err

    def test_async_handler(self, tmp_path, log_stream):
        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"))
        try:
            handler = crash.create_async_handler(get_logger())
            handler(None, {"message": "task died", "exception": RuntimeError("x")})
        finally:
            crash.configure(original)

        written = json.loads((tmp_path / "crash.log").read_text().strip())
        assert written["type"] == "RuntimeError"
        assert json.loads(log_stream.getvalue())["level"] == "ERROR"

    def test_install_crash_handler(self):
        original_hook = sys.excepthook
        try:
            crash.install_crash_handler()
            assert sys.excepthook is crash.log_crash
        finally:
            sys.excepthook = original_hook
