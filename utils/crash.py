"""Crash hooks: uncaught exceptions end up on stderr and in the crash file."""

import json
import os
import sys
import traceback
import uuid

from utils.timestamp import format_timestamp

# Overridden from config by configure()
_crash_log = "logs/crash.log"


def configure(crash_file):
    """Set crash log file path from config."""
    global _crash_log
    _crash_log = crash_file


def _record(exc_name, exc_msg, tb, context=None):
    record = {
        "id": uuid.uuid4().hex[:12],
        "timestamp": format_timestamp(),
        "type": exc_name,
        "msg": exc_msg,
        "traceback": tb,
    }
    if context:
        record["context"] = context
    return record


def _write_crash(record):
    """Append a crash record to the crash file. Never raises."""
    try:
        log_dir = os.path.dirname(_crash_log)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(_crash_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, default=str) + "\n")
    except Exception:
        pass


def log_crash(exc_type, exc_value, exc_tb):
    """sys.excepthook replacement. Never raises."""
    exc_name = exc_type.__name__ if exc_type else "Unknown"
    exc_msg = str(exc_value) if exc_value else ""
    tb = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    context = getattr(exc_value, "context", None)
    record = _record(exc_name, exc_msg, tb, context if isinstance(context, dict) else None)

    rule = "=" * 60
    sys.stderr.write(f"\n{rule}\nCRASH [{record['id']}] {record['timestamp']}\n{rule}\n")
    sys.stderr.write(f"{exc_name}: {exc_msg}\n{'-' * 60}\n{tb}{rule}\n\n")
    _write_crash(record)
    return record


def log_async_crash(exc, context_dict, logger=None):
    """Record an exception reported by the event loop. Never raises."""
    exc_name = type(exc).__name__ if exc else "AsyncError"
    exc_msg = str(exc) if exc else context_dict.get("message", "Unknown")
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)) if exc else None

    if logger:
        logger.error("Async exception", error=exc_msg, task=str(context_dict.get("future", "unknown")))

    record = _record(exc_name, exc_msg, tb, str(context_dict))
    _write_crash(record)
    return record


def create_async_handler(logger=None):
    """Create async exception handler for event loop."""
    def handler(loop, context):
        log_async_crash(context.get("exception"), context, logger)
    return handler


def install_crash_handler():
    """Install global sync exception handler."""
    sys.excepthook = log_crash
