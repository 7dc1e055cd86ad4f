"""Custom errors with tracking IDs."""

import uuid

from utils.timestamp import format_timestamp


class BaseSimError(Exception):
    """Base error with unique ID and timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = uuid.uuid4().hex[:12]
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"


class DimensionError(BaseSimError):
    """Universe constructed with zero, negative or oversized dimensions."""

    def __init__(self, message, width=None, height=None, **kwargs):
        context = kwargs.pop("context", {})
        context.update({"width": width, "height": height})
        super().__init__(message, context=context, **kwargs)


class CoordinateError(BaseSimError):
    """Row/column (or flat index) outside the grid."""

    def __init__(self, message, row=None, col=None, index=None, **kwargs):
        context = kwargs.pop("context", {})
        if index is not None:
            context["index"] = index
        else:
            context.update({"row": row, "col": col})
        super().__init__(message, context=context, **kwargs)


class GridInvariantError(BaseSimError):
    """Cell buffer length no longer matches width * height. Always a bug."""

    def __init__(self, message, expected=None, actual=None, **kwargs):
        context = kwargs.pop("context", {})
        context.update({"expected": expected, "actual": actual})
        super().__init__(message, context=context, **kwargs)
