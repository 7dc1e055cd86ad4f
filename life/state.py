import uuid

from utils.timestamp import format_timestamp


class GenerationSnapshot:
    """Immutable copy of one generation, safe to hand to subscribers."""

    __slots__ = ("id", "timestamp", "generation", "width", "height", "cells")

    def __init__(self, generation, width, height, cells, id=None, timestamp=None):
        self.id = id or uuid.uuid4().hex
        self.timestamp = timestamp or format_timestamp()
        self.generation = generation
        self.width = width
        self.height = height
        self.cells = bytes(cells)

    @classmethod
    def capture(cls, universe, generation):
        return cls(generation, universe.width, universe.height, universe.export_cells())

    @property
    def live_count(self):
        return sum(self.cells)

    def to_dict(self):
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "generation": self.generation,
            "width": self.width,
            "height": self.height,
            "live_count": self.live_count,
            "cells": list(self.cells),
        }
