"""Transient breadth-first traversal state."""
from enum import Enum
from typing import NamedTuple


class FrontierEntry(NamedTuple):
    """A discovered URL awaiting traversal, `depth` hops away from the seed."""
    url: str
    depth: int


class FrontierState(str, Enum):
    QUEUED = "queued"
    VISITING = "visiting"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED_VISITED = "skipped_visited"
    SKIPPED_DEPTH = "skipped_depth"
