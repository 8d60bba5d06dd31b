"""Ports (interfaces) for the pagination controller.

This module contains Protocol definitions that define the boundaries between
the controller core and its collaborators (item sources, history).
"""

from loadmore.ports.history import HistorySink, SeedingHistorySink
from loadmore.ports.sources import (
    ContentSource,
    MutableSource,
    PageFetcher,
    PageRequest,
    PageResult,
)

__all__ = [
    # Data classes
    "PageRequest",
    "PageResult",
    # Protocols
    "ContentSource",
    "HistorySink",
    "MutableSource",
    "PageFetcher",
    "SeedingHistorySink",
]
