"""
Domain Interfaces (Ports)
"""

from .repositories import (
    CashEstimateRepository,
    EntryRepository,
    ScoreSnapshotRepository,
)
from .clients import TextPolisherClient

__all__ = [
    "EntryRepository",
    "CashEstimateRepository",
    "ScoreSnapshotRepository",
    "TextPolisherClient",
]
