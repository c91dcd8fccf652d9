"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .entry import InvalidEntryRequestException
from .score import ScoreNotFoundException

__all__ = [
    "DomainException",
    "InvalidEntryRequestException",
    "ScoreNotFoundException",
]
