"""Entry-related domain exceptions."""

from .base import DomainException


class InvalidEntryRequestException(DomainException):
    """Raised when a daily entry or cash estimate request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_ENTRY_REQUEST",
        )
