"""Score-related domain exceptions."""

from .base import DomainException


class ScoreNotFoundException(DomainException):
    """Raised when a user has no score snapshot yet."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"No score found for user: {user_id}",
            code="SCORE_NOT_FOUND",
        )
        self.user_id = user_id
