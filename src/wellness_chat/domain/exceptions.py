"""
domain.exceptions - Custom exception hierarchy for the wellness chat tracker.

All domain-level errors inherit from DomainError so callers can catch
broad or specific exceptions as needed.
"""


class DomainError(Exception):
    """Base exception for all domain-level errors."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class UserNotFoundError(NotFoundError):
    """Raised when a user id does not match any profile."""

    def __init__(self, user_id: int):
        super().__init__(f"User with id {user_id} not found")
        self.user_id = user_id


class MessageNotFoundError(NotFoundError):
    """Raised when a chat message id does not exist."""

    def __init__(self, message_id: int):
        super().__init__(f"Chat message with id {message_id} not found")
        self.message_id = message_id


class RecommendationNotFoundError(NotFoundError):
    """Raised when a recommendation id does not exist."""

    def __init__(self, recommendation_id: int):
        super().__init__(f"Recommendation with id {recommendation_id} not found")
        self.recommendation_id = recommendation_id


class InvalidRecordError(DomainError):
    """Raised when a draft violates its invariants (e.g. zero duration)."""


class DuplicateEmailError(DomainError):
    """Raised when registering a profile with an email that already exists."""


class RepositoryError(DomainError):
    """Raised when a database operation fails."""
