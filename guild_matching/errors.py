"""
Exceptions raised by the matching service and quest store.

Every error carries the HTTP status the API layer should answer with.
"""


class MatchingError(Exception):
    """Base exception for matching/recommendation errors."""

    status_code = 500


class MissingUserIdError(MatchingError):
    """Raised when a request does not name a user."""

    status_code = 400

    def __init__(self, message: str = "User ID is required"):
        super().__init__(message)


class UserNotFoundError(MatchingError):
    """Raised when a user id does not resolve to a profile."""

    status_code = 404

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("User not found")


class StoreError(MatchingError):
    """Raised when the quest store cannot complete a query."""


class MatchingFailedError(MatchingError):
    """Raised when quest matching fails for reasons other than bad input."""

    def __init__(self, message: str = "Failed to match quests"):
        super().__init__(message)


class RecommendationFailedError(MatchingError):
    """Raised when quest recommendation fails for reasons other than bad input."""

    def __init__(self, message: str = "Failed to generate recommendations"):
        super().__init__(message)
