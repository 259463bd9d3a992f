"""Request-level orchestration of store fetches and scoring."""

from .matching_service import MatchingService

__all__ = [
    'MatchingService',
]
