"""
Matching service - fetch, score, sort and truncate for one request.

Every call re-fetches the profile and candidates and re-scores from
scratch; nothing is cached between requests.
"""

import logging
from typing import List, Optional

from guild_matching.errors import (
    MatchingFailedError,
    MissingUserIdError,
    RecommendationFailedError,
    StoreError,
    UserNotFoundError,
)
from guild_matching.models.scored_quest import ScoredQuest
from guild_matching.models.user_profile import UserProfile
from guild_matching.scoring.quest_matcher import QuestMatcher
from guild_matching.scoring.quest_recommender import QuestRecommender
from guild_matching.storage.quest_store import QuestStore
from guild_matching.utils.constants import (
    DEFAULT_MATCH_LIMIT,
    DEFAULT_NUM_RECOMMENDATIONS,
    MAX_CANDIDATE_QUESTS,
    MAX_HISTORY_RECORDS,
)


logger = logging.getLogger(__name__)


class MatchingService:
    """
    Entry points for quest matching and recommendations.

    The store is any object providing fetch_user_profile,
    fetch_available_quests and fetch_completion_history.

    Example usage:
        service = MatchingService(QuestStore())
        matches = service.match_quests("user-123", limit=10)
    """

    def __init__(
        self,
        store: Optional[QuestStore] = None,
        matcher: Optional[QuestMatcher] = None,
        recommender: Optional[QuestRecommender] = None,
    ) -> None:
        self.store = store if store is not None else QuestStore()
        self.matcher = matcher or QuestMatcher()
        self.recommender = recommender or QuestRecommender()

    def match_quests(
        self,
        user_id: Optional[str],
        limit: int = DEFAULT_MATCH_LIMIT,
    ) -> List[ScoredQuest]:
        """
        Best current matches for a user.

        Args:
            user_id: User to match
            limit: Maximum number of matches

        Returns:
            Matches sorted by descending match score; empty for non-adventurers

        Raises:
            MissingUserIdError: If user_id is missing (no store access)
            UserNotFoundError: If the user does not exist
            MatchingFailedError: If the store fails
        """
        user_id = self._require_user_id(user_id)

        try:
            profile = self._load_profile(user_id)
            if not profile.is_adventurer:
                logger.info("User %s is not an adventurer, no matches", user_id)
                return []

            quests = self.store.fetch_available_quests(max(limit, MAX_CANDIDATE_QUESTS))
        except StoreError as e:
            logger.error("Error in quest matching for user %s: %s", user_id, e)
            raise MatchingFailedError() from e

        matches = self.matcher.rank_quests(profile, quests, limit)
        logger.info(
            "Matched %d of %d quests for user %s", len(matches), len(quests), user_id
        )
        return matches

    def recommend_quests(
        self,
        user_id: Optional[str],
        num_recommendations: int = DEFAULT_NUM_RECOMMENDATIONS,
    ) -> List[ScoredQuest]:
        """
        Personalized recommendations from completion history.

        Args:
            user_id: User to recommend for
            num_recommendations: Maximum number of recommendations

        Returns:
            Recommendations sorted by descending recommendation score

        Raises:
            MissingUserIdError: If user_id is missing (no store access)
            UserNotFoundError: If the user does not exist
            RecommendationFailedError: If the store fails
        """
        user_id = self._require_user_id(user_id)

        try:
            profile = self._load_profile(user_id)
            history = self.store.fetch_completion_history(user_id, MAX_HISTORY_RECORDS)
            quests = self.store.fetch_available_quests(MAX_CANDIDATE_QUESTS)
        except StoreError as e:
            logger.error("Error in quest recommendation for user %s: %s", user_id, e)
            raise RecommendationFailedError() from e

        recommendations = self.recommender.recommend(
            profile, history, quests, num_recommendations
        )
        logger.info(
            "Recommended %d of %d quests for user %s (history of %d)",
            len(recommendations), len(quests), user_id, len(history),
        )
        return recommendations

    @staticmethod
    def _require_user_id(user_id: Optional[str]) -> str:
        if user_id is None or not str(user_id).strip():
            raise MissingUserIdError()
        return str(user_id).strip()

    def _load_profile(self, user_id: str) -> UserProfile:
        profile = self.store.fetch_user_profile(user_id)
        if profile is None:
            logger.info("User %s not found", user_id)
            raise UserNotFoundError(user_id)
        return profile
