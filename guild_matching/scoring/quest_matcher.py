"""
Quest matcher for scoring how well an adventurer fits each open quest.

Produces a 0-100 match score from five independently clamped components:
rank compatibility, skill overlap, category alignment, completion-rate
bonus and reward attractiveness.
"""

import logging
from typing import Iterable, List, Optional

from guild_matching.models.quest import Quest
from guild_matching.models.scored_quest import (
    MATCH_SCORE_KEY,
    MatchBreakdown,
    ScoredQuest,
)
from guild_matching.models.user_profile import UserProfile
from guild_matching.utils.constants import (
    CATEGORY_ADJACENCY,
    DEFAULT_MATCH_LIMIT,
    MATCH_CATEGORY_ADJACENT,
    MATCH_CATEGORY_EXACT,
    MATCH_COMPLETION_MAX,
    MATCH_RANK_MAX,
    MATCH_RANK_STEP_PENALTY,
    MATCH_REWARD_DIVISOR,
    MATCH_REWARD_MAX,
    MATCH_SKILL_MAX,
)
from guild_matching.utils.ranks import rank_gap
from .primitives import clamp, reward_xp_equivalent, skill_overlap_fraction


logger = logging.getLogger(__name__)


class QuestMatcher:
    """
    Scorer for adventurer/quest fit.

    Only adventurers are matched; any other role gets an empty ranking.
    Missing optional profile data (specialization, completion rate, skills)
    drops the dependent component to 0 rather than failing.

    Example usage:
        matcher = QuestMatcher()
        top = matcher.rank_quests(profile, quests, limit=10)
    """

    def score_breakdown(self, profile: UserProfile, quest: Quest) -> MatchBreakdown:
        """
        Score each component of the match between a user and a quest.

        Args:
            profile: User being matched
            quest: Candidate quest

        Returns:
            MatchBreakdown with every component clamped to its band
        """
        return MatchBreakdown(
            rank=self._score_rank(profile, quest),
            skill=self._score_skills(profile, quest),
            category=self._score_category(profile, quest),
            completion=self._score_completion(profile),
            reward=self._score_reward(quest),
        )

    def compute_match_score(self, profile: UserProfile, quest: Quest) -> int:
        """
        Calculate the integer match score (0-100).

        Args:
            profile: User being matched
            quest: Candidate quest

        Returns:
            Sum of components, rounded half-up
        """
        return self.score_breakdown(profile, quest).total

    def rank_quests(
        self,
        profile: UserProfile,
        quests: Iterable[Quest],
        limit: Optional[int] = DEFAULT_MATCH_LIMIT,
    ) -> List[ScoredQuest]:
        """
        Rank open quests by match score.

        Args:
            profile: User being matched
            quests: Candidate quests; quests that are not available are skipped
            limit: Maximum results to return (None for all)

        Returns:
            ScoredQuests sorted by descending score, ties by quest id
        """
        if not profile.is_adventurer:
            logger.debug("User %s has role %r, not matching", profile.id, profile.role)
            return []

        scored = []
        for quest in quests:
            if not quest.is_available:
                logger.debug("Skipping quest %s with status %r", quest.id, quest.status)
                continue

            breakdown = self.score_breakdown(profile, quest)
            scored.append(ScoredQuest(
                quest=quest,
                score=breakdown.total,
                score_key=MATCH_SCORE_KEY,
                breakdown=breakdown,
            ))

        scored.sort(key=lambda s: s.sort_key)
        if limit is not None:
            scored = scored[:max(limit, 0)]
        return scored

    def _score_rank(self, profile: UserProfile, quest: Quest) -> float:
        """
        Score rank compatibility (0-25).

        Same rank earns the full 25. Over-qualified users lose 5 points per
        rank above the quest; under-qualified users earn nothing.
        """
        if quest.difficulty == profile.rank:
            return MATCH_RANK_MAX

        gap = rank_gap(profile.rank, quest.difficulty)
        if gap < 0:
            return 0.0
        return clamp(MATCH_RANK_MAX - gap * MATCH_RANK_STEP_PENALTY, 0.0, MATCH_RANK_MAX)

    def _score_skills(self, profile: UserProfile, quest: Quest) -> float:
        """Score required-skill overlap (0-35); no requirements earns 35."""
        fraction = skill_overlap_fraction(profile.skill_names, quest.required_skills)
        return clamp(fraction * MATCH_SKILL_MAX, 0.0, MATCH_SKILL_MAX)

    def _score_category(self, profile: UserProfile, quest: Quest) -> float:
        """
        Score specialization/category alignment (0-20).

        Exact (case-insensitive) match earns 20, an adjacent category 10.
        No specialization or no quest category earns 0.
        """
        specialization = (profile.specialization or "").strip().lower()
        category = (quest.quest_category or "").strip().lower()
        if not specialization or not category:
            return 0.0

        if specialization == category:
            return MATCH_CATEGORY_EXACT
        if category in CATEGORY_ADJACENCY.get(specialization, []):
            return MATCH_CATEGORY_ADJACENT
        return 0.0

    def _score_completion(self, profile: UserProfile) -> float:
        """Score the completion-rate bonus (0-20); absent rate earns 0."""
        rate = profile.quest_completion_rate
        if rate is None:
            return 0.0
        return clamp(rate / 100 * MATCH_COMPLETION_MAX, 0.0, MATCH_COMPLETION_MAX)

    def _score_reward(self, quest: Quest) -> float:
        """
        Score reward attractiveness (0-10).

        Formula: min(10, ((xp + monetary * 100) / 2) / 250)
        """
        avg_reward = reward_xp_equivalent(quest.xp_reward, quest.monetary_amount)
        return clamp(avg_reward / MATCH_REWARD_DIVISOR, 0.0, MATCH_REWARD_MAX)


def compute_match_score(profile: UserProfile, quest: Quest) -> int:
    """
    Calculate the match score between a user and a quest.

    Convenience function using default matcher.
    """
    return QuestMatcher().compute_match_score(profile, quest)


def rank_matches(
    profile: UserProfile,
    quests: Iterable[Quest],
    limit: Optional[int] = DEFAULT_MATCH_LIMIT,
) -> List[ScoredQuest]:
    """
    Rank quests for a user by match score.

    Convenience function using default matcher.
    """
    return QuestMatcher().rank_quests(profile, quests, limit)
