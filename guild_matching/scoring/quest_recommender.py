"""
Quest recommender driven by a user's completion history.

Infers preferred categories from completed quests, then scores open quests
by category preference, skill overlap, rank fit and reward size. Scores are
unbounded and only meaningful relative to each other.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional

from guild_matching.models.quest import Quest
from guild_matching.models.quest_completion import QuestCompletion
from guild_matching.models.scored_quest import (
    RECOMMENDATION_SCORE_KEY,
    QuestPreferences,
    ScoredQuest,
)
from guild_matching.models.user_profile import UserProfile
from guild_matching.utils.constants import (
    DEFAULT_NUM_RECOMMENDATIONS,
    RECOMMEND_CATEGORY_WEIGHT,
    RECOMMEND_MONETARY_DIVISOR,
    RECOMMEND_RANK_BASE,
    RECOMMEND_RANK_STEP_PENALTY,
    RECOMMEND_SKILL_WEIGHT,
    RECOMMEND_XP_DIVISOR,
)
from guild_matching.utils.ranks import rank_gap
from .primitives import count_matching_skills


logger = logging.getLogger(__name__)


class QuestRecommender:
    """
    Scorer for personalized quest recommendations.

    Unlike the matcher, the recommender does not check the user's role.

    Example usage:
        recommender = QuestRecommender()
        picks = recommender.recommend(profile, history, quests, n=5)
    """

    def build_preferences(self, history: Iterable[QuestCompletion]) -> QuestPreferences:
        """
        Aggregate category and skill frequencies from completions.

        Args:
            history: Completed quests, newest first

        Returns:
            QuestPreferences with category_counts and skill_counts
        """
        categories: Counter = Counter()
        skills: Counter = Counter()

        for completion in history:
            if completion.quest_category:
                categories[completion.quest_category] += 1
            for skill in completion.required_skills:
                skills[skill] += 1

        return QuestPreferences(
            category_counts=dict(categories),
            skill_counts=dict(skills),
        )

    def compute_recommendation_score(
        self,
        profile: UserProfile,
        quest: Quest,
        preferences: QuestPreferences,
    ) -> float:
        """
        Calculate the recommendation score for one quest.

        Formula:
        score = 10 × completions in the quest's category
              + 5 × matching required skills
              + (20 − 3 × rank gap, when the user is not under-qualified)
              + xp_reward / 100
              + monetary_reward / 10

        Category lookup is by exact label. History skill counts are not used.
        """
        score = preferences.category_count(quest.quest_category) * RECOMMEND_CATEGORY_WEIGHT

        matching = count_matching_skills(profile.skill_names, quest.required_skills)
        score += matching * RECOMMEND_SKILL_WEIGHT

        gap = rank_gap(profile.rank, quest.difficulty)
        if gap >= 0:
            score += RECOMMEND_RANK_BASE - abs(gap) * RECOMMEND_RANK_STEP_PENALTY

        score += quest.xp_reward / RECOMMEND_XP_DIVISOR
        score += quest.monetary_amount / RECOMMEND_MONETARY_DIVISOR

        return score

    def recommend(
        self,
        profile: UserProfile,
        history: Iterable[QuestCompletion],
        candidates: Iterable[Quest],
        n: Optional[int] = DEFAULT_NUM_RECOMMENDATIONS,
    ) -> List[ScoredQuest]:
        """
        Rank candidate quests for a user.

        Args:
            profile: User receiving recommendations
            history: Completed quests used to infer preferences
            candidates: Available quests
            n: Number of recommendations (None for all)

        Returns:
            ScoredQuests sorted by descending score, ties by quest id
        """
        preferences = self.build_preferences(history)
        logger.debug(
            "User %s preferences: categories=%s, skills=%s",
            profile.id, preferences.category_counts, preferences.skill_counts,
        )

        scored = [
            ScoredQuest(
                quest=quest,
                score=self.compute_recommendation_score(profile, quest, preferences),
                score_key=RECOMMENDATION_SCORE_KEY,
            )
            for quest in candidates
            if quest.is_available
        ]

        scored.sort(key=lambda s: s.sort_key)
        if n is not None:
            scored = scored[:max(n, 0)]
        return scored


def compute_recommendations(
    profile: UserProfile,
    history: Iterable[QuestCompletion],
    candidates: Iterable[Quest],
    n: Optional[int] = DEFAULT_NUM_RECOMMENDATIONS,
) -> List[ScoredQuest]:
    """
    Recommend quests for a user.

    Convenience function using default recommender.
    """
    return QuestRecommender().recommend(profile, history, candidates, n)
