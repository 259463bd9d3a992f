"""Data models for the Guild quest matching engine."""

from .user_profile import UserProfile, AdventurerProfile, SkillProgress
from .quest import Quest, QuestCompany
from .quest_completion import QuestCompletion
from .scored_quest import (
    MatchBreakdown,
    QuestPreferences,
    ScoredQuest,
    MATCH_SCORE_KEY,
    RECOMMENDATION_SCORE_KEY,
)

__all__ = [
    'UserProfile',
    'AdventurerProfile',
    'SkillProgress',
    'Quest',
    'QuestCompany',
    'QuestCompletion',
    'MatchBreakdown',
    'QuestPreferences',
    'ScoredQuest',
    'MATCH_SCORE_KEY',
    'RECOMMENDATION_SCORE_KEY',
]
