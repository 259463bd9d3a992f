"""Quest matching and recommendation scoring."""

from .primitives import count_matching_skills, skill_overlap_fraction
from .quest_matcher import QuestMatcher, compute_match_score, rank_matches
from .quest_recommender import QuestRecommender, compute_recommendations

__all__ = [
    'count_matching_skills',
    'skill_overlap_fraction',
    'QuestMatcher',
    'compute_match_score',
    'rank_matches',
    'QuestRecommender',
    'compute_recommendations',
]
