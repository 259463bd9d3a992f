"""
Constants for the Guild quest matching engine.

This module contains all scoring weights, lookup tables, string identifiers
and query limits used throughout the application. Centralizing these makes
the scoring formulas easier to tune and to test in isolation.
"""

from typing import Dict, List, Tuple


# =============================================================================
# RANKS
# =============================================================================

# Ordered lowest to highest; the position in this tuple is the rank index.
RANK_ORDER: Tuple[str, ...] = ("F", "E", "D", "C", "B", "A", "S")

RANK_VALUES: Dict[str, int] = {rank: idx for idx, rank in enumerate(RANK_ORDER)}

# Unknown, missing or lower-case rank strings resolve to the lowest rank.
DEFAULT_RANK_INDEX = 0

# XP required to reach each rank
RANK_XP_THRESHOLDS: List[Tuple[str, int]] = [
    ("F", 0),
    ("E", 1000),
    ("D", 3000),
    ("C", 6000),
    ("B", 10000),
    ("A", 15000),
    ("S", 25000),
]


# =============================================================================
# ROLES AND STATUSES
# =============================================================================

ROLE_ADVENTURER = "adventurer"

QUEST_STATUS_AVAILABLE = "available"


# =============================================================================
# CATEGORY ADJACENCY
# =============================================================================
# Specialization -> quest categories that earn partial category credit.
# Not symmetric: "design" has no entry of its own.

CATEGORY_ADJACENCY: Dict[str, List[str]] = {
    'frontend': ['fullstack', 'design'],
    'backend': ['fullstack', 'devops'],
    'fullstack': ['frontend', 'backend'],
    'mobile': ['frontend'],
    'devops': ['backend'],
    'qa': ['backend', 'frontend'],
}


# =============================================================================
# MATCH SCORE WEIGHTS (bands sum to 100)
# =============================================================================

MATCH_RANK_MAX = 25.0
MATCH_RANK_STEP_PENALTY = 5.0      # Per rank the user is above the quest

MATCH_SKILL_MAX = 35.0

MATCH_CATEGORY_EXACT = 20.0
MATCH_CATEGORY_ADJACENT = 10.0

MATCH_COMPLETION_MAX = 20.0

MATCH_REWARD_MAX = 10.0
MATCH_REWARD_DIVISOR = 250.0       # XP-equivalent per reward point

# Monetary reward converted to XP before averaging with raw XP
MONETARY_TO_XP_RATE = 100


# =============================================================================
# RECOMMENDATION SCORE WEIGHTS (unbounded)
# =============================================================================

RECOMMEND_CATEGORY_WEIGHT = 10.0   # Per completed quest in the same category
RECOMMEND_SKILL_WEIGHT = 5.0       # Per matching required skill
RECOMMEND_RANK_BASE = 20.0
RECOMMEND_RANK_STEP_PENALTY = 3.0
RECOMMEND_XP_DIVISOR = 100.0
RECOMMEND_MONETARY_DIVISOR = 10.0


# =============================================================================
# REQUEST DEFAULTS AND QUERY LIMITS
# =============================================================================

DEFAULT_MATCH_LIMIT = 10
DEFAULT_NUM_RECOMMENDATIONS = 5

# Candidate pool caps; every request re-fetches and re-scores at most this many
MAX_CANDIDATE_QUESTS = 50
MAX_HISTORY_RECORDS = 10

# Connection pool bounds for the quest store
DB_POOL_MIN_CONNECTIONS = 1
DB_POOL_MAX_CONNECTIONS = 10
