"""
Rank utilities for the F-S adventurer/quest rank ladder.

Rank letters are compared by their index in RANK_ORDER. Lookups never raise:
unknown rank strings resolve to the lowest rank so that malformed rank data
degrades a score instead of failing a request.
"""

from typing import Optional, Tuple

from .constants import (
    DEFAULT_RANK_INDEX,
    RANK_ORDER,
    RANK_VALUES,
    RANK_XP_THRESHOLDS,
)


def rank_index(rank: Optional[str]) -> int:
    """
    Map a rank letter to its integer index (F=0 ... S=6).

    Lookup is exact: "c" is not "C". Anything that is not one of the seven
    rank letters (None, "", "Z", "c") silently maps to DEFAULT_RANK_INDEX.

    Examples:
        >>> rank_index("C")
        3
        >>> rank_index("unknown")
        0
    """
    if not isinstance(rank, str):
        return DEFAULT_RANK_INDEX
    return RANK_VALUES.get(rank, DEFAULT_RANK_INDEX)


def rank_gap(user_rank: Optional[str], quest_rank: Optional[str]) -> int:
    """
    How many ranks the user sits above the quest.

    Positive when over-qualified, zero when equal, negative when the user
    is under-qualified.
    """
    return rank_index(user_rank) - rank_index(quest_rank)


def rank_for_xp(xp: int) -> str:
    """Get the rank earned by a given XP total."""
    earned = RANK_ORDER[0]
    for rank, threshold in RANK_XP_THRESHOLDS:
        if xp >= threshold:
            earned = rank
    return earned


def next_rank_threshold(xp: int) -> Tuple[str, Optional[int]]:
    """
    Get the current rank and the XP needed for the next one.

    Returns:
        (current_rank, next_rank_xp); next_rank_xp is None at rank S
    """
    current = rank_for_xp(xp)
    idx = RANK_VALUES[current]
    if idx + 1 < len(RANK_XP_THRESHOLDS):
        return current, RANK_XP_THRESHOLDS[idx + 1][1]
    return current, None


def rank_progress_percent(xp: int) -> float:
    """Progress toward the next rank as a percentage (0-100)."""
    current, next_xp = next_rank_threshold(xp)
    if next_xp is None:
        return 100.0

    current_xp = RANK_XP_THRESHOLDS[RANK_VALUES[current]][1]
    progress = (xp - current_xp) / (next_xp - current_xp) * 100
    return min(100.0, max(0.0, progress))
