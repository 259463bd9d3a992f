"""
Scoring primitives shared by the matcher and the recommender.

Skill overlap is deliberately loose: a required skill is covered when any
candidate skill contains it, or is contained by it, ignoring case. So
"React" covers "react", "ReactJS" and "act".
"""

from typing import Iterable, List

from guild_matching.utils.constants import MONETARY_TO_XP_RATE


def skills_overlap(candidate_skill: str, required_skill: str) -> bool:
    """Case-insensitive substring containment in either direction."""
    candidate = candidate_skill.lower()
    required = required_skill.lower()
    return required in candidate or candidate in required


def count_matching_skills(
    candidate_skills: Iterable[str],
    required_skills: Iterable[str],
) -> int:
    """
    Count required skills covered by at least one candidate skill.

    Each required skill counts at most once, however many candidate
    skills cover it. Blank strings on either side never match.

    Args:
        candidate_skills: The user's flattened skill names
        required_skills: The quest's required skills

    Returns:
        Number of covered required skills
    """
    candidates = [s for s in candidate_skills if isinstance(s, str) and s]
    return sum(
        1 for required in required_skills
        if isinstance(required, str) and required
        and any(skills_overlap(candidate, required) for candidate in candidates)
    )


def skill_overlap_fraction(
    candidate_skills: Iterable[str],
    required_skills: List[str],
) -> float:
    """
    Fraction of required skills covered, 0.0-1.0.

    A quest that requires nothing imposes no skill barrier, so an empty
    required list yields 1.0.
    """
    if not required_skills:
        return 1.0
    return count_matching_skills(candidate_skills, required_skills) / len(required_skills)


def reward_xp_equivalent(xp_reward: float, monetary_amount: float) -> float:
    """
    Average of XP and XP-converted monetary reward.

    Formula: (xp + monetary * 100) / 2
    """
    return (xp_reward + monetary_amount * MONETARY_TO_XP_RATE) / 2


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))
