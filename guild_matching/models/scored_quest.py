"""
Scoring result models.

MatchBreakdown holds the five clamped components of a match score,
QuestPreferences the frequency maps inferred from completion history, and
ScoredQuest pairs a quest with the score it was ranked by.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple

from guild_matching.utils.constants import (
    MATCH_CATEGORY_EXACT,
    MATCH_COMPLETION_MAX,
    MATCH_RANK_MAX,
    MATCH_REWARD_MAX,
    MATCH_SKILL_MAX,
)
from .quest import Quest


# Wire names for the score attached to each quest in API responses
MATCH_SCORE_KEY = 'matchScore'
RECOMMENDATION_SCORE_KEY = 'recommendationScore'


@dataclass(frozen=True)
class MatchBreakdown:
    """
    Components of a 0-100 match score.

    Every component is clamped to its band before summation, so the total
    can never leave 0-100.

    Attributes:
        rank: Rank compatibility (0-25)
        skill: Required-skill overlap (0-35)
        category: Specialization/category alignment (0-20)
        completion: Historical completion-rate bonus (0-20)
        reward: Reward attractiveness (0-10)

    Properties:
        raw_total: Unrounded sum of components
        total: Sum rounded half-up to an integer
    """

    rank: float
    skill: float
    category: float
    completion: float
    reward: float

    def __post_init__(self) -> None:
        """
        Validate each component against its band.

        Raises:
            ValueError: If any component is outside its band
        """
        for name, value, upper in [
            ('rank', self.rank, MATCH_RANK_MAX),
            ('skill', self.skill, MATCH_SKILL_MAX),
            ('category', self.category, MATCH_CATEGORY_EXACT),
            ('completion', self.completion, MATCH_COMPLETION_MAX),
            ('reward', self.reward, MATCH_REWARD_MAX),
        ]:
            if value < 0 or value > upper:
                raise ValueError(
                    f"{name} component must be between 0 and {upper}, got: {value}"
                )

    @property
    def raw_total(self) -> float:
        return self.rank + self.skill + self.category + self.completion + self.reward

    @property
    def total(self) -> int:
        """
        Integer match score.

        Halves round up (96.5 -> 97), not to even.
        """
        rounded = Decimal(str(self.raw_total)).quantize(
            Decimal('1'), rounding=ROUND_HALF_UP
        )
        return int(rounded)

    def __str__(self) -> str:
        return (
            f"MatchBreakdown(total={self.total}, rank={self.rank:.1f}, "
            f"skill={self.skill:.1f}, category={self.category:.1f}, "
            f"completion={self.completion:.1f}, reward={self.reward:.1f})"
        )


@dataclass
class QuestPreferences:
    """
    Preferences inferred from completed quests.

    Attributes:
        category_counts: Completed quests per category label
        skill_counts: Occurrences of each required skill across completions.
            Aggregated for reporting; recommendation scoring does not read it.
    """

    category_counts: Dict[str, int] = field(default_factory=dict)
    skill_counts: Dict[str, int] = field(default_factory=dict)

    def category_count(self, category: Optional[str]) -> int:
        """Completions in a category, 0 for unseen or missing categories."""
        if not category:
            return 0
        return self.category_counts.get(category, 0)

    @property
    def top_categories(self) -> List[Tuple[str, int]]:
        """Categories ranked by completion count (highest first)."""
        return sorted(self.category_counts.items(), key=lambda x: (-x[1], x[0]))

    @property
    def is_empty(self) -> bool:
        return not self.category_counts and not self.skill_counts


@dataclass(frozen=True)
class ScoredQuest:
    """
    A quest together with the score it was ranked by.

    Attributes:
        quest: The scored quest
        score: Match score (int, 0-100) or recommendation score (unbounded)
        score_key: Wire name of the score ('matchScore' or 'recommendationScore')
        breakdown: Match components, present for match results only
    """

    quest: Quest
    score: float
    score_key: str = MATCH_SCORE_KEY
    breakdown: Optional[MatchBreakdown] = None

    @property
    def sort_key(self) -> Tuple[float, str]:
        """Descending score, then quest id ascending."""
        return (-self.score, self.quest.id)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize as the quest's fields plus the score under score_key.

        Timestamps are rendered as ISO strings and the posting company
        appears under "users", the name API consumers read it by.
        """
        data = self.quest.model_dump(mode='json', by_alias=True)
        data[self.score_key] = self.score
        return data
