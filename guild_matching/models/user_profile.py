"""
UserProfile model - Read-only snapshot of a user for quest scoring.

Uses Pydantic v2 for validation. Validators are lenient on purpose: a
missing specialization, a null skills array or a garbled completion rate
reduce the matching score component that depends on them to its minimum
instead of rejecting the whole profile.
"""

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from guild_matching.utils.cleaning import (
    clean_int,
    clean_optional_number,
    clean_skill_list,
    unwrap_single,
)
from guild_matching.utils.constants import ROLE_ADVENTURER


class SkillProgress(BaseModel):
    """Progress on one skill tree node."""
    skill_id: str
    level: int = 0
    experience_points: int = 0

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator('skill_id', mode='before')
    @classmethod
    def _skill_id_to_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, (int, float)) else value

    @field_validator('level', 'experience_points', mode='before')
    @classmethod
    def _clean_counters(cls, value: Any) -> int:
        return clean_int(value)


class AdventurerProfile(BaseModel):
    """
    Adventurer-specific profile data.

    Attributes:
        specialization: Primary category label (frontend, backend, ...)
        primary_skills: Free-text skill names
        quest_completion_rate: Percentage 0-100, None when never computed
    """
    specialization: Optional[str] = None
    primary_skills: List[str] = Field(default_factory=list)
    quest_completion_rate: Optional[float] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator('specialization', mode='before')
    @classmethod
    def _blank_specialization(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @field_validator('primary_skills', mode='before')
    @classmethod
    def _clean_primary_skills(cls, value: Any) -> List[str]:
        return clean_skill_list(value)

    @field_validator('quest_completion_rate', mode='before')
    @classmethod
    def _clean_completion_rate(cls, value: Any) -> Optional[float]:
        return clean_optional_number(value)


class UserProfile(BaseModel):
    """
    User snapshot consumed by the matcher and recommender.

    Accepts the store's row shape directly: the adventurer profile may be
    delivered under "adventurer_profiles" and wrapped in a one-element list.
    """
    id: str
    role: str = ""
    rank: Optional[str] = None
    xp: int = 0
    skill_points: int = 0
    level: int = 0

    adventurer_profile: Optional[AdventurerProfile] = Field(
        default=None,
        validation_alias=AliasChoices('adventurer_profile', 'adventurer_profiles'),
    )
    skill_progress: List[SkillProgress] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator('id', mode='before')
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator('role', mode='before')
    @classmethod
    def _clean_role(cls, value: Any) -> str:
        return value.strip().lower() if isinstance(value, str) else ""

    @field_validator('rank', mode='before')
    @classmethod
    def _clean_rank(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator('xp', 'skill_points', 'level', mode='before')
    @classmethod
    def _clean_counters(cls, value: Any) -> int:
        return clean_int(value)

    @field_validator('adventurer_profile', mode='before')
    @classmethod
    def _unwrap_profile(cls, value: Any) -> Any:
        value = unwrap_single(value)
        return value if isinstance(value, (dict, AdventurerProfile)) else None

    @field_validator('skill_progress', mode='before')
    @classmethod
    def _clean_skill_progress(cls, value: Any) -> List[Any]:
        # Entries without a skill id carry nothing the scorers can use
        if not isinstance(value, (list, tuple)):
            return []
        return [
            item for item in value
            if isinstance(item, SkillProgress)
            or (isinstance(item, dict) and item.get('skill_id') not in (None, ''))
        ]

    @property
    def is_adventurer(self) -> bool:
        """Whether this user may be matched against quests."""
        return self.role == ROLE_ADVENTURER

    @property
    def specialization(self) -> Optional[str]:
        if self.adventurer_profile is None:
            return None
        return self.adventurer_profile.specialization

    @property
    def primary_skills(self) -> List[str]:
        if self.adventurer_profile is None:
            return []
        return list(self.adventurer_profile.primary_skills)

    @property
    def quest_completion_rate(self) -> Optional[float]:
        if self.adventurer_profile is None:
            return None
        return self.adventurer_profile.quest_completion_rate

    @property
    def skill_names(self) -> List[str]:
        """
        Flattened candidate skill list.

        primary_skills followed by the skill ids of every SkillProgress
        entry. Duplicates are kept; overlap counting is per required skill.
        """
        return self.primary_skills + [sp.skill_id for sp in self.skill_progress]
