"""
Quest model - A company-posted task considered for matching.

Reward fields are cleaned to numbers and skills arrays to lists of strings,
so one sloppy quest row scores lower instead of aborting the ranking of
every other candidate.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from guild_matching.utils.cleaning import (
    clean_int,
    clean_optional_number,
    clean_skill_list,
    unwrap_single,
)
from guild_matching.utils.constants import QUEST_STATUS_AVAILABLE


class QuestCompany(BaseModel):
    """Summary of the company that posted a quest."""
    name: Optional[str] = None
    is_verified: bool = False

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator('is_verified', mode='before')
    @classmethod
    def _null_is_unverified(cls, value: Any) -> bool:
        return bool(value)


class Quest(BaseModel):
    """
    A scoring candidate.

    Attributes:
        difficulty: Rank letter (F-S) compared against the user's rank
        xp_reward: Experience reward, cleaned to an int (0 when missing)
        monetary_reward: Currency reward, None when the quest pays nothing
        required_skills: Free-text skill names; empty means no skill barrier
        quest_category: Category label compared against specializations
        company: Posting company summary, when the store joins it
    """
    id: str
    title: str = ""
    description: Optional[str] = None
    quest_type: Optional[str] = None
    status: str = QUEST_STATUS_AVAILABLE
    difficulty: Optional[str] = None

    xp_reward: int = 0
    skill_points_reward: int = 0
    monetary_reward: Optional[float] = None

    required_skills: List[str] = Field(default_factory=list)
    required_rank: Optional[str] = None
    max_participants: Optional[int] = None
    quest_category: Optional[str] = None

    company_id: Optional[str] = None
    company: Optional[QuestCompany] = Field(
        default=None,
        validation_alias=AliasChoices('company', 'users'),
        serialization_alias='users',
    )
    created_at: Optional[datetime] = None
    deadline: Optional[datetime] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator('id', 'company_id', mode='before')
    @classmethod
    def _ids_to_str(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator('title', mode='before')
    @classmethod
    def _null_title(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator('difficulty', 'required_rank', 'quest_category', mode='before')
    @classmethod
    def _non_string_is_missing(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator('xp_reward', mode='before')
    @classmethod
    def _clean_xp_reward(cls, value: Any) -> int:
        return clean_int(value)

    @field_validator('skill_points_reward', mode='before')
    @classmethod
    def _clean_skill_points_reward(cls, value: Any) -> int:
        return clean_int(value)

    @field_validator('monetary_reward', mode='before')
    @classmethod
    def _clean_monetary_reward(cls, value: Any) -> Optional[float]:
        return clean_optional_number(value)

    @field_validator('max_participants', mode='before')
    @classmethod
    def _clean_max_participants(cls, value: Any) -> Optional[int]:
        number = clean_optional_number(value)
        return int(number) if number is not None else None

    @field_validator('required_skills', mode='before')
    @classmethod
    def _clean_required_skills(cls, value: Any) -> List[str]:
        return clean_skill_list(value)

    @field_validator('company', mode='before')
    @classmethod
    def _unwrap_company(cls, value: Any) -> Any:
        value = unwrap_single(value)
        return value if isinstance(value, (dict, QuestCompany)) else None

    @field_validator('created_at', 'deadline', mode='before')
    @classmethod
    def _blank_timestamp(cls, value: Any) -> Any:
        return None if value == "" else value

    @property
    def is_available(self) -> bool:
        return self.status == QUEST_STATUS_AVAILABLE

    @property
    def monetary_amount(self) -> float:
        """Monetary reward with "no reward" read as zero."""
        return self.monetary_reward or 0
