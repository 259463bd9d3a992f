"""
QuestCompletion model - One entry of a user's completed-quest history.

Only used in aggregate by the recommender (category and skill frequency
counts). Accepts either a flat row or the nested shape where the completed
quest's category and skills sit under a "quests" relation.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from guild_matching.utils.cleaning import clean_skill_list, unwrap_single


class QuestCompletion(BaseModel):
    """
    Completed quest, joined with the quest's category and skills.

    Attributes:
        quest_id: Completed quest
        user_id: Adventurer who completed it
        quest_category: Category of the quest at fetch time
        required_skills: Required skills of the quest at fetch time
        completed_at: Completion timestamp; history is fetched newest-first
    """
    quest_id: str
    user_id: Optional[str] = None
    quest_category: Optional[str] = None
    required_skills: List[str] = Field(default_factory=list)
    completed_at: Optional[datetime] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @model_validator(mode='before')
    @classmethod
    def _flatten_joined_quest(cls, data: Any) -> Any:
        if not isinstance(data, dict) or 'quests' not in data:
            return data

        flat: Dict[str, Any] = {k: v for k, v in data.items() if k != 'quests'}
        joined = unwrap_single(data['quests'])
        if isinstance(joined, dict):
            flat.setdefault('quest_category', joined.get('quest_category'))
            flat.setdefault('required_skills', joined.get('required_skills'))
        return flat

    @field_validator('quest_id', 'user_id', mode='before')
    @classmethod
    def _ids_to_str(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator('quest_category', mode='before')
    @classmethod
    def _blank_category(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value:
            return None
        return value

    @field_validator('required_skills', mode='before')
    @classmethod
    def _clean_required_skills(cls, value: Any) -> List[str]:
        return clean_skill_list(value)
