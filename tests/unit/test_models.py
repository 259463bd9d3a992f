"""
Unit tests for data models.

Tests cover:
- UserProfile: store row shapes, lenient cleaning, derived skill list
- Quest: reward/skills cleaning, company join
- QuestCompletion: flat and nested shapes
- MatchBreakdown / ScoredQuest: validation, rounding, serialization
"""

import pytest
from datetime import datetime
from pydantic import ValidationError

from guild_matching.models.quest import Quest
from guild_matching.models.quest_completion import QuestCompletion
from guild_matching.models.scored_quest import (
    MatchBreakdown,
    QuestPreferences,
    ScoredQuest,
)
from guild_matching.models.user_profile import AdventurerProfile, UserProfile


# =============================================================================
# UserProfile Tests
# =============================================================================

class TestUserProfile:
    """Tests for UserProfile model."""

    def test_profile_from_store_row(self):
        profile = UserProfile.model_validate({
            "id": 42,
            "role": "Adventurer",
            "rank": "B",
            "xp": "10500",
            "adventurer_profiles": [{
                "specialization": " backend ",
                "primary_skills": ["Go", "", None, "Postgres"],
                "quest_completion_rate": "75.5",
            }],
            "skill_progress": [
                {"skill_id": "docker", "level": 3, "experience_points": 400},
                {"skill_id": None, "level": 1},
            ],
        })

        assert profile.id == "42"
        assert profile.is_adventurer
        assert profile.xp == 10500
        assert profile.specialization == "backend"
        assert profile.primary_skills == ["Go", "Postgres"]
        assert profile.quest_completion_rate == 75.5
        assert profile.skill_names == ["Go", "Postgres", "docker"]

    def test_accepts_model_instance_for_adventurer_profile(self):
        profile = UserProfile(
            id="u1",
            role="adventurer",
            adventurer_profile=AdventurerProfile(specialization="qa"),
        )
        assert profile.specialization == "qa"

    def test_missing_adventurer_profile(self):
        profile = UserProfile.model_validate({"id": "u1", "adventurer_profiles": []})

        assert profile.adventurer_profile is None
        assert profile.specialization is None
        assert profile.primary_skills == []
        assert profile.quest_completion_rate is None
        assert profile.skill_names == []

    def test_garbled_optional_fields_degrade(self):
        profile = UserProfile.model_validate({
            "id": "u1",
            "role": None,
            "rank": 3,
            "xp": None,
            "adventurer_profiles": {
                "specialization": 7,
                "primary_skills": "React",
                "quest_completion_rate": "n/a",
            },
            "skill_progress": None,
        })

        assert profile.role == ""
        assert not profile.is_adventurer
        assert profile.rank is None
        assert profile.xp == 0
        assert profile.specialization is None
        assert profile.primary_skills == []
        assert profile.quest_completion_rate is None
        assert profile.skill_progress == []

    def test_missing_id_rejected(self):
        with pytest.raises(ValidationError):
            UserProfile.model_validate({"role": "adventurer"})

    def test_profile_is_frozen(self):
        profile = UserProfile(id="u1")
        with pytest.raises(ValidationError):
            profile.rank = "S"


# =============================================================================
# Quest Tests
# =============================================================================

class TestQuest:
    """Tests for Quest model."""

    def test_quest_from_store_row(self):
        quest = Quest.model_validate({
            "id": 7,
            "title": "Build API",
            "status": "available",
            "difficulty": "B",
            "xp_reward": "1200",
            "monetary_reward": "50.5",
            "required_skills": ["Python", " FastAPI "],
            "quest_category": "backend",
            "company_id": 99,
            "created_at": "2024-10-01T12:00:00",
            "deadline": "",
            "users": [{"name": "Acme", "is_verified": None}],
        })

        assert quest.id == "7"
        assert quest.xp_reward == 1200
        assert quest.monetary_reward == 50.5
        assert quest.monetary_amount == 50.5
        assert quest.required_skills == ["Python", "FastAPI"]
        assert quest.company_id == "99"
        assert quest.created_at == datetime(2024, 10, 1, 12, 0)
        assert quest.deadline is None
        assert quest.company.name == "Acme"
        assert quest.company.is_verified is False
        assert quest.is_available

    def test_null_fields_default(self):
        quest = Quest.model_validate({
            "id": "q1",
            "title": None,
            "xp_reward": None,
            "monetary_reward": None,
            "required_skills": None,
            "quest_category": None,
            "difficulty": None,
            "max_participants": "3",
        })

        assert quest.title == ""
        assert quest.xp_reward == 0
        assert quest.monetary_reward is None
        assert quest.monetary_amount == 0
        assert quest.required_skills == []
        assert quest.quest_category is None
        assert quest.max_participants == 3
        assert quest.company is None

    def test_non_available_status(self):
        assert not Quest(id="q1", status="in_progress").is_available


# =============================================================================
# QuestCompletion Tests
# =============================================================================

class TestQuestCompletion:
    """Tests for QuestCompletion model."""

    def test_flat_row(self):
        completion = QuestCompletion.model_validate({
            "quest_id": 5,
            "user_id": "u1",
            "quest_category": "frontend",
            "required_skills": ["React"],
            "completed_at": datetime(2024, 9, 1),
        })
        assert completion.quest_id == "5"
        assert completion.quest_category == "frontend"
        assert completion.required_skills == ["React"]

    def test_nested_quests_relation(self):
        completion = QuestCompletion.model_validate({
            "quest_id": "q1",
            "quests": [{"quest_category": "devops", "required_skills": ["Terraform"]}],
        })
        assert completion.quest_category == "devops"
        assert completion.required_skills == ["Terraform"]

    def test_missing_joined_quest(self):
        completion = QuestCompletion.model_validate({"quest_id": "q1", "quests": None})
        assert completion.quest_category is None
        assert completion.required_skills == []


# =============================================================================
# Result Model Tests
# =============================================================================

class TestMatchBreakdown:
    """Tests for MatchBreakdown model."""

    def test_total_rounds_half_up(self):
        breakdown = MatchBreakdown(rank=25, skill=35, category=20, completion=16, reward=0.5)
        assert breakdown.raw_total == pytest.approx(96.5)
        assert breakdown.total == 97

    def test_component_out_of_band_rejected(self):
        with pytest.raises(ValueError, match="skill component"):
            MatchBreakdown(rank=25, skill=36, category=0, completion=0, reward=0)

    def test_negative_component_rejected(self):
        with pytest.raises(ValueError, match="reward component"):
            MatchBreakdown(rank=0, skill=0, category=0, completion=0, reward=-1)

    def test_str(self):
        text = str(MatchBreakdown(rank=25, skill=35, category=20, completion=16, reward=1.2))
        assert "total=97" in text


class TestScoredQuest:
    """Tests for ScoredQuest serialization."""

    def test_to_dict_adds_score_key(self):
        quest = Quest(id="q1", title="T", created_at=datetime(2024, 1, 2, 3, 4))
        data = ScoredQuest(quest=quest, score=88, score_key="matchScore").to_dict()

        assert data["id"] == "q1"
        assert data["matchScore"] == 88
        assert data["created_at"] == "2024-01-02T03:04:00"

    def test_to_dict_company_under_users(self):
        quest = Quest.model_validate({
            "id": "q1",
            "users": [{"name": "Acme", "is_verified": True}],
        })
        data = ScoredQuest(quest=quest, score=50).to_dict()

        assert data["users"] == {"name": "Acme", "is_verified": True}
        assert "company" not in data

    def test_recommendation_score_key(self):
        data = ScoredQuest(
            quest=Quest(id="q1"), score=12.5, score_key="recommendationScore"
        ).to_dict()
        assert data["recommendationScore"] == 12.5
        assert "matchScore" not in data

    def test_sort_key(self):
        high = ScoredQuest(quest=Quest(id="b"), score=50)
        tie = ScoredQuest(quest=Quest(id="a"), score=50)
        low = ScoredQuest(quest=Quest(id="0"), score=10)
        ordered = sorted([low, high, tie], key=lambda s: s.sort_key)
        assert [s.quest.id for s in ordered] == ["a", "b", "0"]


class TestQuestPreferences:
    """Tests for QuestPreferences."""

    def test_category_count_missing(self):
        prefs = QuestPreferences(category_counts={"frontend": 2})
        assert prefs.category_count("frontend") == 2
        assert prefs.category_count("backend") == 0
        assert prefs.category_count(None) == 0

    def test_top_categories_ties_alphabetical(self):
        prefs = QuestPreferences(category_counts={"qa": 1, "backend": 1, "frontend": 3})
        assert prefs.top_categories == [("frontend", 3), ("backend", 1), ("qa", 1)]
