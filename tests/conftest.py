"""
Shared fixtures for the test suite.

make_profile / make_quest / make_completion build models from the row shape
the quest store returns, with keyword overrides.
"""

import pytest

from guild_matching.models import Quest, QuestCompletion, UserProfile


def _profile(**overrides) -> UserProfile:
    data = {
        "id": "user-1",
        "role": "adventurer",
        "rank": "C",
        "xp": 6500,
        "skill_points": 120,
        "level": 7,
        "adventurer_profiles": {
            "specialization": "frontend",
            "primary_skills": ["React"],
            "quest_completion_rate": 80,
        },
        "skill_progress": [],
    }
    data.update(overrides)
    return UserProfile.model_validate(data)


def _quest(**overrides) -> Quest:
    data = {
        "id": "quest-1",
        "title": "Build a React widget",
        "description": "Ship a reusable widget",
        "quest_type": "commission",
        "status": "available",
        "difficulty": "C",
        "xp_reward": 600,
        "skill_points_reward": 10,
        "monetary_reward": None,
        "required_skills": ["react"],
        "quest_category": "frontend",
        "company_id": "company-1",
    }
    data.update(overrides)
    return Quest.model_validate(data)


def _completion(**overrides) -> QuestCompletion:
    data = {
        "quest_id": "done-1",
        "user_id": "user-1",
        "quest_category": "frontend",
        "required_skills": ["React"],
    }
    data.update(overrides)
    return QuestCompletion.model_validate(data)


@pytest.fixture
def make_profile():
    """Factory for UserProfile with keyword overrides."""
    return _profile


@pytest.fixture
def make_quest():
    """Factory for Quest with keyword overrides."""
    return _quest


@pytest.fixture
def make_completion():
    """Factory for QuestCompletion with keyword overrides."""
    return _completion


class FakeQuestStore:
    """In-memory stand-in for QuestStore that records its calls."""

    def __init__(self, profiles=None, quests=None, history=None, fail_on=None):
        self.profiles = {p.id: p for p in (profiles or [])}
        self.quests = list(quests or [])
        self.history = dict(history or {})
        self.fail_on = fail_on
        self.calls = []

    def _maybe_fail(self, name):
        from guild_matching.errors import StoreError
        self.calls.append(name)
        if self.fail_on == name:
            raise StoreError(f"{name} failed")

    def fetch_user_profile(self, user_id):
        self._maybe_fail('fetch_user_profile')
        return self.profiles.get(user_id)

    def fetch_available_quests(self, limit=50):
        self._maybe_fail('fetch_available_quests')
        return [q for q in self.quests if q.is_available][:limit]

    def fetch_completion_history(self, user_id, limit=10):
        self._maybe_fail('fetch_completion_history')
        return list(self.history.get(user_id, []))[:limit]


@pytest.fixture
def fake_store_class():
    """The FakeQuestStore class, for building stores inside tests."""
    return FakeQuestStore
