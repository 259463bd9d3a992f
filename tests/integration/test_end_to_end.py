"""
End-to-end integration tests.

Tests the complete pipeline from store-shaped rows to ranked quests, and
the demo script over its sample data and a JSON file.
"""

import json

import pytest

import demo
from guild_matching.models import Quest, QuestCompletion, UserProfile
from guild_matching.scoring import compute_match_score, compute_recommendations, rank_matches
from guild_matching.services.matching_service import MatchingService


class TestEndToEnd:
    """End-to-end tests for the complete pipeline."""

    @pytest.fixture
    def sample(self):
        data = demo.SAMPLE_DATA
        profile = UserProfile.model_validate(data["profile"])
        history = [QuestCompletion.model_validate(h) for h in data["history"]]
        quests = [Quest.model_validate(q) for q in data["quests"]]
        return profile, history, quests

    def test_complete_match_pipeline(self, sample):
        """Rows -> models -> match ranking."""
        profile, _, quests = sample

        matches = rank_matches(profile, quests, limit=10)

        assert len(matches) == len(quests)
        scores = [m.score for m in matches]
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= s <= 100 for s in scores)
        assert matches[0].quest.id == "q-1"
        for m in matches:
            assert m.score == compute_match_score(profile, m.quest)
            assert m.breakdown.total == m.score

    def test_complete_recommendation_pipeline(self, sample):
        """Rows -> models -> preferences -> recommendation ranking."""
        profile, history, quests = sample

        recs = compute_recommendations(profile, history, quests, n=3)

        assert len(recs) == 3
        # Realtime dashboard: fullstack history (10) + TypeScript (5) + rank B
        # under-qualified (0) + 15 XP + 30 monetary
        assert recs[0].quest.id == "q-4"
        assert recs[0].score == pytest.approx(60)

    def test_service_over_store_rows(self, fake_store_class, sample):
        profile, history, quests = sample
        store = fake_store_class(
            profiles=[profile], quests=quests, history={profile.id: history}
        )
        service = MatchingService(store)

        matches = service.match_quests(profile.id, limit=2)
        recs = service.recommend_quests(profile.id, num_recommendations=2)

        assert [m.to_dict()["matchScore"] for m in matches] == [m.score for m in matches]
        assert all("recommendationScore" in r.to_dict() for r in recs)


class TestDemo:
    """Tests for the demo script."""

    def test_demo_with_sample_data(self, capsys):
        assert demo.main() == 0

        output = capsys.readouterr().out
        assert "Best matches" in output
        assert "Landing page in React" in output
        assert "Preferred categories: frontend x2, fullstack x1" in output

    def test_demo_with_json_file(self, tmp_path, capsys):
        data_file = tmp_path / "guild.json"
        data_file.write_text(json.dumps({
            "profile": {"id": "u9", "role": "company", "xp": 26000},
            "quests": [{"id": "q1", "title": "Only quest"}],
        }))

        assert demo.main(str(data_file)) == 0

        output = capsys.readouterr().out
        assert "not an adventurer" in output
        assert "XP rank: S (max)" in output

    def test_demo_missing_file(self, tmp_path, capsys):
        assert demo.main(str(tmp_path / "missing.json")) == 1
        assert "File not found" in capsys.readouterr().out
