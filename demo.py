#!/usr/bin/env python3
"""
Guild Quest Matching Demo

Demonstrates both scoring pipelines without a database:
1. Load an adventurer, their completion history and a quest catalog
2. Rank the catalog by match score
3. Rank the catalog by recommendation score

Usage:
    python demo.py [data.json]
    python demo.py  # Uses the built-in sample data

The JSON file holds {"profile": {...}, "history": [...], "quests": [...]}
in the same shape the quest store returns.
"""

import json
import sys
from pathlib import Path

from guild_matching.models import Quest, QuestCompletion, UserProfile
from guild_matching.scoring.quest_matcher import QuestMatcher
from guild_matching.scoring.quest_recommender import QuestRecommender
from guild_matching.utils.ranks import next_rank_threshold, rank_progress_percent


SAMPLE_DATA = {
    "profile": {
        "id": "adventurer-1",
        "role": "adventurer",
        "rank": "C",
        "xp": 7200,
        "skill_points": 340,
        "level": 8,
        "adventurer_profiles": [{
            "specialization": "frontend",
            "primary_skills": ["React", "TypeScript", "CSS"],
            "quest_completion_rate": 80,
        }],
        "skill_progress": [
            {"skill_id": "javascript", "level": 4, "experience_points": 2300},
        ],
    },
    "history": [
        {"quest_id": "done-1", "quest_category": "frontend", "required_skills": ["React"]},
        {"quest_id": "done-2", "quest_category": "frontend", "required_skills": ["CSS"]},
        {"quest_id": "done-3", "quest_category": "fullstack", "required_skills": ["Node"]},
    ],
    "quests": [
        {"id": "q-1", "title": "Landing page in React", "difficulty": "C",
         "xp_reward": 600, "required_skills": ["react"], "quest_category": "frontend"},
        {"id": "q-2", "title": "Django REST API", "difficulty": "C",
         "xp_reward": 900, "required_skills": ["Python", "Django"],
         "quest_category": "backend"},
        {"id": "q-3", "title": "Design system tokens", "difficulty": "D",
         "xp_reward": 400, "monetary_reward": 150, "required_skills": [],
         "quest_category": "design"},
        {"id": "q-4", "title": "Realtime dashboard", "difficulty": "B",
         "xp_reward": 1500, "monetary_reward": 300,
         "required_skills": ["TypeScript", "WebSockets"], "quest_category": "fullstack"},
        {"id": "q-5", "title": "Fix flaky E2E suite", "difficulty": "E",
         "xp_reward": 250, "required_skills": ["javascript"], "quest_category": "qa"},
    ],
}


def load_data(json_path: Path = None) -> dict:
    """Load demo data from a JSON file, or fall back to SAMPLE_DATA."""
    if json_path is None:
        return SAMPLE_DATA
    with open(json_path, encoding='utf-8') as f:
        return json.load(f)


def main(json_path: str = None):
    """Run the demo pipeline."""
    print("=" * 50)
    print("Guild Quest Matching Demo")
    print("=" * 50)
    print()

    path = Path(json_path) if json_path else None
    if path is not None and not path.exists():
        print(f"Error: File not found: {path}")
        return 1

    data = load_data(path)
    profile = UserProfile.model_validate(data["profile"])
    history = [QuestCompletion.model_validate(h) for h in data.get("history", [])]
    quests = [Quest.model_validate(q) for q in data.get("quests", [])]

    current_rank, next_xp = next_rank_threshold(profile.xp)
    print(f"Adventurer: {profile.id} (rank {profile.rank}, {profile.xp} XP)")
    print(f"    -> Specialization: {profile.specialization or '-'}")
    print(f"    -> Skills: {', '.join(profile.skill_names) or '-'}")
    if next_xp is None:
        print(f"    -> XP rank: {current_rank} (max)")
    else:
        print(
            f"    -> XP rank: {current_rank}, {rank_progress_percent(profile.xp):.0f}% "
            f"toward next rank at {next_xp} XP"
        )
    print(f"    -> {len(history)} completed quests, {len(quests)} open quests")

    # =========================================================================
    # Matches
    # =========================================================================
    print()
    print("[1] Best matches")
    matches = QuestMatcher().rank_quests(profile, quests, limit=None)
    if not matches:
        print("    (none - user is not an adventurer)")
    for scored in matches:
        print(f"    {scored.score:>3}  {scored.quest.title}")
        print(f"         {scored.breakdown}")

    # =========================================================================
    # Recommendations
    # =========================================================================
    print()
    print("[2] Recommendations")
    recommender = QuestRecommender()
    preferences = recommender.build_preferences(history)
    top = ', '.join(f"{c} x{n}" for c, n in preferences.top_categories) or '-'
    print(f"    Preferred categories: {top}")
    for scored in recommender.recommend(profile, history, quests, n=5):
        print(f"    {scored.score:>7.2f}  {scored.quest.title}")

    print()
    return 0


if __name__ == "__main__":
    data_arg = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(main(data_arg))
