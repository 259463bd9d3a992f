"""Read-only storage for profiles, quests and completion history."""

from .quest_store import QuestStore

__all__ = [
    'QuestStore',
]
