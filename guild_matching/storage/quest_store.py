"""
QuestStore - PostgreSQL reads for quest matching.

Uses psycopg2 for PostgreSQL connections with a thread-safe connection pool
shared by the API worker threads. Reads the users, adventurer_profiles,
skill_progress, quests and quest_completions tables; it never writes.
"""

import logging
import os
import threading
from typing import Any, Dict, List, Optional, Sequence

import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor
from pydantic import ValidationError

from guild_matching.errors import StoreError
from guild_matching.models.quest import Quest
from guild_matching.models.quest_completion import QuestCompletion
from guild_matching.models.user_profile import UserProfile
from guild_matching.utils.constants import (
    DB_POOL_MAX_CONNECTIONS,
    DB_POOL_MIN_CONNECTIONS,
    MAX_CANDIDATE_QUESTS,
    MAX_HISTORY_RECORDS,
    QUEST_STATUS_AVAILABLE,
)


logger = logging.getLogger(__name__)


USER_QUERY = """
    SELECT id, role, rank, xp, skill_points, level
    FROM users
    WHERE id = %s
"""

ADVENTURER_PROFILE_QUERY = """
    SELECT specialization, primary_skills, quest_completion_rate
    FROM adventurer_profiles
    WHERE user_id = %s
    LIMIT 1
"""

SKILL_PROGRESS_QUERY = """
    SELECT skill_id, level, experience_points
    FROM skill_progress
    WHERE user_id = %s
"""

AVAILABLE_QUESTS_QUERY = """
    SELECT q.id, q.title, q.description, q.quest_type, q.status,
           q.difficulty, q.xp_reward, q.skill_points_reward,
           q.monetary_reward, q.required_skills, q.required_rank,
           q.max_participants, q.quest_category, q.company_id,
           q.created_at, q.deadline,
           c.name AS company_name, c.is_verified AS company_is_verified
    FROM quests q
    LEFT JOIN users c ON c.id = q.company_id
    WHERE q.status = %s
    ORDER BY q.created_at DESC NULLS LAST
    LIMIT %s
"""

COMPLETION_HISTORY_QUERY = """
    SELECT qc.quest_id, qc.user_id, qc.completed_at,
           q.quest_category, q.required_skills
    FROM quest_completions qc
    LEFT JOIN quests q ON q.id = qc.quest_id
    WHERE qc.user_id = %s
    ORDER BY qc.completed_at DESC NULLS LAST
    LIMIT %s
"""


class QuestStore:
    """
    PostgreSQL reads for the matcher and recommender.

    Driver failures are logged and raised as StoreError. Quest and history
    rows that cannot be turned into models are skipped and logged as warnings.
    Nothing but the pool is shared between calls.
    """

    def __init__(self, connection_string: Optional[str] = None):
        """
        Initialize store with database connection.

        Args:
            connection_string: PostgreSQL connection string.
                             Defaults to DATABASE_URL env var.
        """
        self.connection_string = connection_string or os.getenv('DATABASE_URL')
        self._pool: Optional[pool.ThreadedConnectionPool] = None
        self._pool_lock = threading.Lock()

    def _get_connection(self):
        """Get a connection from the pool."""
        with self._pool_lock:
            if self._pool is None:
                self._pool = pool.ThreadedConnectionPool(
                    DB_POOL_MIN_CONNECTIONS, DB_POOL_MAX_CONNECTIONS,
                    self.connection_string
                )
            conn_pool = self._pool
        return conn_pool.getconn()

    def _release_connection(self, conn):
        """Return connection to pool."""
        if self._pool is not None:
            self._pool.putconn(conn)

    def _fetch_all(self, query: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        """
        Run a parameterized read query.

        Raises:
            StoreError: If the connection or query fails
        """
        conn = None
        try:
            conn = self._get_connection()
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, params)
                return [dict(row) for row in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error("Quest store query failed: %s", e, exc_info=True)
            raise StoreError(f"Quest store query failed: {e}") from e
        finally:
            if conn is not None:
                self._release_connection(conn)

    def fetch_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Retrieve a user with adventurer profile and skill progress.

        Args:
            user_id: ID of the user to retrieve

        Returns:
            UserProfile if found, None otherwise

        Raises:
            StoreError: If a query fails or the user row is unusable
        """
        users = self._fetch_all(USER_QUERY, (str(user_id),))
        if not users:
            return None

        row = users[0]
        row['adventurer_profiles'] = self._fetch_all(ADVENTURER_PROFILE_QUERY, (str(user_id),))
        row['skill_progress'] = self._fetch_all(SKILL_PROGRESS_QUERY, (str(user_id),))

        try:
            return UserProfile.model_validate(row)
        except ValidationError as e:
            logger.error("Unusable profile row for user %s: %s", user_id, e)
            raise StoreError(f"Unusable profile row for user {user_id}") from e

    def fetch_available_quests(self, limit: int = MAX_CANDIDATE_QUESTS) -> List[Quest]:
        """
        Retrieve open quests, newest first.

        Args:
            limit: Maximum number of quests to fetch

        Returns:
            List of available quests (malformed rows skipped)
        """
        rows = self._fetch_all(AVAILABLE_QUESTS_QUERY, (QUEST_STATUS_AVAILABLE, limit))

        quests = []
        for row in rows:
            company_name = row.pop('company_name', None)
            company_verified = row.pop('company_is_verified', None)
            if company_name is not None or company_verified is not None:
                row['company'] = {'name': company_name, 'is_verified': company_verified}

            try:
                quests.append(Quest.model_validate(row))
            except ValidationError as e:
                logger.warning("Quest %s: Skipping due to error - %s", row.get('id'), e)

        return quests

    def fetch_completion_history(
        self,
        user_id: str,
        limit: int = MAX_HISTORY_RECORDS,
    ) -> List[QuestCompletion]:
        """
        Retrieve a user's most recent quest completions.

        Args:
            user_id: ID of the user
            limit: Maximum number of completions to fetch

        Returns:
            Completions newest first, joined with quest category and skills
        """
        rows = self._fetch_all(COMPLETION_HISTORY_QUERY, (str(user_id), limit))

        history = []
        for row in rows:
            try:
                history.append(QuestCompletion.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    "Completion of quest %s: Skipping due to error - %s",
                    row.get('quest_id'), e,
                )

        return history

    def close(self) -> None:
        """Close all connections in the pool."""
        with self._pool_lock:
            if self._pool is not None:
                self._pool.closeall()
                self._pool = None
