"""
Question Store
==============

The only writer/deleter of the ``asks`` table. Both operations are single
atomic statements, so request handlers and the expiry sweeper share the
store without application-level locking.

Methods are synchronous; call them through ``run_sync`` from async code.
"""

import logging
import time
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from fragekasten.core.database import get_engine, get_session_context, sqlite_retry
from fragekasten.models.question import Question

logger = logging.getLogger(__name__)


class QuestionStoreError(Exception):
    """Raised when the underlying storage fails an insert or delete."""


class QuestionStore:
    def __init__(self, engine: Optional[Engine] = None):
        self._engine = engine or get_engine()

    def insert(
        self,
        content: str,
        ip_address: str,
        user_agent: str,
        ttl: int,
        now: Optional[int] = None,
    ) -> Question:
        """Store a question that becomes eligible for deletion after *ttl* seconds.

        Raises:
            QuestionStoreError: If the row could not be written.
        """
        if now is None:
            now = int(time.time())

        def _insert() -> Question:
            with get_session_context(self._engine) as session:
                question = Question(
                    content=content,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    expire_after=now + ttl,
                )
                session.add(question)
                session.commit()
                session.refresh(question)
                return question

        try:
            return sqlite_retry(_insert)
        except SQLAlchemyError as exc:
            raise QuestionStoreError(f"insert failed: {exc}") from exc

    def delete_expired(self, now: int) -> int:
        """Delete every question whose ``expire_after`` is before *now*.

        A question expiring exactly at *now* is kept. Returns the number of
        rows removed.

        Raises:
            QuestionStoreError: If the delete could not be executed.
        """
        statement = delete(Question).where(Question.expire_after < now)

        def _delete() -> int:
            with self._engine.begin() as conn:
                return conn.execute(statement).rowcount

        try:
            return sqlite_retry(_delete)
        except SQLAlchemyError as exc:
            raise QuestionStoreError(f"delete of expired questions failed: {exc}") from exc
