"""
The durable write behind POST /submit.

The store owns its transaction: one accepted submission becomes exactly
one committed row, or a PersistenceError.  There is no retry and no
deduplication here; callers decide what to do with a failure.
"""

from __future__ import annotations

import uuid
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from udyam_intake.core.logging import get_logger
from udyam_intake.forms.errors import PersistenceError
from udyam_intake.forms.submission import SubmissionRecord
from udyam_intake.repositories import submissions as submission_repository

logger = get_logger(__name__)


class SubmissionStore(Protocol):
    """Anything that can durably store a normalized submission."""

    async def insert(self, record: SubmissionRecord) -> str:
        """Store ``record`` and return its generated id.  Raises PersistenceError."""
        ...


class SqlSubmissionStore:
    """SubmissionStore backed by the form_submissions table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def insert(self, record: SubmissionRecord) -> str:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    submission = await submission_repository.create_submission(
                        session,
                        step_id=record.step_id,
                        fields=record.fields,
                    )
                    submission_id = str(submission.id)
        except (SQLAlchemyError, OSError) as exc:
            logger.error(
                "Failed to persist submission",
                step_id=record.step_id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise PersistenceError(
                "Could not store submission",
                step_id=record.step_id,
                details={"error_type": type(exc).__name__},
            ) from exc

        logger.info("Submission stored", submission_id=submission_id, step_id=record.step_id)
        return submission_id

    async def get(self, submission_id: str) -> SubmissionRecord | None:
        """Read a stored submission back (None if absent or not a valid id)."""
        try:
            key = uuid.UUID(submission_id)
        except (TypeError, ValueError):
            return None
        try:
            async with self._session_factory() as session:
                submission = await submission_repository.get_submission(session, key)
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not read submission", details={"error_type": type(exc).__name__}) from exc
        if submission is None:
            return None
        return SubmissionRecord(step_id=submission.step_id, fields=dict(submission.fields))
