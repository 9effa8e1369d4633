"""
Submission repository containing all data-access operations for the
form_submissions table.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from udyam_intake.db.models.form_submission import FormSubmission


async def create_submission(
    db: AsyncSession,
    *,
    step_id: str,
    fields: dict[str, Any],
) -> FormSubmission:
    """Insert a submission row and return it with its generated id."""
    submission = FormSubmission(step_id=step_id, fields=dict(fields))
    db.add(submission)
    await db.flush()
    return submission


async def get_submission(db: AsyncSession, submission_id: uuid.UUID) -> FormSubmission | None:
    """Fetch a submission by primary key."""
    return await db.get(FormSubmission, submission_id)
