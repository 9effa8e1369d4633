"""
FormSubmission — one accepted wizard submission.

One row per accepted /submit call.  The submitted field values are kept
as a JSON object keyed by field id, so the table mirrors whatever fields
the form schema declares without a migration per field.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from udyam_intake.db.models.base import Base, JSONType, generate_uuid, utcnow


class FormSubmission(Base):
    __tablename__ = "form_submissions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=generate_uuid
    )
    step_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # Submitted values keyed by field id, e.g. {"pan": "ABCDE1234F"}
    fields: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<FormSubmission {self.id} step={self.step_id} fields={sorted(self.fields or {})}>"
