"""
SQLAlchemy declarative base and shared utilities for all models.

Convention:
    - Each table lives in its own file under `udyam_intake/db/models/`
    - Every model file imports `Base` from here
    - The `__init__.py` re-exports all models so `create_all` sees them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


# ─── Shared helpers ───────────────────────────
def generate_uuid() -> uuid.UUID:
    """Generate a new UUID v4."""
    return uuid.uuid4()


def utcnow() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)
