"""
Models package — re-exports Base and all models.

Import models here so `Base.metadata.create_all` picks up every table.

When adding a new model:
    1. Create `udyam_intake/db/models/<table_name>.py`
    2. Import it here
"""

from udyam_intake.db.models.base import Base
from udyam_intake.db.models.form_submission import FormSubmission

__all__ = [
    "Base",
    "FormSubmission",
]
