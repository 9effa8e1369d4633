"""Shared constants and enums used across the application."""

from enum import StrEnum


class FieldType(StrEnum):
    """Input control types a form field may declare."""

    TEXT = "text"
    CHECKBOX = "checkbox"


class FieldErrorKind(StrEnum):
    """Reason codes carried by a FieldError."""

    REQUIRED = "required"
    MAX_LENGTH = "max_length"
    PATTERN = "pattern"
    TYPE = "type"
    UNKNOWN_STEP = "unknown_step"


# Key carrying the step identifier in /submit payloads
STEP_ID_KEY = "stepId"

# Indian postal index numbers are exactly six digits
PIN_CODE_PATTERN = r"^\d{6}$"
