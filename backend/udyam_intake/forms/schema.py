"""
Form schema document models.

The schema is authored as JSON (camelCase keys) and parsed into frozen
pydantic models.  Fields are a tagged union on ``type`` so each field
kind only carries the rules that make sense for it: a checkbox silently
drops ``maxLength`` / ``regex`` if an author supplies them.

Example document::

    {
      "title": "Udyam Registration",
      "steps": [
        {
          "id": "pan_validation",
          "title": "PAN Validation",
          "fields": [
            {"id": "pan", "label": "PAN", "type": "text",
             "validation": {"required": true, "regex": "^[A-Za-z]{5}[0-9]{4}[A-Za-z]$"}}
          ],
          "actions": [{"id": "validate_pan", "label": "Validate PAN", "type": "submit"}]
        }
      ]
    }
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator, model_validator

# Browser regexes treat \d, \w, \s as ASCII-only
REGEX_FLAGS = re.ASCII


def compile_pattern(regex: str) -> re.Pattern[str]:
    r"""Compile an authored pattern with browser anchor semantics.

    In Python a bare ``$`` also matches before a trailing newline, so
    ``^\d{6}$`` would accept ``"400001\n"``.  Each ``$`` outside a character
    class is rewritten to ``\Z`` (end of input only) before compiling.
    """
    out: list[str] = []
    in_class = False
    i = 0
    while i < len(regex):
        ch = regex[i]
        if ch == "\\":
            out.append(regex[i : i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
            # a leading "]" (or "^]") is a literal member of the class
            j = i + 1
            if regex[j : j + 1] == "^":
                j += 1
            if regex[j : j + 1] == "]":
                out.append(regex[i : j + 1])
                i = j + 1
                continue
        elif ch == "$":
            out.append(r"\Z")
            i += 1
            continue
        out.append(ch)
        i += 1
    return re.compile("".join(out), REGEX_FLAGS)


class TextValidation(BaseModel):
    """Rules for a text field."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    required: bool = False
    max_length: PositiveInt | None = Field(default=None, alias="maxLength")
    regex: str | None = None

    @field_validator("regex")
    @classmethod
    def _regex_must_compile(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            compile_pattern(value)
        except re.error as exc:
            raise ValueError(f"invalid regex {value!r}: {exc}") from exc
        return value


class CheckboxValidation(BaseModel):
    """Rules for a checkbox field.  Only ``required`` is meaningful."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    required: bool = False


class _BaseField(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    label: str
    placeholder: str | None = None


class TextField(_BaseField):
    type: Literal["text"]
    validation: TextValidation | None = None


class CheckboxField(_BaseField):
    type: Literal["checkbox"]
    validation: CheckboxValidation | None = None


FormField = Annotated[Union[TextField, CheckboxField], Field(discriminator="type")]


class StepAction(BaseModel):
    """Button shown at the bottom of a step (not validated)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    label: str
    type: str = "submit"


class Step(BaseModel):
    """One page of the wizard."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    title: str
    fields: tuple[FormField, ...]
    actions: tuple[StepAction, ...] = ()

    @model_validator(mode="after")
    def _field_ids_unique(self) -> Step:
        seen: set[str] = set()
        for f in self.fields:
            if f.id in seen:
                raise ValueError(f"duplicate field id {f.id!r} in step {self.id!r}")
            seen.add(f.id)
        return self

    def get_field(self, field_id: str) -> TextField | CheckboxField | None:
        for f in self.fields:
            if f.id == field_id:
                return f
        return None


class SchemaDocument(BaseModel):
    """The whole form: a title and an ordered sequence of steps."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    steps: tuple[Step, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _step_ids_unique(self) -> SchemaDocument:
        seen: set[str] = set()
        for step in self.steps:
            if step.id in seen:
                raise ValueError(f"duplicate step id {step.id!r}")
            seen.add(step.id)
        return self

    @property
    def step_ids(self) -> list[str]:
        return [step.id for step in self.steps]

    def get_step(self, step_id: str) -> Step | None:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def to_public_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys.  Keys the models do not declare are lost."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
