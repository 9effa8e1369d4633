"""
Produces the current form schema document.

The provider is constructed explicitly (from settings, at app startup)
and injected wherever the schema is needed.  It reads the first existing
file out of an ordered list of candidates: by default the scraper's
output, falling back to the asset bundled with the package.

    provider = SchemaProvider.from_settings(settings)
    form = provider.get()          # lazy load + compile, cached
    form = provider.reload()       # rebuild and swap atomically
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

from pydantic import ValidationError as PydanticValidationError

from udyam_intake.core.logging import get_logger
from udyam_intake.forms.compiled import CompiledForm
from udyam_intake.forms.errors import ConfigurationError
from udyam_intake.forms.schema import SchemaDocument

if TYPE_CHECKING:
    from udyam_intake.core.config import Settings

logger = get_logger(__name__)


class SchemaProvider:
    """Loads, compiles and caches the schema document."""

    def __init__(self, candidates: Sequence[Path | str]) -> None:
        if not candidates:
            raise ValueError("SchemaProvider needs at least one candidate path")
        self._candidates = tuple(Path(p) for p in candidates)
        self._lock = threading.Lock()
        self._compiled: CompiledForm | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> SchemaProvider:
        return cls(settings.schema_candidates)

    @property
    def candidates(self) -> tuple[Path, ...]:
        return self._candidates

    # ─── Loading ───────────────────────────────────────

    def load(self) -> SchemaDocument:
        """Read and parse the schema source.

        Raises:
            ConfigurationError: no candidate exists, or the content is not
                JSON, or it does not describe a valid schema document.
        """
        return self._build().document

    def get(self) -> CompiledForm:
        """Return the cached compiled form, loading it on first access."""
        compiled = self._compiled
        if compiled is not None:
            return compiled
        with self._lock:
            if self._compiled is None:
                self._compiled = self._build()
            return self._compiled

    def reload(self) -> CompiledForm:
        """Rebuild from the source and swap it in.  On failure the old form stays."""
        compiled = self._build()
        with self._lock:
            self._compiled = compiled
        logger.info("Form schema reloaded", steps=compiled.document.step_ids)
        return compiled

    # ─── Internals ─────────────────────────────────────

    def _build(self) -> CompiledForm:
        path, raw = self._read_source()
        try:
            document = SchemaDocument.model_validate(raw)
            compiled = CompiledForm.compile(document, raw)
        except PydanticValidationError as exc:
            raise ConfigurationError(
                f"Schema document in {path} is invalid",
                source=str(path),
                details={"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc
        except ValueError as exc:
            raise ConfigurationError(
                f"Schema document in {path} is invalid: {exc}",
                source=str(path),
            ) from exc

        logger.info(
            "Form schema loaded",
            path=str(path),
            title=document.title,
            steps=document.step_ids,
        )
        return compiled

    def _read_source(self) -> tuple[Path, Any]:
        path = next((p for p in self._candidates if p.is_file()), None)
        if path is None:
            raise ConfigurationError(
                "No form schema found",
                details={"candidates": [str(p) for p in self._candidates]},
            )
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read form schema {path}: {exc}", source=str(path)) from exc
        try:
            return path, json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Form schema {path} is not valid JSON: {exc}", source=str(path)) from exc
