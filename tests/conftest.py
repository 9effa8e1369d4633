"""Shared fixtures and pytest marker auto-assignment by folder."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from udyam_intake.core.config import BUNDLED_SCHEMA_PATH
from udyam_intake.forms.errors import PersistenceError
from udyam_intake.forms.provider import SchemaProvider
from udyam_intake.forms.submission import SubmissionRecord

_BUNDLED_SCHEMA = json.loads(BUNDLED_SCHEMA_PATH.read_text(encoding="utf-8"))


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = (Path(config.rootpath) / "tests" / marker).resolve()

    for item in items:
        path = Path(str(item.fspath)).resolve()
        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")


# ─── Schema fixtures ──────────────────────────────────────

@pytest.fixture
def schema_payload() -> dict[str, Any]:
    """A fresh copy of the bundled Udyam schema document."""
    return copy.deepcopy(_BUNDLED_SCHEMA)


@pytest.fixture
def schema_file(tmp_path: Path, schema_payload: dict[str, Any]) -> Path:
    path = tmp_path / "udyam_steps.json"
    path.write_text(json.dumps(schema_payload), encoding="utf-8")
    return path


@pytest.fixture
def provider(schema_file: Path) -> SchemaProvider:
    return SchemaProvider([schema_file])


@pytest.fixture
def valid_aadhaar_data() -> dict[str, Any]:
    return {
        "aadhaarNumber": "123456789012",
        "entrepreneurName": "A",
        "consent": True,
        "pinCode": "400001",
    }


# ─── Store doubles ────────────────────────────────────────

class MemoryStore:
    """SubmissionStore that keeps records in a list."""

    def __init__(self) -> None:
        self.records: list[SubmissionRecord] = []

    async def insert(self, record: SubmissionRecord) -> str:
        self.records.append(record)
        return f"sub-{len(self.records)}"


class FailingStore:
    """SubmissionStore whose backend is always down."""

    async def insert(self, record: SubmissionRecord) -> str:
        raise PersistenceError("Could not store submission", step_id=record.step_id)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()
