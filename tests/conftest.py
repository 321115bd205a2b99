"""Pytest configuration and fixtures for taskpath tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
import yaml

from taskpath import context
from taskpath.logger import reset_logger
from taskpath.models import Relation, RelationType, Task, TaskStatus

PROJECT_START = datetime(2024, 1, 1)


@pytest.fixture(autouse=True)
def _clean_global_state() -> Iterator[None]:
    """Reset logger and CLI context between tests."""
    yield
    reset_logger()
    context.reset()


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for tasks.

    ``days`` creates a dated task starting ``offset`` days after PROJECT_START.
    """

    def _make(
        task_id: str,
        days: int | None = None,
        *,
        status: TaskStatus | str = TaskStatus.TODO,
        offset: int = 0,
        title: str | None = None,
    ) -> Task:
        start = due = None
        if days is not None:
            start = PROJECT_START + timedelta(days=offset)
            due = start + timedelta(days=days)
        return Task(
            id=task_id,
            title=title or task_id.upper(),
            status=TaskStatus(status),
            start_date=start,
            due_date=due,
        )

    return _make


@pytest.fixture
def make_relation() -> Callable[..., Relation]:
    """Factory for relations: make_relation("a", "blocks", "b")."""

    def _make(source: str, relation_type: RelationType | str, target: str) -> Relation:
        return Relation(
            source_task_id=source,
            target_task_id=target,
            relation_type=RelationType(relation_type),
        )

    return _make


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[..., Path]:
    """Write a snapshot dict as YAML and return its path."""

    def _write(data: dict[str, Any], name: str = "tasks.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_snapshot_data() -> dict[str, Any]:
    """A small workspace.

    design(2d) -> build(5d) -> ship(1d) is the critical path; docs(1d) has 4 days
    of slack. Ship is in progress while Build is not done, and Retro has no dates.
    """
    return {
        "metadata": {"version": "1.0", "workspace": "acme"},
        "tasks": {
            "design": {
                "title": "Design",
                "status": "done",
                "start_date": "2024-01-01",
                "due_date": "2024-01-03",
            },
            "build": {
                "title": "Build",
                "status": "in_progress",
                "start_date": "2024-01-03",
                "due_date": "2024-01-08",
            },
            "docs": {
                "title": "Docs",
                "status": "todo",
                "start_date": "2024-01-03",
                "due_date": "2024-01-04",
            },
            "ship": {
                "title": "Ship",
                "status": "in_progress",
                "start_date": "2024-01-08",
                "due_date": "2024-01-09",
            },
            "retro": {"title": "Retro", "status": "todo"},
        },
        "relations": [
            {"source": "design", "target": "build", "type": "blocks"},
            {"source": "build", "target": "ship", "type": "blocks"},
            {"source": "design", "target": "docs", "type": "blocks"},
            {"source": "docs", "target": "ship", "type": "depends"},
            {"source": "retro", "target": "ship", "type": "relates"},
        ],
    }
