"""Data models for taskpath."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

MIN_DURATION_DAYS = 1
_ONE_DAY = timedelta(days=1)


class TaskStatus(str, Enum):
    """Workflow status of a task."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    CANCELLED = "cancelled"

    @property
    def is_started(self) -> bool:
        """True once work has begun (in progress or done)."""
        return self in (TaskStatus.IN_PROGRESS, TaskStatus.DONE)


class RelationType(str, Enum):
    """Kind of directed relation between two tasks.

    - BLOCKS: source blocks target
    - DEPENDS: source depends on target
    - DUPLICATES / RELATES: informational only
    """

    BLOCKS = "blocks"
    DEPENDS = "depends"
    DUPLICATES = "duplicates"
    RELATES = "relates"

    @property
    def is_scheduling(self) -> bool:
        """True for relation types that create scheduling edges."""
        return self in (RelationType.BLOCKS, RelationType.DEPENDS)


class WarningKind(str, Enum):
    """Severity of a relation finding. INFO is reserved and currently never emitted."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Task:
    """A task as supplied by the surrounding application."""

    id: str
    title: str
    status: TaskStatus = TaskStatus.TODO
    start_date: datetime | None = None
    due_date: datetime | None = None

    @property
    def has_dates(self) -> bool:
        """Whether the task participates in critical-path computation."""
        return self.start_date is not None and self.due_date is not None

    @property
    def duration_days(self) -> int | None:
        """Calendar-day duration, rounded up and floored at one day.

        Returns None for tasks missing either date.
        """
        if self.start_date is None or self.due_date is None:
            return None
        days = math.ceil((self.due_date - self.start_date) / _ONE_DAY)
        return max(days, MIN_DURATION_DAYS)


@dataclass(frozen=True)
class Relation:
    """A directed relation between two tasks."""

    source_task_id: str
    target_task_id: str
    relation_type: RelationType
    id: str | None = None

    @property
    def is_self_relation(self) -> bool:
        """True when the relation points from a task to itself."""
        return self.source_task_id == self.target_task_id


@dataclass(frozen=True)
class RelationWarning:
    """An advisory finding about a task's relations."""

    kind: WarningKind
    message: str


@dataclass(frozen=True)
class DependencyEdge:
    """A renderable dependency arrow between two tasks."""

    from_id: str
    to_id: str
    kind: RelationType

    def to_dict(self) -> dict[str, str]:
        """Convert to a plain dictionary for JSON/YAML output."""
        return {"from": self.from_id, "to": self.to_id, "kind": self.kind.value}


@dataclass
class SnapshotMetadata:
    """Metadata for a task snapshot."""

    version: str = "1.0"
    workspace: str | None = None
    exported_at: str | None = None


@dataclass
class Snapshot:
    """A full snapshot of tasks and relations for one workspace."""

    metadata: SnapshotMetadata
    tasks: list[Task]
    relations: list[Relation]

    def get_all_ids(self) -> set[str]:
        """Get all task IDs in the snapshot."""
        return {task.id for task in self.tasks}

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by its ID."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def dated_tasks(self) -> list[Task]:
        """Tasks with both a start and a due date."""
        return [task for task in self.tasks if task.has_dates]
