"""Mermaid Gantt chart generation with critical path tags."""

from __future__ import annotations

import re

from .config import GanttConfig
from .models import Snapshot, Task, TaskStatus
from .scheduler import CriticalPathConfig, calculate_critical_path


class GanttGenerator:
    """Render dated tasks as a Mermaid gantt chart."""

    def __init__(
        self,
        snapshot: Snapshot,
        config: GanttConfig | None = None,
        scheduler_config: CriticalPathConfig | None = None,
    ):
        self.snapshot = snapshot
        self.config = config or GanttConfig()
        self.scheduler_config = scheduler_config

    def generate_mermaid(self) -> str:
        """Generate Mermaid gantt chart syntax.

        Tasks without both dates are omitted. Tasks are ordered by start date.
        """
        critical_ids: set[str] = set()
        if self.config.mark_critical:
            critical_ids = calculate_critical_path(
                self.snapshot.tasks, self.snapshot.relations, self.scheduler_config
            )

        lines = [
            "gantt",
            f"    title {self.config.title}",
            "    dateFormat YYYY-MM-DD",
            "",
        ]

        dated = sorted(
            self.snapshot.dated_tasks(),
            key=lambda task: (task.start_date, task.id),
        )
        for task in dated:
            lines.append(self._format_task(task, critical_ids))

        return "\n".join(lines)

    def _format_task(self, task: Task, critical_ids: set[str]) -> str:
        assert task.start_date is not None
        tags = self._get_task_tags(task, critical_ids)
        tags_str = ", ".join(tags) + ", " if tags else ""
        label = task.title.replace(":", " -").replace("#", "")
        start_str = task.start_date.strftime("%Y-%m-%d")
        mermaid_id = self._mermaid_id(task.id)
        return f"    {label} :{tags_str}{mermaid_id}, {start_str}, {task.duration_days}d"

    def _get_task_tags(self, task: Task, critical_ids: set[str]) -> list[str]:
        tags: list[str] = []
        if task.status == TaskStatus.DONE:
            tags.append("done")
        elif task.status == TaskStatus.IN_PROGRESS:
            tags.append("active")
        if task.id in critical_ids:
            tags.append("crit")
        return tags

    @staticmethod
    def _mermaid_id(task_id: str) -> str:
        """Mermaid task IDs must be plain identifiers."""
        return re.sub(r"\W", "_", task_id)
