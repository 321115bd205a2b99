"""Core dataclasses for critical path calculation."""

from dataclasses import dataclass, field


def _default_str_set() -> set[str]:
    return set()


def _default_cycles() -> list[list[str]]:
    return []


@dataclass
class TaskNode:
    """Working node for the forward and backward passes.

    All times are whole days relative to the project start (day 0).
    """

    id: str
    duration: int
    dependencies: list[str]  # Tasks that must finish before this one starts
    earliest_start: int = 0
    earliest_finish: int = 0
    latest_start: int | None = None
    latest_finish: int | None = None
    slack: float = 0.0
    is_critical: bool = False


@dataclass
class CriticalPathResult:
    """Complete result of a critical path calculation."""

    critical_path_ids: set[str]
    nodes: dict[str, TaskNode]
    project_duration: int
    cyclic_task_ids: set[str] = field(default_factory=_default_str_set)
    cycles: list[list[str]] = field(default_factory=_default_cycles)

    def critical_chain(self) -> list[str]:
        """Critical task IDs ordered by earliest start, for display."""
        critical = [self.nodes[task_id] for task_id in self.critical_path_ids]
        critical.sort(key=lambda node: (node.earliest_start, node.earliest_finish, node.id))
        return [node.id for node in critical]
