"""Critical path calculation via forward and backward passes."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence

from taskpath.exceptions import CircularDependencyError
from taskpath.logger import changes_enabled, debug_enabled, get_logger
from taskpath.models import DependencyEdge, Relation, Task

from .config import CriticalPathConfig, CyclePolicy
from .core import CriticalPathResult, TaskNode
from .graph import build_dependents, build_task_nodes, find_cycles, without_tasks

logger = get_logger()


class CriticalPathCalculator:
    """Computes earliest/latest timings and the zero-slack tasks of a project.

    The calculator:
    1. Builds a dependency graph from dated tasks and blocks/depends relations
    2. Detects cycles and applies the configured cycle policy
    3. Runs a forward pass (earliest start/finish)
    4. Runs a backward pass (latest start/finish) seeded from every sink
    5. Marks tasks whose slack is within the configured epsilon as critical

    Instances hold only configuration, so one calculator can be shared.
    """

    def __init__(self, config: CriticalPathConfig | None = None):
        """Initialize the calculator.

        Args:
            config: Optional configuration (defaults to CriticalPathConfig())
        """
        self.config = config or CriticalPathConfig()

    def calculate(self, tasks: Iterable[Task], relations: Sequence[Relation]) -> CriticalPathResult:
        """Run the full critical path analysis.

        Args:
            tasks: Tasks of the project; tasks without both dates are ignored
            relations: All relations; only blocks/depends between dated tasks count

        Returns:
            CriticalPathResult with per-task timings and the critical task IDs

        Raises:
            CircularDependencyError: If a cycle exists and the policy is RAISE
        """
        nodes = build_task_nodes(tasks, relations)

        cycles = find_cycles(nodes)
        cyclic_ids: set[str] = set()
        if cycles:
            nodes, cyclic_ids = self._apply_cycle_policy(nodes, cycles)

        if not nodes:
            return CriticalPathResult(
                critical_path_ids=set(),
                nodes={},
                project_duration=0,
                cyclic_task_ids=cyclic_ids,
                cycles=cycles,
            )

        dependents = build_dependents(nodes)
        project_duration = self._forward_pass(nodes, dependents)
        self._backward_pass(nodes, dependents, project_duration)

        critical_ids: set[str] = set()
        for node in nodes.values():
            assert node.latest_start is not None
            node.slack = node.latest_start - node.earliest_start
            node.is_critical = node.slack <= self.config.slack_epsilon
            if node.is_critical:
                critical_ids.add(node.id)

        result = CriticalPathResult(
            critical_path_ids=critical_ids,
            nodes=nodes,
            project_duration=project_duration,
            cyclic_task_ids=cyclic_ids,
            cycles=cycles,
        )
        if changes_enabled():
            logger.changes(
                f"Critical path ({project_duration} days): {' -> '.join(result.critical_chain())}"
            )
        return result

    def _apply_cycle_policy(
        self,
        nodes: dict[str, TaskNode],
        cycles: list[list[str]],
    ) -> tuple[dict[str, TaskNode], set[str]]:
        """Raise or exclude cyclic tasks according to the configured policy."""
        description = "; ".join(" -> ".join([*cycle, cycle[0]]) for cycle in cycles)
        if self.config.cycle_policy == CyclePolicy.RAISE:
            raise CircularDependencyError(f"Circular dependency detected: {description}", cycles)

        cyclic_ids = {task_id for cycle in cycles for task_id in cycle}
        logger.warning(
            f"Excluding {len(cyclic_ids)} task(s) on circular dependencies: {description}"
        )
        return without_tasks(nodes, cyclic_ids), cyclic_ids

    def _forward_pass(self, nodes: dict[str, TaskNode], dependents: dict[str, list[str]]) -> int:
        """Compute earliest start/finish for every node.

        A node is finalized once all of its dependencies are finalized.

        Returns:
            Project duration (maximum earliest finish)
        """
        remaining = {node_id: len(node.dependencies) for node_id, node in nodes.items()}
        queue = deque(node_id for node_id, count in remaining.items() if count == 0)

        while queue:
            node = nodes[queue.popleft()]
            node.earliest_start = max(
                (nodes[dep_id].earliest_finish for dep_id in node.dependencies), default=0
            )
            node.earliest_finish = node.earliest_start + node.duration
            if debug_enabled():
                logger.debug(
                    f"  Forward {node.id}: ES={node.earliest_start} EF={node.earliest_finish}"
                )

            for dependent_id in dependents[node.id]:
                remaining[dependent_id] -= 1
                if remaining[dependent_id] == 0:
                    queue.append(dependent_id)

        return max((node.earliest_finish for node in nodes.values()), default=0)

    def _backward_pass(
        self,
        nodes: dict[str, TaskNode],
        dependents: dict[str, list[str]],
        project_duration: int,
    ) -> None:
        """Compute latest start/finish for every node, starting from all sinks."""
        pending = {node_id: len(dependents[node_id]) for node_id in nodes}
        queue: deque[str] = deque()
        for node_id, node in nodes.items():
            if pending[node_id] == 0:
                node.latest_finish = project_duration
                node.latest_start = project_duration - node.duration
                queue.append(node_id)

        while queue:
            node = nodes[queue.popleft()]
            assert node.latest_start is not None
            if debug_enabled():
                logger.debug(
                    f"  Backward {node.id}: LS={node.latest_start} LF={node.latest_finish}"
                )

            for dep_id in node.dependencies:
                dep = nodes[dep_id]
                if dep.latest_finish is None or node.latest_start < dep.latest_finish:
                    dep.latest_finish = node.latest_start
                    dep.latest_start = dep.latest_finish - dep.duration
                pending[dep_id] -= 1
                if pending[dep_id] == 0:
                    queue.append(dep_id)


def analyze_schedule(
    tasks: Iterable[Task],
    relations: Sequence[Relation],
    config: CriticalPathConfig | None = None,
) -> CriticalPathResult:
    """Run the critical path analysis and return per-task timings."""
    return CriticalPathCalculator(config).calculate(tasks, relations)


def calculate_critical_path(
    tasks: Iterable[Task],
    relations: Sequence[Relation],
    config: CriticalPathConfig | None = None,
) -> set[str]:
    """Return the IDs of tasks with (near-)zero slack.

    The result is a set; callers should not rely on any ordering.
    """
    return analyze_schedule(tasks, relations, config).critical_path_ids


def get_dependency_connections(
    tasks: Iterable[Task],
    relations: Sequence[Relation],
) -> list[DependencyEdge]:
    """Return drawable dependency edges between tasks in ``tasks``.

    Every blocks/depends relation whose endpoints are both present becomes an
    edge from source to target. Dates are not considered.
    """
    task_ids = {task.id for task in tasks}
    return [
        DependencyEdge(from_id=rel.source_task_id, to_id=rel.target_task_id, kind=rel.relation_type)
        for rel in relations
        if rel.relation_type.is_scheduling
        and rel.source_task_id in task_ids
        and rel.target_task_id in task_ids
    ]
