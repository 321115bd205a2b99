"""Graph generation for task dependencies in DOT format."""

from __future__ import annotations

from .config import GraphConfig
from .models import DependencyEdge, RelationType, Snapshot, Task
from .scheduler import (
    CriticalPathConfig,
    CriticalPathResult,
    analyze_schedule,
    get_dependency_connections,
)


class GraphGenerator:
    """Generate dependency graphs in DOT format with the critical path highlighted."""

    def __init__(
        self,
        snapshot: Snapshot,
        config: GraphConfig | None = None,
        scheduler_config: CriticalPathConfig | None = None,
    ):
        """Initialize with a snapshot.

        Args:
            snapshot: Tasks and relations to draw
            config: Optional rendering configuration
            scheduler_config: Optional critical path configuration
        """
        self.snapshot = snapshot
        self.config = config or GraphConfig()
        self.scheduler_config = scheduler_config

    def generate(self) -> str:
        """Generate the DOT graph."""
        result = analyze_schedule(
            self.snapshot.tasks, self.snapshot.relations, self.scheduler_config
        )
        tasks = [
            task for task in self.snapshot.tasks if task.has_dates or self.config.show_undated
        ]
        edges = get_dependency_connections(tasks, self.snapshot.relations)

        lines = ["digraph Tasks {"]
        lines.append(f"  rankdir={self.config.rankdir};")
        lines.append("  node [shape=box];")
        lines.append("")

        for task in tasks:
            lines.append(f"  {self._format_node(task, result)}")
        lines.append("")

        lines.append("  // Dependencies")
        for edge in edges:
            lines.append(f"  {self._format_edge(edge, result)}")

        lines.append("}")
        return "\n".join(lines)

    def _escape_label(self, label: str) -> str:
        """Escape special characters in DOT labels."""
        return label.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")

    def _quote_id(self, task_id: str) -> str:
        return f'"{self._escape_label(task_id)}"'

    def _format_node(self, task: Task, result: CriticalPathResult) -> str:
        """Format a node, filling critical tasks and outlining cyclic ones."""
        label = self._escape_label(task.title)
        style = "filled" if task.has_dates else "filled,dashed"
        attrs = [f'label="{label}"', f'style="{style}"']

        if task.id in result.critical_path_ids:
            attrs.append(f'fillcolor="{self.config.critical_color}"')
            attrs.append('fontcolor="white"')
        else:
            attrs.append(f'fillcolor="{self.config.default_color}"')

        if task.id in result.cyclic_task_ids:
            attrs.append(f'color="{self.config.cycle_color}"')
            attrs.append("penwidth=2")

        return f"{self._quote_id(task.id)} [{', '.join(attrs)}];"

    def _format_edge(self, edge: DependencyEdge, result: CriticalPathResult) -> str:
        """Format an edge; depends edges are dashed, critical-to-critical edges are colored."""
        attrs: list[str] = []
        if edge.kind == RelationType.DEPENDS:
            attrs.append("style=dashed")
        if edge.from_id in result.critical_path_ids and edge.to_id in result.critical_path_ids:
            attrs.append(f'color="{self.config.critical_color}"')
            attrs.append("penwidth=2")

        edge_def = f"{self._quote_id(edge.from_id)} -> {self._quote_id(edge.to_id)}"
        if attrs:
            return f"{edge_def} [{', '.join(attrs)}];"
        return f"{edge_def};"
