"""Command-line interface for taskpath."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .config import TaskpathConfig
from .exceptions import TaskpathError
from .gantt import GanttGenerator
from .graph import GraphGenerator
from .loader import discover_config, load_snapshot
from .logger import setup_logger
from .models import RelationWarning, Snapshot, WarningKind
from .relations import relatable_tasks, related_task_id, relation_label, relations_for_task
from .scheduler import CriticalPathResult, analyze_schedule, get_dependency_connections
from .validator import collect_warnings, get_warnings

app = typer.Typer(
    name="taskpath",
    help="Task dependency checks and critical path scheduling",
    add_completion=False,
)

SnapshotArgument = Annotated[Path, typer.Argument(help="Path to the task snapshot YAML file")]


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show results, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: taskpath_config.yaml)",
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on relations that reference unknown tasks"),
    ] = False,
) -> None:
    """Global options for taskpath commands."""
    setup_logger(verbose)
    context.set_config_path(config)
    context.set_strict(strict)


def _load(file: Path) -> tuple[Snapshot, TaskpathConfig]:
    """Load snapshot and config, turning taskpath errors into a clean exit."""
    try:
        snapshot = load_snapshot(file)
        config = discover_config(file)
    except (TaskpathError, FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    return snapshot, config


def _analyze(snapshot: Snapshot, config: TaskpathConfig) -> CriticalPathResult:
    try:
        return analyze_schedule(snapshot.tasks, snapshot.relations, config.scheduler)
    except TaskpathError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _write_output(content: str, output: Path | None, what: str) -> None:
    if output:
        output.write_text(content, encoding="utf-8")
        typer.echo(f"{what} written to {output}")
    else:
        typer.echo(content)


@app.command(name="critical-path")
def critical_path(
    file: SnapshotArgument,
    *,
    details: Annotated[
        bool, typer.Option("--details", help="Show earliest/latest timings and slack per task")
    ] = False,
) -> None:
    """Show the tasks on the critical path."""
    snapshot, config = _load(file)
    result = _analyze(snapshot, config)

    if not result.nodes:
        typer.echo("No dated tasks; critical path is empty.")
    else:
        typer.echo(f"Project duration: {result.project_duration} day(s)")
        typer.echo(f"Critical path: {len(result.critical_path_ids)} task(s)")
        for task_id in result.critical_chain():
            task = snapshot.get_task(task_id)
            title = task.title if task else task_id
            typer.echo(f"  {task_id}: {title}")

    if details and result.nodes:
        typer.echo("")
        typer.echo(f"{'Task':<20} {'Dur':>4} {'ES':>4} {'EF':>4} {'LS':>4} {'LF':>4} {'Slack':>6}")
        for node in sorted(result.nodes.values(), key=lambda n: (n.earliest_start, n.id)):
            marker = " *" if node.is_critical else ""
            typer.echo(
                f"{node.id:<20} {node.duration:>4} {node.earliest_start:>4} "
                f"{node.earliest_finish:>4} {node.latest_start:>4} {node.latest_finish:>4} "
                f"{node.slack:>6g}{marker}"
            )

    if result.cyclic_task_ids:
        typer.echo(
            f"\nExcluded (circular dependencies): {', '.join(sorted(result.cyclic_task_ids))}",
            err=True,
        )


def _echo_relations(task_id: str, snapshot: Snapshot) -> None:
    """Print a task's relations as seen from that task, then the tasks it could link to."""
    typer.echo(f"Relations of {task_id}:")
    task_relations = relations_for_task(task_id, snapshot.relations)
    if not task_relations:
        typer.echo("  (none)")
    for rel in task_relations:
        typer.echo(f"  {relation_label(rel, task_id)} {related_task_id(rel, task_id)}")

    unlinked = relatable_tasks(task_id, snapshot.tasks, snapshot.relations)
    typer.echo(f"Unlinked tasks: {', '.join(task.id for task in unlinked) or '(none)'}")
    typer.echo("")


@app.command()
def check(
    file: SnapshotArgument,
    *,
    task: Annotated[
        str | None, typer.Option("--task", "-t", help="Only check this task ID")
    ] = None,
) -> None:
    """Report relation consistency problems.

    With --task, the task's relations are listed first.
    Exits with code 1 when any error-level finding exists.
    """
    snapshot, _config = _load(file)

    if task is not None:
        found = snapshot.get_task(task)
        if found is None:
            typer.echo(f"Error: Unknown task: {task}", err=True)
            raise typer.Exit(1)
        _echo_relations(found.id, snapshot)
        findings: dict[str, list[RelationWarning]] = {}
        task_warnings = get_warnings(found.id, found.status, snapshot.relations, snapshot.tasks)
        if task_warnings:
            findings[found.id] = task_warnings
    else:
        findings = collect_warnings(snapshot.tasks, snapshot.relations)

    if not findings:
        typer.echo("No relation problems found.")
        return

    has_errors = False
    for task_id, task_warnings in findings.items():
        found = snapshot.get_task(task_id)
        typer.echo(f"{task_id}: {found.title if found else task_id}")
        for warning in task_warnings:
            has_errors = has_errors or warning.kind == WarningKind.ERROR
            typer.echo(f"  [{warning.kind.value}] {warning.message}")

    if has_errors:
        raise typer.Exit(1)


@app.command()
def edges(
    file: SnapshotArgument,
    *,
    as_json: Annotated[bool, typer.Option("--json", help="Output edges as JSON")] = False,
) -> None:
    """List blocks/depends edges between known tasks."""
    snapshot, _config = _load(file)
    connections = get_dependency_connections(snapshot.tasks, snapshot.relations)

    if as_json:
        typer.echo(json.dumps([edge.to_dict() for edge in connections], indent=2))
        return

    for edge in connections:
        typer.echo(f"{edge.from_id} -> {edge.to_id} ({edge.kind.value})")


@app.command()
def graph(
    file: SnapshotArgument,
    *,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Generate a dependency graph in DOT format with the critical path highlighted."""
    snapshot, config = _load(file)
    generator = GraphGenerator(snapshot, config.graph, config.scheduler)
    try:
        dot_output = generator.generate()
    except TaskpathError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    _write_output(dot_output, output, "Graph")


@app.command()
def gantt(
    file: SnapshotArgument,
    *,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
    title: Annotated[str | None, typer.Option("--title", help="Chart title")] = None,
) -> None:
    """Generate a Mermaid gantt chart with critical tasks tagged."""
    snapshot, config = _load(file)
    gantt_config = config.gantt
    if title is not None:
        gantt_config = gantt_config.model_copy(update={"title": title})

    generator = GanttGenerator(snapshot, gantt_config, config.scheduler)
    try:
        mermaid = generator.generate_mermaid()
    except TaskpathError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    # Wrap in a code fence when writing markdown
    if output and output.suffix.lower() in (".md", ".markdown"):
        mermaid = f"```mermaid\n{mermaid}\n```\n"
    _write_output(mermaid, output, "Gantt chart")


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
