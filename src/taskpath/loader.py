"""Snapshot and configuration loading."""

from __future__ import annotations

from pathlib import Path

from . import context
from .config import CONFIG_FILENAME, TaskpathConfig, load_config
from .exceptions import MissingReferenceError
from .logger import get_logger
from .models import Snapshot
from .parser import SnapshotParser

logger = get_logger()


def discover_config(
    snapshot_path: Path | str | None = None,
    config_path: Path | None = None,
) -> TaskpathConfig:
    """Find and load the configuration, falling back to defaults.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. Snapshot directory / taskpath_config.yaml
    4. Current directory / taskpath_config.yaml
    """
    candidates: list[Path] = []
    if config_path is not None:
        candidates.append(config_path)
    ctx_config = context.get_config_path()
    if ctx_config is not None:
        candidates.append(ctx_config)
    if snapshot_path is not None:
        candidates.append(Path(snapshot_path).parent / CONFIG_FILENAME)
    candidates.append(Path(CONFIG_FILENAME))

    for candidate in candidates:
        if candidate.exists():
            logger.debug(f"Using config {candidate}")
            return load_config(candidate)

    return TaskpathConfig()


def load_snapshot(path: Path | str, *, strict: bool | None = None) -> Snapshot:
    """Load a task snapshot from YAML.

    Args:
        path: Path to the snapshot YAML file
        strict: Reject relations that reference unknown tasks. By default such
            relations are kept and the engine ignores them. None defers to the
            CLI --strict option.

    Returns:
        Parsed Snapshot
    """
    snapshot = SnapshotParser().parse_file(path)
    if strict is None:
        strict = context.is_strict()
    if strict:
        validate_snapshot(snapshot)
    return snapshot


def validate_snapshot(snapshot: Snapshot) -> None:
    """Check that every relation references tasks present in the snapshot."""
    all_ids = snapshot.get_all_ids()
    for rel in snapshot.relations:
        for task_id in (rel.source_task_id, rel.target_task_id):
            if task_id not in all_ids:
                raise MissingReferenceError(
                    f"Relation {rel.source_task_id} {rel.relation_type.value} "
                    f"{rel.target_task_id} references unknown task: {task_id}"
                )
