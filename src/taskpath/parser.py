"""YAML parser for task snapshots."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .models import Relation, Snapshot, SnapshotMetadata, Task
from .schemas import SnapshotSchema


class SnapshotParser:
    """Parser for task snapshot YAML files.

    This parser only handles YAML parsing and model creation.
    For reference checking, use load_snapshot() from taskpath.loader.
    """

    def parse_file(self, file_path: Path | str) -> Snapshot:
        """Parse a YAML file into a Snapshot."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("YAML must contain a dictionary at the root level")

        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> Snapshot:
        """Parse already-loaded data into a Snapshot."""
        try:
            schema = SnapshotSchema(**data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid YAML structure: {e}") from e

        metadata = SnapshotMetadata(
            version=schema.metadata.version,
            workspace=schema.metadata.workspace,
            exported_at=schema.metadata.exported_at,
        )

        tasks = [
            Task(
                id=task_id,
                title=task_data.title,
                status=task_data.status,
                start_date=task_data.start_date,
                due_date=task_data.due_date,
            )
            for task_id, task_data in schema.tasks.items()
        ]

        relations = [
            Relation(
                source_task_id=rel.source,
                target_task_id=rel.target,
                relation_type=rel.type,
                id=rel.id,
            )
            for rel in schema.relations
        ]

        return Snapshot(metadata=metadata, tasks=tasks, relations=relations)
