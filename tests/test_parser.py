"""Tests for snapshot parsing and loading."""

from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pytest

from taskpath import context
from taskpath.exceptions import MissingReferenceError, ParseError, ValidationError
from taskpath.loader import load_snapshot, validate_snapshot
from taskpath.models import RelationType, TaskStatus
from taskpath.parser import SnapshotParser

WriteSnapshot = Callable[..., Path]


class TestParseData:
    """Test parsing already-loaded data."""

    def test_sample_snapshot(self, sample_snapshot_data: dict[str, Any]) -> None:
        snapshot = SnapshotParser().parse_data(sample_snapshot_data)

        assert snapshot.metadata.workspace == "acme"
        assert [task.id for task in snapshot.tasks] == ["design", "build", "docs", "ship", "retro"]
        design = snapshot.get_task("design")
        assert design is not None
        assert design.status == TaskStatus.DONE
        assert design.start_date == datetime(2024, 1, 1)
        assert design.due_date == datetime(2024, 1, 3)
        assert len(snapshot.relations) == 5
        assert snapshot.relations[3].relation_type == RelationType.DEPENDS

    def test_minimal_snapshot(self) -> None:
        snapshot = SnapshotParser().parse_data({})

        assert snapshot.tasks == []
        assert snapshot.relations == []
        assert snapshot.metadata.version == "1.0"

    def test_defaults(self) -> None:
        snapshot = SnapshotParser().parse_data({"tasks": {"a": {"title": "A"}}})

        task = snapshot.tasks[0]
        assert task.status == TaskStatus.TODO
        assert task.start_date is None
        assert not task.has_dates

    def test_yaml_dates_become_midnight(self) -> None:
        data = {"tasks": {"a": {"title": "A", "start_date": date(2024, 3, 1), "due_date": date(2024, 3, 4)}}}

        task = SnapshotParser().parse_data(data).tasks[0]

        assert task.start_date == datetime(2024, 3, 1)
        assert task.duration_days == 3

    def test_end_date_alias(self) -> None:
        data = {"tasks": {"a": {"title": "A", "start_date": "2024-01-01", "end_date": "2024-01-02"}}}

        assert SnapshotParser().parse_data(data).tasks[0].due_date == datetime(2024, 1, 2)

    def test_aware_datetimes_normalized_to_utc(self) -> None:
        data = {
            "tasks": {
                "a": {
                    "title": "A",
                    "start_date": "2024-01-01T10:00:00+02:00",
                    "due_date": "2024-01-02T08:00:00Z",
                }
            }
        }

        task = SnapshotParser().parse_data(data).tasks[0]

        assert task.start_date == datetime(2024, 1, 1, 8, 0)
        assert task.start_date.tzinfo is None
        assert task.duration_days == 1

    def test_numeric_ids_and_titles_become_strings(self) -> None:
        data = {
            "tasks": {101: {"title": 2024}, 102: {"title": "Other"}},
            "relations": [{"source": 101, "target": 102, "type": "blocks"}],
        }

        snapshot = SnapshotParser().parse_data(data)

        assert snapshot.tasks[0].id == "101"
        assert snapshot.tasks[0].title == "2024"
        assert snapshot.relations[0].source_task_id == "101"

    def test_long_relation_field_names(self) -> None:
        data = {
            "tasks": {"a": {"title": "A"}, "b": {"title": "B"}},
            "relations": [
                {
                    "id": "r1",
                    "source_task_id": "a",
                    "target_task_id": "b",
                    "relation_type": "depends",
                }
            ],
        }

        relation = SnapshotParser().parse_data(data).relations[0]

        assert relation.id == "r1"
        assert relation.relation_type == RelationType.DEPENDS

    @pytest.mark.parametrize(
        "data",
        [
            {"tasks": {"a": {"title": "A", "status": "blocked"}}},
            {"tasks": {"a": {"status": "todo"}}},
            {"relations": [{"source": "a", "target": "b", "type": "follows"}]},
            {"relations": [{"source": "a", "type": "blocks"}]},
            {"tasks": {"a": {"title": "A", "start_date": "not a date"}}},
        ],
    )
    def test_invalid_structure(self, data: dict[str, Any]) -> None:
        with pytest.raises(ValidationError, match="Invalid YAML structure"):
            SnapshotParser().parse_data(data)


class TestParseFile:
    """Test parsing YAML files."""

    def test_parse_file(self, write_snapshot: WriteSnapshot, sample_snapshot_data: dict[str, Any]) -> None:
        path = write_snapshot(sample_snapshot_data)

        snapshot = SnapshotParser().parse_file(path)

        assert len(snapshot.tasks) == 5
        assert snapshot.dated_tasks()[-1].id == "ship"

    def test_yaml_timestamps(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.yaml"
        path.write_text(
            "tasks:\n"
            "  a:\n"
            "    title: A\n"
            "    start_date: 2024-01-01\n"
            "    due_date: 2024-01-02 12:00:00\n",
            encoding="utf-8",
        )

        task = SnapshotParser().parse_file(path).tasks[0]

        assert task.start_date == datetime(2024, 1, 1)
        assert task.duration_days == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="File not found"):
            SnapshotParser().parse_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("tasks: [unclosed\n", encoding="utf-8")

        with pytest.raises(ParseError, match="Failed to parse YAML"):
            SnapshotParser().parse_file(path)

    def test_root_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ParseError, match="dictionary at the root"):
            SnapshotParser().parse_file(path)


class TestLoadSnapshot:
    """Test loading with optional reference checks."""

    @pytest.fixture
    def dangling_data(self) -> dict[str, Any]:
        return {
            "tasks": {"a": {"title": "A"}},
            "relations": [{"source": "a", "target": "ghost", "type": "blocks"}],
        }

    def test_dangling_relations_kept_by_default(
        self, write_snapshot: WriteSnapshot, dangling_data: dict[str, Any]
    ) -> None:
        snapshot = load_snapshot(write_snapshot(dangling_data))

        assert len(snapshot.relations) == 1

    def test_strict_rejects_dangling_relations(
        self, write_snapshot: WriteSnapshot, dangling_data: dict[str, Any]
    ) -> None:
        with pytest.raises(MissingReferenceError, match="a blocks ghost references unknown task: ghost"):
            load_snapshot(write_snapshot(dangling_data), strict=True)

    def test_strict_accepts_consistent_snapshot(
        self, write_snapshot: WriteSnapshot, sample_snapshot_data: dict[str, Any]
    ) -> None:
        snapshot = load_snapshot(write_snapshot(sample_snapshot_data), strict=True)

        assert snapshot.get_all_ids() == {"design", "build", "docs", "ship", "retro"}

    def test_validate_snapshot_checks_source(self) -> None:
        snapshot = SnapshotParser().parse_data(
            {
                "tasks": {"b": {"title": "B"}},
                "relations": [{"source": "ghost", "target": "b", "type": "relates"}],
            }
        )

        with pytest.raises(MissingReferenceError, match="unknown task: ghost"):
            validate_snapshot(snapshot)


def test_strict_follows_cli_option(write_snapshot: WriteSnapshot) -> None:
    path = write_snapshot({"relations": [{"source": "x", "target": "y", "type": "relates"}]})
    context.set_strict(True)

    with pytest.raises(MissingReferenceError):
        load_snapshot(path)

    assert len(load_snapshot(path, strict=False).relations) == 1
