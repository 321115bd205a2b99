"""Pydantic schemas for YAML snapshot validation."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .models import RelationType, TaskStatus


class TaskSchema(BaseModel):
    """Schema for a single task entry."""

    title: str
    status: TaskStatus = TaskStatus.TODO
    start_date: datetime | None = None
    due_date: datetime | None = Field(
        default=None, validation_alias=AliasChoices("due_date", "end_date")
    )

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def coerce_date_to_datetime(cls, v: Any) -> Any:
        """Treat bare YAML dates as midnight."""
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime(v.year, v.month, v.day)
        return v

    @field_validator("start_date", "due_date")
    @classmethod
    def normalize_timezone(cls, v: datetime | None) -> datetime | None:
        """Convert timezone-aware values to naive UTC so all dates compare."""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title_to_string(cls, v: Any) -> str:
        """Ensure title is a string (YAML may give numbers)."""
        return str(v)


class RelationSchema(BaseModel):
    """Schema for a single relation entry."""

    id: str | None = None
    source: str = Field(validation_alias=AliasChoices("source", "source_task_id"))
    target: str = Field(validation_alias=AliasChoices("target", "target_task_id"))
    type: RelationType = Field(validation_alias=AliasChoices("type", "relation_type"))

    @field_validator("id", "source", "target", mode="before")
    @classmethod
    def coerce_id_to_string(cls, v: Any) -> str | None:
        """Task IDs are opaque strings."""
        if v is None:
            return None
        return str(v)


class MetadataSchema(BaseModel):
    """Schema for snapshot metadata."""

    version: str = "1.0"
    workspace: str | None = None
    exported_at: str | None = None

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version_to_string(cls, v: Any) -> str:
        """Ensure version is a string."""
        return str(v)

    @field_validator("exported_at", mode="before")
    @classmethod
    def coerce_date_to_string(cls, v: Any) -> str | None:
        """Convert date objects to string."""
        if v is None:
            return None
        return str(v)


class SnapshotSchema(BaseModel):
    """Schema for the entire snapshot YAML file."""

    metadata: MetadataSchema = Field(default_factory=MetadataSchema)
    tasks: dict[str, TaskSchema] = Field(default_factory=dict)
    relations: list[RelationSchema] = Field(default_factory=list)

    @field_validator("tasks", mode="before")
    @classmethod
    def coerce_task_keys(cls, v: Any) -> Any:
        """Task IDs are strings even when YAML parses them as numbers."""
        if isinstance(v, dict):
            return {str(key): value for key, value in v.items()}  # type: ignore[misc]
        return v
