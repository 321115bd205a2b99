"""Configuration file loading for taskpath.

A single YAML file (taskpath_config.yaml) holds the scheduler settings and
the rendering options used by the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .scheduler import CriticalPathConfig

CONFIG_FILENAME = "taskpath_config.yaml"
DEFAULT_CRITICAL_COLOR = "#dc2626"


class GraphConfig(BaseModel):
    """Configuration for DOT graph generation."""

    rankdir: str = "LR"
    critical_color: str = DEFAULT_CRITICAL_COLOR
    default_color: str = "lightgrey"
    cycle_color: str = "orange"
    show_undated: bool = True  # Include tasks without dates as plain nodes


class GanttConfig(BaseModel):
    """Configuration for Mermaid Gantt chart generation."""

    title: str = "Project Schedule"
    mark_critical: bool = True  # Tag critical-path tasks with "crit"


class TaskpathConfig(BaseModel):
    """Top-level configuration."""

    scheduler: CriticalPathConfig = Field(default_factory=CriticalPathConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    gantt: GanttConfig = Field(default_factory=GanttConfig)


def load_config(config_path: Path | str) -> TaskpathConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to taskpath_config.yaml

    Returns:
        Validated TaskpathConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is empty or not a mapping
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping at the root level")

    return TaskpathConfig.model_validate(data)
