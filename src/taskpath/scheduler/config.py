"""Configuration classes for the critical path calculator."""

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_SLACK_EPSILON = 0.01


class CyclePolicy(str, Enum):
    """What to do when blocks/depends relations form a cycle."""

    EXCLUDE = "exclude"  # Drop the tasks on the cycle from the critical path graph
    RAISE = "raise"  # Raise CircularDependencyError


class CriticalPathConfig(BaseModel):
    """Configuration for critical path calculation."""

    # Tasks with slack at or below this value are critical
    slack_epsilon: float = Field(default=DEFAULT_SLACK_EPSILON, ge=0)
    cycle_policy: CyclePolicy = CyclePolicy.EXCLUDE
