"""Options set once by the CLI callback and read by the loader."""

from __future__ import annotations

from pathlib import Path


class _CliState:
    """Global options shared by every taskpath command."""

    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.strict = False


_state = _CliState()


def get_config_path() -> Path | None:
    """Config file given with --config, if any."""
    return _state.config_path


def set_config_path(path: Path | None) -> None:
    _state.config_path = path


def is_strict() -> bool:
    """Whether dangling relation references should be rejected on load."""
    return _state.strict


def set_strict(strict: bool) -> None:
    _state.strict = strict


def reset() -> None:
    """Restore defaults (used between CLI invocations in tests)."""
    global _state
    _state = _CliState()
