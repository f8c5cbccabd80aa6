"""Utility functions for file handling and JSON output."""

import json
from decimal import Decimal
from pathlib import Path
from typing import Any


# File system utilities
def ensure_dir(path: str) -> None:
    """Ensure directory exists, creating it if necessary."""
    Path(path).mkdir(parents=True, exist_ok=True)


def exists(path: str) -> bool:
    """Check if file exists."""
    return Path(path).exists()


def dirname(path: str) -> str:
    """Get directory name from path."""
    return str(Path(path).parent)


def expand_path(path: str) -> str:
    """Expand ~ in path."""
    return str(Path(path).expanduser())


# File I/O
def read_text(path: str) -> str:
    """Read text file."""
    return Path(path).read_text()


# JSON output
# Integers longer than this cannot be written by json (int to str conversion limit)
MAX_INT_DIGITS = 4300


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        if value != value.to_integral_value():
            return float(value)
        return int(value) if value.adjusted() < MAX_INT_DIGITS else str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(data: Any) -> str:
    """Convert data to JSON string; Decimal values become numbers."""
    return json.dumps(data, indent=2, default=_json_default)


def compact_json(data: Any) -> str:
    """Single-line JSON, e.g. for variables in tables and messages."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), default=_json_default)
