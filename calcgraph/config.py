"""Environment-driven settings for the calcgraph CLI.

Every setting has a default; environment variables override the defaults
and CLI options override the environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

DEFAULT_RESOLUTION = 100
DEFAULT_DOMAIN = (-10.0, 10.0)


def home_dir() -> Path:
    """State directory: CALCGRAPH_HOME or ~/.calcgraph."""
    override = os.environ.get("CALCGRAPH_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".calcgraph"


def history_path() -> Path:
    """Path of the persisted calculation history."""
    return home_dir() / "history.json"


def default_resolution() -> int:
    """Graph intervals from CALCGRAPH_RESOLUTION; malformed values fall back to the default."""
    raw = os.environ.get("CALCGRAPH_RESOLUTION", "")
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_RESOLUTION
    return value if value >= 1 else DEFAULT_RESOLUTION


def default_domain(raw: Optional[str] = None) -> tuple[float, float]:
    """Graph range from CALCGRAPH_DOMAIN (``min,max``), used for both axes."""
    raw = raw if raw is not None else os.environ.get("CALCGRAPH_DOMAIN", "")
    parts = raw.split(",")
    if len(parts) != 2:
        return DEFAULT_DOMAIN
    try:
        low, high = float(parts[0]), float(parts[1])
    except ValueError:
        return DEFAULT_DOMAIN
    if high <= low:
        return DEFAULT_DOMAIN
    return low, high
