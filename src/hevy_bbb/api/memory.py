"""
Saved configuration between cycles.

The snapshot is a small JSON file: {"saved_at": ISO timestamp, "config": {...}}.
Advancing a cycle applies the standard 5/3/1 training max increases.
"""

import json
import os
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from hevy_bbb.api.program import BENCH, DEADLIFT, OHP, SQUAT, ProgramConfig


DEFAULT_MEMORY_FILE = ".531bbb_memory.json"

# Lower-body lifts +10 lb, upper-body lifts +5 lb
NEXT_CYCLE_INCREMENTS = {
    SQUAT: 10.0,
    DEADLIFT: 10.0,
    BENCH: 5.0,
    OHP: 5.0,
}


# Field names written by the Go version of this tool, which shares the file name
LEGACY_CONFIG_FIELDS = {
    "TrainingMaxes": "training_maxes",
    "LiftOrder": "lift_order",
    "BBBPercentage": "bbb_percentage",
    "BBBPairing": "bbb_pairing",
    "Accessories": "accessories",
}
CONFIG_FIELDS = frozenset(LEGACY_CONFIG_FIELDS.values())


class MemoryFileError(ValueError):
    """The memory file exists but cannot be used."""


@dataclass
class Snapshot:
    saved_at: datetime
    config: ProgramConfig

    def to_dict(self) -> dict:
        return {
            "saved_at": self.saved_at.isoformat(),
            "config": self.config.to_dict(),
        }


def load_snapshot(path=DEFAULT_MEMORY_FILE) -> Optional[Snapshot]:
    """Read the snapshot; None when no file exists.

    Raises:
        MemoryFileError: If the file is unreadable, malformed, or has no config.
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise MemoryFileError(f"failed to parse memory file: {e}") from e

    if not isinstance(data, dict) or not data.get("config"):
        raise MemoryFileError("memory file is missing config")

    fields = _config_fields(data["config"])
    try:
        saved_at = _parse_saved_at(data.get("saved_at", ""))
        config = ProgramConfig.from_dict(fields)
    except (TypeError, ValueError, AttributeError) as e:
        raise MemoryFileError(f"failed to parse memory file: {e}") from e

    return Snapshot(saved_at=saved_at, config=config)


def _config_fields(raw: dict) -> dict:
    """Config dict with legacy field names mapped to ours.

    Raises:
        MemoryFileError: If no known config field is present.
    """
    if not isinstance(raw, dict):
        raise MemoryFileError("memory file config must be an object")
    fields = {LEGACY_CONFIG_FIELDS.get(k, k): v for k, v in raw.items()}
    if not CONFIG_FIELDS & fields.keys():
        raise MemoryFileError(
            f"memory file config has no known fields: {', '.join(sorted(raw))}"
        )
    return fields


def _parse_saved_at(value: str) -> datetime:
    # Go writes RFC 3339 with a Z suffix and 0-9 fractional digits
    value = re.sub(r"Z$", "+00:00", value)
    value = re.sub(r"\.(\d+)", lambda m: "." + m.group(1)[:6].ljust(6, "0"), value)
    return datetime.fromisoformat(value)


def save_snapshot(
    config: ProgramConfig,
    path=DEFAULT_MEMORY_FILE,
    now: datetime = None,
) -> Snapshot:
    """Write config to disk (mode 0600) and return the saved snapshot."""
    if config is None:
        raise ValueError("cannot save empty config")

    snapshot = Snapshot(
        saved_at=now or datetime.now(timezone.utc),
        config=config.copy(),
    )
    path = Path(path)
    path.write_text(json.dumps(snapshot.to_dict(), indent=2) + "\n")
    os.chmod(path, 0o600)
    return snapshot


def next_cycle_config(config: ProgramConfig) -> ProgramConfig:
    """Copy of config with the standard training max increases applied."""
    next_config = config.copy()
    for lift, increment in NEXT_CYCLE_INCREMENTS.items():
        next_config.training_maxes[lift] = next_config.training_maxes.get(lift, 0.0) + increment
    return next_config
