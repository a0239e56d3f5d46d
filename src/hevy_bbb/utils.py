"""
Shared utility functions for the Hevy BBB MCP server.

Environment configuration and formatting helpers used across tool modules.
"""

import os
from typing import Optional

from hevy_bbb.api.model import Program, RoutinePayload, TrainingDay
from hevy_bbb.api.memory import DEFAULT_MEMORY_FILE
from hevy_bbb.api.program import ProgramConfig, calculate_training_max
from hevy_bbb.sdk.types import API_URL


def get_api_key() -> Optional[str]:
    """Default Hevy API key (HEVY_API_KEY), used when no session key is set."""
    return os.environ.get("HEVY_API_KEY") or None


def get_api_url() -> str:
    """Hevy API root (HEVY_API_URL), defaults to the public v1 API."""
    return os.environ.get("HEVY_API_URL") or API_URL


def get_alias_file() -> Optional[str]:
    """Optional JSON file of exercise alias overrides (HEVY_BBB_ALIAS_FILE)."""
    return os.environ.get("HEVY_BBB_ALIAS_FILE") or None


def get_memory_file() -> str:
    """Path of the saved config snapshot (HEVY_BBB_MEMORY_FILE)."""
    return os.environ.get("HEVY_BBB_MEMORY_FILE") or DEFAULT_MEMORY_FILE


def format_weight(pounds: float) -> Optional[str]:
    """Format a prescribed weight like "225 lb"; None for bodyweight/unweighted."""
    if not pounds or pounds <= 0:
        return None
    return f"{pounds:.0f} lb"


def summarize_day(day: TrainingDay) -> dict:
    """Readable view of one training day."""
    return {
        "week": day.week,
        "day": day.day,
        "main_lift": day.main_lift,
        "sets": [
            {
                "exercise": s.exercise,
                "sets": s.sets,
                "reps": s.reps,
                "weight": format_weight(s.weight),
                "percentage": f"{s.percentage:.0f}%" if s.percentage > 0 else None,
            }
            for s in day.sets
        ],
    }


def summarize_program(program: Program) -> list:
    return [summarize_day(day) for day in program.days]


def summarize_routine(payload: RoutinePayload) -> dict:
    """Short view of a routine payload: title and sets per exercise block."""
    return {
        "title": payload.title,
        "exercises": [
            {"exercise_template_id": block.exercise_template_id, "set_count": len(block.sets)}
            for block in payload.exercises
        ],
    }


def build_config(
    training_maxes: dict,
    lift_order: list = None,
    bbb_percentage: float = None,
    bbb_pairing: dict = None,
    accessories: dict = None,
    one_rep_maxes: bool = False,
) -> ProgramConfig:
    """Build and validate a ProgramConfig from tool arguments.

    With one_rep_maxes=True the given numbers are true 1RMs and are turned
    into training maxes (90%, nearest 5 lb).

    Raises:
        ValueError: If the resulting config is invalid.
    """
    maxes = {lift: float(v) for lift, v in (training_maxes or {}).items()}
    if one_rep_maxes:
        maxes = {lift: calculate_training_max(v) for lift, v in maxes.items()}

    data = {"training_maxes": maxes}
    if lift_order:
        data["lift_order"] = lift_order
    if bbb_percentage is not None:
        data["bbb_percentage"] = bbb_percentage
    if bbb_pairing:
        data["bbb_pairing"] = bbb_pairing
    if accessories:
        data["accessories"] = accessories

    config = ProgramConfig.from_dict(data)
    config.validate()
    return config
