"""
CSV export of a generated program.

One row per prescribed set. Weight and Percentage are blank when zero.
"""

import csv
import io
from pathlib import Path
from typing import List

from hevy_bbb.api.model import PrescribedSet, Program


CSV_HEADER = ["Week", "Day", "Exercise", "Sets", "Reps", "Weight", "Percentage"]


def format_row(week: int, day: int, prescribed: PrescribedSet) -> List[str]:
    weight = f"{prescribed.weight:.0f}" if prescribed.weight > 0 else ""
    percentage = f"{prescribed.percentage:.0f}%" if prescribed.percentage > 0 else ""
    return [
        str(week),
        str(day),
        prescribed.exercise,
        str(prescribed.sets),
        prescribed.reps,
        weight,
        percentage,
    ]


def program_to_rows(program: Program) -> List[List[str]]:
    """Header plus one row per set, in program order."""
    rows = [list(CSV_HEADER)]
    for day in program.days:
        for prescribed in day.sets:
            rows.append(format_row(day.week, day.day, prescribed))
    return rows


def program_to_csv(program: Program) -> str:
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerows(program_to_rows(program))
    return buffer.getvalue()


def write_csv(program: Program, path) -> Path:
    """Write the program to `path` and return it."""
    path = Path(path)
    with open(path, "w", newline="") as f:
        csv.writer(f, lineterminator="\n").writerows(program_to_rows(program))
    return path
