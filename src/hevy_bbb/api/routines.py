"""
Program → Hevy routine conversion.

One training day becomes one routine. Consecutive sets with the same
exercise name fold into one exercise block; each prescribed set expands
into `sets` identical remote sets with a warmup/normal type, an optional
weight in kg, and either reps or (for AMRAP) a rep range.
"""

import re
from functools import reduce
from typing import List, Optional, Tuple

from hevy_bbb.api.exercises import ExerciseNotFoundError, ExerciseResolver
from hevy_bbb.api.model import (
    AMRAP_MARKER,
    ExerciseBlock,
    PrescribedSet,
    Program,
    RemoteSet,
    RepRange,
    RoutinePayload,
    TrainingDay,
)
from hevy_bbb.sdk.types import LBS_TO_KG, SetType


TITLE_FORMAT = "531 BBB W{week}D{day} - {lift}"

WARMUP_MAX_PERCENTAGE = 60
AMRAP_MIN_RANGE_END = 10
# Optional sign then ASCII digits; anything else counts as no rep target
REPS_PATTERN = re.compile(r"[+-]?[0-9]+")


class ResolutionError(ValueError):
    """A day could not be converted because an exercise has no template."""

    def __init__(self, exercise: str, title: str):
        self.exercise = exercise
        self.title = title
        super().__init__(f"failed to find template for {exercise} (routine '{title}')")


def routine_title(day: TrainingDay) -> str:
    return TITLE_FORMAT.format(week=day.week, day=day.day, lift=day.main_lift)


def lbs_to_kg(lbs: float) -> float:
    return lbs * LBS_TO_KG


def parse_reps(notation: str) -> Tuple[int, bool]:
    """Parse "5" or "5+" into (reps, is_amrap). Non-numeric reps parse as 0."""
    is_amrap = notation.endswith(AMRAP_MARKER)
    digits = notation[:-len(AMRAP_MARKER)] if is_amrap else notation
    if not REPS_PATTERN.fullmatch(digits):
        return 0, is_amrap
    return int(digits), is_amrap


def set_type(percentage: float) -> SetType:
    """Sets at or below 60% of training max are warmups; 0% (accessories) is normal."""
    if 0 < percentage <= WARMUP_MAX_PERCENTAGE:
        return SetType.WARMUP
    return SetType.NORMAL


def convert_set(prescribed: PrescribedSet) -> List[RemoteSet]:
    """Expand one prescribed set into `sets` identical remote sets."""
    kind = set_type(prescribed.percentage)
    weight_kg = lbs_to_kg(prescribed.weight) if prescribed.weight > 0 else None
    reps, is_amrap = parse_reps(prescribed.reps)

    def build() -> RemoteSet:
        if reps <= 0:
            return RemoteSet(type=kind, weight_kg=weight_kg)
        if is_amrap:
            rep_range = RepRange(start=reps, end=max(reps * 2, AMRAP_MIN_RANGE_END))
            return RemoteSet(type=kind, weight_kg=weight_kg, rep_range=rep_range)
        return RemoteSet(type=kind, weight_kg=weight_kg, reps=reps)

    return [build() for _ in range(prescribed.sets)]


def convert_day(day: TrainingDay, resolver: ExerciseResolver) -> RoutinePayload:
    """Convert one training day into a routine payload (no folder yet).

    Raises:
        ResolutionError: If any exercise name has no template.
    """
    title = routine_title(day)

    def fold(acc, prescribed: PrescribedSet):
        blocks, current_name = acc
        if prescribed.exercise != current_name:
            try:
                template_id = resolver.resolve(prescribed.exercise)
            except ExerciseNotFoundError as e:
                raise ResolutionError(prescribed.exercise, title) from e
            blocks.append(ExerciseBlock(exercise_template_id=template_id))
        blocks[-1].sets.extend(convert_set(prescribed))
        return blocks, prescribed.exercise

    initial: Tuple[List[ExerciseBlock], Optional[str]] = ([], None)
    blocks, _ = reduce(fold, day.sets, initial)
    return RoutinePayload(title=title, exercises=blocks)


def convert_program(program: Program, resolver: ExerciseResolver) -> List[RoutinePayload]:
    """Convert every day in program order; the first failure aborts."""
    return [convert_day(day, resolver) for day in program.days]
