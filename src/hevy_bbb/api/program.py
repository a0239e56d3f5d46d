"""
5/3/1 Boring But Big program generation.

Builds the fixed 4-week × 4-day structure from training maxes:
warmups + working sets (weeks 1-3) or deload sets (week 4) for the main
lift, then 5x10 BBB on the paired lift, then an optional 5x10 accessory.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from hevy_bbb.api.model import DAYS_PER_WEEK, WEEKS, PrescribedSet, Program, TrainingDay


SQUAT = "Squat"
BENCH = "Bench Press"
DEADLIFT = "Deadlift"
OHP = "Overhead Press"

ALL_LIFTS = (SQUAT, BENCH, DEADLIFT, OHP)
DEFAULT_LIFT_ORDER = (SQUAT, BENCH, DEADLIFT, OHP)

ACCESSORY_PRESETS = {
    SQUAT: ("Leg Curl", "Lunges", "Leg Press", "Bulgarian Split Squat"),
    BENCH: ("Dumbbell Press", "Dumbbell Row", "Dips", "Tricep Pushdown", "Cable Fly"),
    DEADLIFT: ("Barbell Row", "Good Morning", "Hanging Leg Raise", "Back Extension"),
    OHP: ("Lateral Raise", "Face Pull", "Rear Delt Fly", "Pull-up"),
}

DEFAULT_BBB_PERCENTAGE = 50.0
TRAINING_MAX_FACTOR = 0.9

# (percentage, reps) pairs
WARMUP_SCHEME = ((40, "5"), (50, "5"), (60, "3"))
WORKING_SCHEMES = {
    1: ((65, "5"), (75, "5"), (85, "5+")),
    2: ((70, "3"), (80, "3"), (90, "3+")),
    3: ((75, "5"), (85, "3"), (95, "1+")),
}
DELOAD_SCHEME = ((40, "5"), (50, "5"), (60, "5"))
DELOAD_WEEK = 4

BBB_SETS = 5
BBB_REPS = "10"
ACCESSORY_SETS = 5
ACCESSORY_REPS = "10"


def round_to_nearest_5(weight: float) -> float:
    """Round a weight to the nearest 5 lb (halves round up)."""
    return float(int((weight + 2.5) / 5) * 5)


def calculate_training_max(one_rep_max: float) -> float:
    """Training max is 90% of a true 1RM, rounded to the nearest 5."""
    return round_to_nearest_5(one_rep_max * TRAINING_MAX_FACTOR)


@dataclass
class ProgramConfig:
    """Inputs for one 4-week cycle.

    training_maxes: lift -> training max in pounds
    lift_order: main lift for day 1..4
    bbb_pairing: main lift -> lift used for its BBB sets
    accessories: main lift -> accessory name (missing or empty = none)
    """
    training_maxes: Dict[str, float] = field(default_factory=dict)
    lift_order: List[str] = field(default_factory=lambda: list(DEFAULT_LIFT_ORDER))
    bbb_percentage: float = DEFAULT_BBB_PERCENTAGE
    bbb_pairing: Dict[str, str] = field(default_factory=dict)
    accessories: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def default(cls, training_maxes: Dict[str, float] = None) -> "ProgramConfig":
        """Default order, BBB on the same lift, no accessories."""
        return cls(
            training_maxes=dict(training_maxes or {}),
            lift_order=list(DEFAULT_LIFT_ORDER),
            bbb_pairing={lift: lift for lift in DEFAULT_LIFT_ORDER},
        )

    @classmethod
    def from_dict(cls, d: dict) -> "ProgramConfig":
        lift_order = list(d.get("lift_order") or DEFAULT_LIFT_ORDER)
        pairing = dict(d.get("bbb_pairing") or {})
        for lift in lift_order:
            pairing.setdefault(lift, lift)
        return cls(
            training_maxes={k: float(v) for k, v in (d.get("training_maxes") or {}).items()},
            lift_order=lift_order,
            bbb_percentage=float(d.get("bbb_percentage", DEFAULT_BBB_PERCENTAGE)),
            bbb_pairing=pairing,
            accessories=dict(d.get("accessories") or {}),
        )

    def to_dict(self) -> dict:
        return {
            "training_maxes": dict(self.training_maxes),
            "lift_order": list(self.lift_order),
            "bbb_percentage": self.bbb_percentage,
            "bbb_pairing": dict(self.bbb_pairing),
            "accessories": dict(self.accessories),
        }

    def copy(self) -> "ProgramConfig":
        return ProgramConfig.from_dict(self.to_dict())

    def validate(self):
        """Validate the config before generating.

        Raises:
            ValueError: If the config cannot produce a 4x4 program.
        """
        if len(self.lift_order) != DAYS_PER_WEEK:
            raise ValueError(f"lift_order must name {DAYS_PER_WEEK} lifts, got {len(self.lift_order)}")
        unknown = [lift for lift in self.lift_order if lift not in ALL_LIFTS]
        if unknown:
            raise ValueError(
                f"Unknown lift(s) {', '.join(unknown)}. Use: {', '.join(ALL_LIFTS)}"
            )
        if len(set(self.lift_order)) != len(self.lift_order):
            raise ValueError("lift_order must not repeat a lift")

        needed = set(self.lift_order) | {self.bbb_pairing.get(l, l) for l in self.lift_order}
        for lift in sorted(needed):
            tm = self.training_maxes.get(lift)
            if tm is None:
                raise ValueError(f"Missing training max for {lift}")
            if tm <= 0:
                raise ValueError(f"Training max for {lift} must be positive")

        if not 0 < self.bbb_percentage <= 100:
            raise ValueError("bbb_percentage must be in (0, 100]")


def generate_program(config: ProgramConfig) -> Program:
    """Generate the 16-day 5/3/1 BBB program for one cycle."""
    config.validate()
    days = []

    for week in range(1, WEEKS + 1):
        for day_index, main_lift in enumerate(config.lift_order):
            training_max = config.training_maxes[main_lift]

            if week == DELOAD_WEEK:
                sets = _main_sets(main_lift, training_max, DELOAD_SCHEME)
            else:
                sets = (_main_sets(main_lift, training_max, WARMUP_SCHEME)
                        + _main_sets(main_lift, training_max, WORKING_SCHEMES[week]))

            bbb_lift = config.bbb_pairing.get(main_lift, main_lift)
            bbb_weight = round_to_nearest_5(
                config.training_maxes[bbb_lift] * config.bbb_percentage / 100
            )
            sets.append(PrescribedSet(
                exercise=bbb_lift,
                sets=BBB_SETS,
                reps=BBB_REPS,
                weight=bbb_weight,
                percentage=config.bbb_percentage,
            ))

            accessory = config.accessories.get(main_lift)
            if accessory:
                sets.append(PrescribedSet(
                    exercise=accessory, sets=ACCESSORY_SETS, reps=ACCESSORY_REPS,
                ))

            days.append(TrainingDay(
                week=week, day=day_index + 1, main_lift=main_lift, sets=tuple(sets),
            ))

    return Program(days=tuple(days))


def _main_sets(lift: str, training_max: float, scheme) -> List[PrescribedSet]:
    return [
        PrescribedSet(
            exercise=lift,
            sets=1,
            reps=reps,
            weight=round_to_nearest_5(training_max * pct / 100),
            percentage=float(pct),
        )
        for pct, reps in scheme
    ]
