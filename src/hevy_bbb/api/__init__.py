"""
High-Level API — 5/3/1 BBB program and its Hevy routines.

Composes with the SDK internally.

Modules:
    model     — Data model     (prescribed sets, days, routine payloads)
    program   — Generate       (training maxes → 16 training days)
    exercises — Resolve        (exercise names → Hevy template IDs)
    routines  — Convert        (training day → routine payload)
    retry     — Retry          (bounded backoff for rate limits)
    sync      — Sync           (folders + create-or-update routines)
    export    — Export         (program → CSV)
    memory    — Remember       (config snapshot, next cycle)
"""

# Model
from hevy_bbb.api.model import (
    PrescribedSet,
    TrainingDay,
    Program,
    ExerciseTemplate,
    RemoteSet,
    RepRange,
    ExerciseBlock,
    RoutinePayload,
    Routine,
    Folder,
    SyncResult,
)

# Program generation
from hevy_bbb.api.program import (
    ProgramConfig,
    generate_program,
    calculate_training_max,
    round_to_nearest_5,
)

# Exercise resolution
from hevy_bbb.api.exercises import (
    EXERCISE_ALIASES,
    ExerciseNotFoundError,
    ExerciseResolver,
    build_alias_table,
)

# Conversion
from hevy_bbb.api.routines import ResolutionError, convert_day, convert_program

# Sync
from hevy_bbb.api.retry import retry, exponential_backoff, is_rate_limit_error
from hevy_bbb.api.sync import RoutineSync, SyncError, sync_program

# Export / memory
from hevy_bbb.api.export import program_to_csv, write_csv
from hevy_bbb.api.memory import (
    MemoryFileError,
    Snapshot,
    load_snapshot,
    save_snapshot,
    next_cycle_config,
)

__all__ = [
    # Model
    "PrescribedSet", "TrainingDay", "Program", "ExerciseTemplate", "RemoteSet",
    "RepRange", "ExerciseBlock", "RoutinePayload", "Routine", "Folder", "SyncResult",
    # Program
    "ProgramConfig", "generate_program", "calculate_training_max", "round_to_nearest_5",
    # Exercises
    "EXERCISE_ALIASES", "ExerciseNotFoundError", "ExerciseResolver", "build_alias_table",
    # Conversion
    "ResolutionError", "convert_day", "convert_program",
    # Sync
    "retry", "exponential_backoff", "is_rate_limit_error",
    "RoutineSync", "SyncError", "sync_program",
    # Export / memory
    "program_to_csv", "write_csv",
    "MemoryFileError", "Snapshot", "load_snapshot", "save_snapshot", "next_cycle_config",
]
