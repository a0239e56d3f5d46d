"""
Domain types for the 5/3/1 BBB program and its Hevy routine form.

Program-side types are frozen: the generator produces them once and
everything downstream only reads them. Routine payloads serialize to the
exact JSON shape the Hevy API expects via to_dict().
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from hevy_bbb.sdk.types import SetType


AMRAP_MARKER = "+"

WEEKS = 4
DAYS_PER_WEEK = 4


# ── Program side ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PrescribedSet:
    """One prescribed line of the program, e.g. 3x5 @ 225 lb (75%).

    reps is a notation string: "5" or, for AMRAP, "5+".
    weight is in pounds; 0 means no weight (accessories).
    percentage is of training max; 0 means not percentage based.
    """
    exercise: str
    sets: int
    reps: str
    weight: float = 0.0
    percentage: float = 0.0

    @property
    def is_amrap(self) -> bool:
        return self.reps.endswith(AMRAP_MARKER)


@dataclass(frozen=True)
class TrainingDay:
    week: int
    day: int
    main_lift: str
    sets: Tuple[PrescribedSet, ...] = ()


@dataclass(frozen=True)
class Program:
    days: Tuple[TrainingDay, ...] = ()

    def week(self, number: int) -> Tuple[TrainingDay, ...]:
        return tuple(d for d in self.days if d.week == number)


# ── Remote side ─────────────────────────────────────────────────────────


@dataclass
class ExerciseTemplate:
    """An entry of the Hevy exercise catalog."""
    id: str
    title: str
    type: str = ""
    primary_muscle_group: str = ""
    is_custom: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> "ExerciseTemplate":
        return cls(
            id=str(d.get("id", "")),
            title=d.get("title", ""),
            type=d.get("type") or "",
            primary_muscle_group=d.get("primary_muscle_group") or "",
            is_custom=bool(d.get("is_custom", False)),
        )


@dataclass
class RepRange:
    start: int
    end: int

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


@dataclass
class RemoteSet:
    """A single set inside a routine exercise. reps and rep_range are exclusive."""
    type: SetType = SetType.NORMAL
    weight_kg: Optional[float] = None
    reps: Optional[int] = None
    rep_range: Optional[RepRange] = None

    def __post_init__(self):
        if self.reps is not None and self.rep_range is not None:
            raise ValueError("A set takes either reps or rep_range, not both")

    def to_dict(self) -> dict:
        d: Dict[str, Any] = {"type": SetType(self.type).value}
        if self.weight_kg is not None:
            d["weight_kg"] = self.weight_kg
        if self.reps is not None:
            d["reps"] = self.reps
        if self.rep_range is not None:
            d["rep_range"] = self.rep_range.to_dict()
        return d


@dataclass
class ExerciseBlock:
    """One exercise in a routine with its ordered sets."""
    exercise_template_id: str
    sets: list = field(default_factory=list)
    superset_id: Optional[int] = None
    rest_seconds: Optional[int] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        d: Dict[str, Any] = {"exercise_template_id": self.exercise_template_id}
        if self.superset_id is not None:
            d["superset_id"] = self.superset_id
        if self.rest_seconds is not None:
            d["rest_seconds"] = self.rest_seconds
        if self.notes is not None:
            d["notes"] = self.notes
        d["sets"] = [s.to_dict() for s in self.sets]
        return d


@dataclass
class RoutinePayload:
    """Body of a routine create/update. title is the sync identity key.

    folder_id must be set when creating and absent when updating; use
    for_create() / for_update() rather than setting it directly.
    """
    title: str
    exercises: list = field(default_factory=list)
    folder_id: Optional[int] = None
    notes: Optional[str] = None

    def for_create(self, folder_id: int) -> "RoutinePayload":
        return replace(self, folder_id=folder_id)

    def for_update(self) -> "RoutinePayload":
        return replace(self, folder_id=None)

    def to_dict(self) -> dict:
        d: Dict[str, Any] = {"title": self.title}
        if self.folder_id is not None:
            d["folder_id"] = self.folder_id
        if self.notes is not None:
            d["notes"] = self.notes
        d["exercises"] = [e.to_dict() for e in self.exercises]
        return d


@dataclass
class Routine:
    """A routine as listed by, or echoed from, the Hevy API."""
    id: str
    title: str
    folder_id: Optional[int] = None

    @classmethod
    def from_dict(cls, d: dict) -> "Routine":
        return cls(
            id=str(d.get("id") or ""),
            title=d.get("title", ""),
            folder_id=d.get("folder_id"),
        )


@dataclass
class Folder:
    id: int
    title: str

    @classmethod
    def from_dict(cls, d: dict) -> "Folder":
        return cls(id=int(d["id"]), title=d.get("title", ""))


@dataclass
class SyncResult:
    created: int = 0
    updated: int = 0

    @property
    def total(self) -> int:
        return self.created + self.updated

    def to_dict(self) -> dict:
        return {"created": self.created, "updated": self.updated, "total": self.total}
