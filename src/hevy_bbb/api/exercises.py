"""
Exercise name resolution against the Hevy template catalog.

Programs name exercises the way lifters say them ("Squat", "Pull-up"),
while Hevy titles them by equipment ("Squat (Barbell)").
Resolution tries, in order: exact title, the alias table, then a substring
match in either direction.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from hevy_bbb.api.model import ExerciseTemplate

logger = logging.getLogger(__name__)


# Canonical lowercase name -> acceptable Hevy titles, most preferred first
EXERCISE_ALIASES: Mapping[str, Sequence[str]] = MappingProxyType({
    # Main lifts
    "squat": ("barbell squat", "squat (barbell)"),
    "bench press": ("barbell bench press", "bench press (barbell)"),
    "deadlift": ("barbell deadlift", "deadlift (barbell)"),
    "overhead press": ("overhead press (barbell)", "barbell overhead press", "shoulder press (barbell)"),

    # Accessories
    "barbell row": ("bent over row (barbell)", "barbell bent over row", "bent over row"),
    "dumbbell press": ("dumbbell bench press", "bench press (dumbbell)", "dumbbell chest press"),
    "dumbbell row": ("dumbbell row", "bent over row (dumbbell)", "one arm dumbbell row"),
    "leg curl": ("lying leg curl", "leg curl (machine)", "seated leg curl"),
    "leg press": ("leg press (machine)", "leg press"),
    "tricep pushdown": ("tricep pushdown", "triceps pushdown", "cable pushdown"),
    "cable fly": ("cable fly", "cable chest fly", "cable crossover"),
    "good morning": ("good morning", "good morning (barbell)"),
    "hanging leg raise": ("hanging leg raise", "hanging knee raise"),
    "back extension": ("back extension", "hyperextension", "back extension (machine)"),
    "lateral raise": ("lateral raise (dumbbell)", "dumbbell lateral raise", "lateral raise"),
    "face pull": ("face pull", "face pull (cable)"),
    "rear delt fly": ("reverse fly (dumbbell)", "rear delt fly", "reverse fly"),
    "pull-up": ("pull up", "pull-up", "pullup"),
    "dips": ("dip", "tricep dip", "chest dip"),
    "lunges": ("lunge (dumbbell)", "walking lunge", "lunge (barbell)"),
    "bulgarian split squat": ("bulgarian split squat", "split squat"),
})


class ExerciseNotFoundError(LookupError):
    """No catalog template matches an exercise name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no template found for exercise: {name}")


def merge_aliases(
    base: Mapping[str, Sequence[str]],
    overrides: Mapping[str, Iterable[str]],
) -> Mapping[str, Sequence[str]]:
    """Return a new read-only alias table; overrides replace whole entries."""
    merged: Dict[str, Sequence[str]] = {k: tuple(v) for k, v in base.items()}
    for name, aliases in overrides.items():
        merged[name.lower()] = tuple(a.lower() for a in aliases)
    return MappingProxyType(merged)


def load_alias_overrides(path) -> Dict[str, List[str]]:
    """Read a JSON object of {name: [alias, ...]}.

    Raises:
        ValueError: If the file cannot be read or is not a JSON object of
            string lists.
    """
    try:
        text = Path(path).read_text()
    except OSError as e:
        raise ValueError(f"Cannot read alias file {path}: {e}") from e
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Alias file {path} must contain a JSON object")
    for name, aliases in data.items():
        if not isinstance(aliases, list) or not all(isinstance(a, str) for a in aliases):
            raise ValueError(f"Aliases for '{name}' must be a list of strings")
    return data


def build_alias_table(alias_file: Optional[str] = None) -> Mapping[str, Sequence[str]]:
    """Built-in aliases, merged with the override file if one is given."""
    if not alias_file:
        return EXERCISE_ALIASES
    overrides = load_alias_overrides(alias_file)
    logger.info("Loaded %d alias override(s) from %s", len(overrides), alias_file)
    return merge_aliases(EXERCISE_ALIASES, overrides)


class ExerciseResolver:
    """Maps exercise names to Hevy template IDs.

    The lowercase title index is built once here and only read afterwards.
    """

    def __init__(
        self,
        templates: Iterable,
        aliases: Mapping[str, Sequence[str]] = None,
    ):
        self._aliases = EXERCISE_ALIASES if aliases is None else aliases
        self._index: Dict[str, ExerciseTemplate] = {}
        for t in templates:
            if isinstance(t, dict):
                t = ExerciseTemplate.from_dict(t)
            self._index[t.title.lower()] = t

    def __len__(self) -> int:
        return len(self._index)

    def find_template(self, name: str) -> ExerciseTemplate:
        """Find the catalog template for an exercise name.

        Raises:
            ExerciseNotFoundError: If nothing matches.
        """
        lower = name.lower()

        template = self._index.get(lower)
        if template is not None:
            return template

        for alias in self._aliases.get(lower, ()):
            template = self._index.get(alias.lower())
            if template is not None:
                return template

        # First qualifying entry in catalog order; ambiguous if several qualify
        for title, template in self._index.items():
            if lower in title or title in lower:
                logger.debug("Substring match '%s' -> '%s'", name, template.title)
                return template

        raise ExerciseNotFoundError(name)

    def resolve(self, name: str) -> str:
        """Template ID for an exercise name."""
        return self.find_template(name).id
