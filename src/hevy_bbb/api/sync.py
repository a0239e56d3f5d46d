"""
Routine sync — reconcile generated routines with the Hevy account.

Full flow: list folders + routines → ensure one folder per week →
create or update each routine by title (with rate-limit retries) → counts.
Title is the only identity; nothing is remembered between runs.
"""

import logging
import time
from typing import Callable, Dict, List, Mapping, Sequence

from hevy_bbb.api.exercises import ExerciseResolver
from hevy_bbb.api.model import DAYS_PER_WEEK, WEEKS, Folder, Program, Routine, RoutinePayload, SyncResult
from hevy_bbb.api.retry import exponential_backoff, is_rate_limit_error, retry
from hevy_bbb.api.routines import convert_program
from hevy_bbb.sdk.client import HevyClient
from hevy_bbb.sdk import folders as sdk_folders
from hevy_bbb.sdk import routines as sdk_routines
from hevy_bbb.sdk import templates as sdk_templates

logger = logging.getLogger(__name__)


FOLDER_TITLE_FORMAT = "531 BBB Week {week}"

MAX_ATTEMPTS = 5
PACING_SECONDS = 0.3


class SyncError(RuntimeError):
    """A routine could not be synced; the rest of the sync was abandoned."""

    def __init__(self, title: str, error: Exception):
        self.title = title
        super().__init__(f"failed to sync routine {title}: {error}")


def folder_title(week: int) -> str:
    return FOLDER_TITLE_FORMAT.format(week=week)


def week_for_index(index: int) -> int:
    """Routines arrive grouped 4 per week in generation order."""
    return index // DAYS_PER_WEEK + 1


class RoutineSync:
    """Create-or-update sync of routine payloads into week folders."""

    def __init__(
        self,
        client: HevyClient,
        sleep: Callable[[float], None] = time.sleep,
        pacing: float = PACING_SECONDS,
        attempts: int = MAX_ATTEMPTS,
        backoff: Callable[[int], float] = None,
    ):
        self._client = client
        self._sleep = sleep
        self._pacing = pacing
        self._attempts = attempts
        self._backoff = backoff or exponential_backoff()

    def sync(self, payloads: Sequence[RoutinePayload]) -> SyncResult:
        """Sync payloads (4 per week, in order) and return created/updated counts.

        Raises:
            SyncError: If any routine fails fatally or exhausts its retries.
            HevyError: If listing folders/routines or creating a folder fails.
        """
        if len(payloads) > WEEKS * DAYS_PER_WEEK:
            raise ValueError(
                f"Expected at most {WEEKS * DAYS_PER_WEEK} routines, got {len(payloads)}"
            )

        folders = [Folder.from_dict(f) for f in sdk_folders.get_folders(self._client)]
        routines = [Routine.from_dict(r) for r in sdk_routines.get_routines(self._client)]
        folder_ids = {f.title: f.id for f in folders}
        routine_ids = {r.title: r.id for r in routines}
        logger.info("Found %d folder(s) and %d routine(s)", len(folders), len(routines))

        week_folders = self._ensure_week_folders(folder_ids)

        result = SyncResult()
        total = len(payloads)
        for i, payload in enumerate(payloads):
            folder_id = week_folders[week_for_index(i)]
            existing_id = routine_ids.get(payload.title)

            if existing_id is not None:
                self._push(lambda: sdk_routines.update_routine(
                    self._client, existing_id, payload.for_update().to_dict(),
                ), payload.title)
                result.updated += 1
                logger.info("[%d/%d] Updated: %s", i + 1, total, payload.title)
            else:
                self._push(lambda: sdk_routines.create_routine(
                    self._client, payload.for_create(folder_id).to_dict(),
                ), payload.title)
                result.created += 1
                logger.info("[%d/%d] Created: %s", i + 1, total, payload.title)

            self._sleep(self._pacing)

        logger.info("Sync complete! Created: %d, Updated: %d", result.created, result.updated)
        return result

    def _ensure_week_folders(self, folder_ids: Mapping[str, int]) -> Dict[int, int]:
        week_folders = {}
        for week in range(1, WEEKS + 1):
            title = folder_title(week)
            if title in folder_ids:
                week_folders[week] = folder_ids[title]
                logger.info("Found existing folder: %s", title)
            else:
                folder = Folder.from_dict(sdk_folders.create_folder(self._client, title))
                week_folders[week] = folder.id
                logger.info("Created folder: %s", title)
        return week_folders

    def _push(self, operation: Callable[[], dict], title: str) -> dict:
        def on_retry(attempt, delay, error):
            logger.warning("Rate limited on '%s', waiting %ss (attempt %d/%d)",
                           title, delay, attempt + 1, self._attempts)

        try:
            return retry(
                operation,
                attempts=self._attempts,
                is_retryable=is_rate_limit_error,
                backoff=self._backoff,
                sleep=self._sleep,
                on_retry=on_retry,
            )
        except Exception as e:
            raise SyncError(title, e) from e


def sync_program(
    client: HevyClient,
    program: Program,
    aliases: Mapping[str, Sequence[str]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> SyncResult:
    """Full flow: templates → resolver → convert all days → sync."""
    templates = sdk_templates.get_exercise_templates(client)
    logger.info("Found %d exercise templates", len(templates))
    resolver = ExerciseResolver(templates, aliases)
    payloads: List[RoutinePayload] = convert_program(program, resolver)
    return RoutineSync(client, sleep=sleep).sync(payloads)
