"""Tests for api/sync.py — folders, create-or-update, retries, pacing."""

import pytest
from unittest.mock import Mock, patch

from hevy_bbb.api.model import ExerciseBlock, RemoteSet, RoutinePayload
from hevy_bbb.api.sync import RoutineSync, SyncError, folder_title, sync_program, week_for_index
from hevy_bbb.sdk.client import RemoteAPIError, TransportError
from hevy_bbb.sdk.types import SetType


def _payloads():
    titles = [
        f"531 BBB W{w}D{d} - {lift}"
        for w in range(1, 5)
        for d, lift in enumerate(["Squat", "Bench Press", "Deadlift", "Overhead Press"], start=1)
    ]
    return [
        RoutinePayload(title=t, exercises=[ExerciseBlock("SQ01", sets=[RemoteSet(SetType.NORMAL, reps=5)])])
        for t in titles
    ]


@pytest.fixture
def sdk():
    """Patch the SDK modules used by sync; record call order across them."""
    calls = []
    with patch("hevy_bbb.api.sync.sdk_folders") as folders, \
            patch("hevy_bbb.api.sync.sdk_routines") as routines:

        def create_folder(client, title):
            calls.append(("create_folder", title))
            return {"id": 100 + int(title[-1]), "title": title}

        def create_routine(client, body):
            calls.append(("create_routine", body["title"]))
            return {"id": "new", "title": body["title"]}

        def update_routine(client, routine_id, body):
            calls.append(("update_routine", body["title"]))
            return {"id": routine_id, "title": body["title"]}

        folders.get_folders.return_value = [
            {"id": 1, "title": "531 BBB Week 1"},
            {"id": 2, "title": "531 BBB Week 2"},
            {"id": 99, "title": "Other stuff"},
        ]
        folders.create_folder.side_effect = create_folder
        routines.get_routines.return_value = [
            {"id": "r-1", "title": "531 BBB W1D1 - Squat", "folder_id": 1},
            {"id": "r-6", "title": "531 BBB W2D2 - Bench Press", "folder_id": 2},
            {"id": "r-11", "title": "531 BBB W3D3 - Deadlift", "folder_id": None},
            {"id": "r-16", "title": "531 BBB W4D4 - Overhead Press", "folder_id": None},
            {"id": "x", "title": "Leg day", "folder_id": None},
        ]
        routines.create_routine.side_effect = create_routine
        routines.update_routine.side_effect = update_routine

        yield Mock(folders=folders, routines=routines, calls=calls)


def test_helpers():
    assert folder_title(3) == "531 BBB Week 3"
    assert [week_for_index(i) for i in (0, 3, 4, 15)] == [1, 1, 2, 4]


class TestRoutineSync:
    def test_four_updates_twelve_creates(self, sdk):
        sleep = Mock()
        result = RoutineSync(Mock(), sleep=sleep).sync(_payloads())

        assert (result.updated, result.created) == (4, 12)
        sdk.folders.get_folders.assert_called_once()
        sdk.routines.get_routines.assert_called_once()

        # Folders for weeks 3 and 4 created once each, before any routine work
        folder_calls = [c for c in sdk.calls if c[0] == "create_folder"]
        assert folder_calls == [("create_folder", "531 BBB Week 3"), ("create_folder", "531 BBB Week 4")]
        assert sdk.calls[:2] == folder_calls

        # 300 ms pacing after every routine
        assert [c.args[0] for c in sleep.call_args_list] == [0.3] * 16

    def test_update_has_no_folder_create_has_week_folder(self, sdk):
        RoutineSync(Mock(), sleep=Mock()).sync(_payloads())

        for call in sdk.routines.update_routine.call_args_list:
            client, routine_id, body = call.args
            assert "folder_id" not in body
        updated_ids = [c.args[1] for c in sdk.routines.update_routine.call_args_list]
        assert updated_ids == ["r-1", "r-6", "r-11", "r-16"]

        created = {c.args[1]["title"]: c.args[1]["folder_id"] for c in sdk.routines.create_routine.call_args_list}
        assert created["531 BBB W1D2 - Bench Press"] == 1
        assert created["531 BBB W2D1 - Squat"] == 2
        assert created["531 BBB W3D1 - Squat"] == 103
        assert created["531 BBB W4D3 - Deadlift"] == 104

    def test_all_folders_exist_none_created(self, sdk):
        sdk.folders.get_folders.return_value = [
            {"id": w, "title": f"531 BBB Week {w}"} for w in range(1, 5)
        ]
        RoutineSync(Mock(), sleep=Mock()).sync(_payloads())
        sdk.folders.create_folder.assert_not_called()

    def test_rate_limited_routine_backs_off_then_succeeds(self, sdk):
        sdk.routines.get_routines.return_value = []
        sdk.routines.create_routine.side_effect = [
            RemoteAPIError(429, "Too Many Requests"),
            RemoteAPIError(429, "Too Many Requests"),
            RemoteAPIError(429, "Too Many Requests"),
            {"id": "r", "title": "531 BBB W1D1 - Squat"},
        ]
        sleep = Mock()

        result = RoutineSync(Mock(), sleep=sleep).sync(_payloads()[:1])

        assert result.created == 1
        assert [c.args[0] for c in sleep.call_args_list] == [20, 40, 80, 0.3]

    def test_exhausted_retries_abort_sync(self, sdk):
        sdk.routines.get_routines.return_value = []
        sdk.routines.create_routine.side_effect = RemoteAPIError(429, "rate limit")
        sleep = Mock()

        with pytest.raises(SyncError) as exc_info:
            RoutineSync(Mock(), sleep=sleep).sync(_payloads())

        assert exc_info.value.title == "531 BBB W1D1 - Squat"
        assert isinstance(exc_info.value.__cause__, RemoteAPIError)
        assert sdk.routines.create_routine.call_count == 5
        assert [c.args[0] for c in sleep.call_args_list] == [20, 40, 80, 160]

    def test_fatal_error_aborts_without_retry(self, sdk):
        sdk.routines.get_routines.return_value = []
        sdk.routines.create_routine.side_effect = [
            {"id": "a", "title": "ok"},
            TransportError("connection reset"),
        ]
        sleep = Mock()

        with pytest.raises(SyncError, match="W1D2 - Bench Press"):
            RoutineSync(Mock(), sleep=sleep).sync(_payloads())

        assert sdk.routines.create_routine.call_count == 2
        assert [c.args[0] for c in sleep.call_args_list] == [0.3]

    def test_non_rate_limit_api_error_not_retried(self, sdk):
        sdk.routines.update_routine.side_effect = RemoteAPIError(400, "folder_id not allowed")
        with pytest.raises(SyncError, match="folder_id not allowed"):
            RoutineSync(Mock(), sleep=Mock()).sync(_payloads())
        assert sdk.routines.update_routine.call_count == 1

    def test_folder_creation_failure_aborts_before_routines(self, sdk):
        sdk.folders.create_folder.side_effect = RemoteAPIError(500, "oops")
        with pytest.raises(RemoteAPIError):
            RoutineSync(Mock(), sleep=Mock()).sync(_payloads())
        sdk.routines.create_routine.assert_not_called()
        sdk.routines.update_routine.assert_not_called()

    def test_rejects_more_than_sixteen(self, sdk):
        with pytest.raises(ValueError, match="at most 16"):
            RoutineSync(Mock(), sleep=Mock()).sync(_payloads() + _payloads()[:1])


@patch("hevy_bbb.api.sync.sdk_templates")
def test_sync_program_full_flow(mock_templates, sdk, program, catalog):
    mock_templates.get_exercise_templates.return_value = catalog
    sdk.routines.get_routines.return_value = []

    result = sync_program(Mock(), program, sleep=Mock())

    assert result.to_dict() == {"created": 16, "updated": 0, "total": 16}
    first = sdk.routines.create_routine.call_args_list[0].args[1]
    assert first["title"] == "531 BBB W1D1 - Squat"
    assert first["folder_id"] == 1
    assert [e["exercise_template_id"] for e in first["exercises"]] == ["SQ01", "LC01"]
