"""
Tests for Hevy sync tools.

Tools are thin wrappers — detailed sync logic tests are in tests/api/.
"""
import json
import pytest
from unittest.mock import patch
from mcp.server.fastmcp import FastMCP

from hevy_bbb import sync_tools
from hevy_bbb.api.model import SyncResult
from hevy_bbb.api.sync import SyncError
from hevy_bbb.sdk.client import RemoteAPIError
from tests.conftest import TRAINING_MAXES, get_tool_result_text


@pytest.fixture
def app_with_sync():
    app = FastMCP("Test Hevy BBB Sync")
    app = sync_tools.register_tools(app)
    return app


async def _call(app, name, args):
    result = await app.call_tool(name, args)
    return json.loads(get_tool_result_text(result))


@patch("hevy_bbb.sync_tools.sync_program")
@pytest.mark.asyncio
async def test_sync_program_to_hevy(mock_sync, app_with_sync, mock_client):
    mock_sync.return_value = SyncResult(created=12, updated=4)

    data = await _call(app_with_sync, "sync_program_to_hevy", {"training_maxes": TRAINING_MAXES})

    assert data == {"success": True, "created": 12, "updated": 4, "total": 16}
    client, program, aliases = mock_sync.call_args.args
    assert client is mock_client
    assert len(program.days) == 16
    assert aliases["squat"][0] == "barbell squat"


@patch("hevy_bbb.sync_tools.sync_program")
@pytest.mark.asyncio
async def test_sync_reports_failure(mock_sync, app_with_sync):
    mock_sync.side_effect = SyncError(
        "531 BBB W1D1 - Squat", RemoteAPIError(429, "Too Many Requests"),
    )
    data = await _call(app_with_sync, "sync_program_to_hevy", {"training_maxes": TRAINING_MAXES})
    assert "531 BBB W1D1 - Squat" in data["error"]
    assert "429" in data["error"]


@pytest.mark.asyncio
async def test_sync_requires_maxes_or_memory(app_with_sync):
    data = await _call(app_with_sync, "sync_program_to_hevy", {})
    assert "training_maxes is required" in data["error"]


@pytest.mark.asyncio
async def test_sync_without_api_key(app_with_sync, mock_get_client):
    mock_get_client.side_effect = ValueError("No Hevy API key. Call set_hevy_api_key() or set HEVY_API_KEY.")
    data = await _call(app_with_sync, "sync_program_to_hevy", {"training_maxes": TRAINING_MAXES})
    assert "No Hevy API key" in data["error"]


@patch("hevy_bbb.sync_tools.sync_program")
@pytest.mark.asyncio
async def test_sync_from_memory(mock_sync, app_with_sync, tmp_path, monkeypatch, config):
    from hevy_bbb.api.memory import save_snapshot

    path = tmp_path / "memory.json"
    save_snapshot(config, path)
    monkeypatch.setenv("HEVY_BBB_MEMORY_FILE", str(path))
    mock_sync.return_value = SyncResult(created=16)

    data = await _call(app_with_sync, "sync_program_to_hevy", {"use_memory": True})

    assert data["created"] == 16
    program = mock_sync.call_args.args[1]
    assert program.days[0].sets[-1].exercise == "Leg Curl"


@patch("hevy_bbb.sync_tools.sdk_templates")
@pytest.mark.asyncio
async def test_preview_routines(mock_templates, app_with_sync, catalog):
    mock_templates.get_exercise_templates.return_value = catalog

    data = await _call(app_with_sync, "preview_hevy_routines", {
        "training_maxes": TRAINING_MAXES,
        "accessories": {"Squat": "Leg Curl"},
    })

    assert data["template_count"] == len(catalog)
    assert len(data["routines"]) == 16
    assert data["routines"][0] == {
        "title": "531 BBB W1D1 - Squat",
        "exercises": [
            {"exercise_template_id": "SQ01", "set_count": 11},
            {"exercise_template_id": "LC01", "set_count": 5},
        ],
    }


@patch("hevy_bbb.sync_tools.sdk_templates")
@pytest.mark.asyncio
async def test_preview_unresolved_exercise(mock_templates, app_with_sync, catalog):
    mock_templates.get_exercise_templates.return_value = catalog
    data = await _call(app_with_sync, "preview_hevy_routines", {
        "training_maxes": TRAINING_MAXES,
        "accessories": {"Bench Press": "Cable Fly"},
    })
    assert "Cable Fly" in data["error"]
    assert "531 BBB W1D2 - Bench Press" in data["error"]


@patch("hevy_bbb.sync_tools.sdk_routines")
@pytest.mark.asyncio
async def test_list_hevy_routines(mock_routines, app_with_sync):
    mock_routines.get_routines.return_value = [
        {"id": "r-1", "title": "531 BBB W1D1 - Squat", "folder_id": 3, "exercises": []},
    ]
    data = await _call(app_with_sync, "list_hevy_routines", {})
    assert data == [{"id": "r-1", "title": "531 BBB W1D1 - Squat", "folder_id": 3}]


@patch("hevy_bbb.sync_tools.sdk_folders")
@pytest.mark.asyncio
async def test_list_hevy_folders_api_error(mock_folders, app_with_sync):
    mock_folders.get_folders.side_effect = RemoteAPIError(401, "invalid api key")
    data = await _call(app_with_sync, "list_hevy_folders", {})
    assert data["error"] == "API error (status 401): invalid api key"


@patch("hevy_bbb.sync_tools.set_session_api_key")
@pytest.mark.asyncio
async def test_set_hevy_api_key(mock_set, app_with_sync):
    data = await _call(app_with_sync, "set_hevy_api_key", {"api_key": "abc-123"})
    assert data["success"] is True
    assert mock_set.call_args.args[1] == "abc-123"


@patch("hevy_bbb.sync_tools.sync_program")
@pytest.mark.asyncio
async def test_sync_with_missing_alias_file(mock_sync, app_with_sync, tmp_path, monkeypatch):
    monkeypatch.setenv("HEVY_BBB_ALIAS_FILE", str(tmp_path / "missing.json"))
    data = await _call(app_with_sync, "sync_program_to_hevy", {"training_maxes": TRAINING_MAXES})
    assert "Cannot read alias file" in data["error"]
    mock_sync.assert_not_called()
