"""
Shared pytest fixtures for Hevy BBB testing.
"""
import json
import pytest
from unittest.mock import Mock, patch

# Monkey-patch: production uses fastmcp.FastMCP, tests use mcp.server.fastmcp.
# Patch fastmcp.Context to match mcp.server.fastmcp.Context so tools work
# with the test FastMCP.
import fastmcp
from mcp.server.fastmcp import server as mcp_server
fastmcp.Context = mcp_server.Context

from hevy_bbb.api.program import ProgramConfig, generate_program


def get_tool_result_text(result):
    """Extract text from tool result.

    FastMCP call_tool returns a tuple (list_of_TextContent, metadata_dict).
    This helper extracts the text from the first TextContent item.
    """
    if isinstance(result, tuple) and len(result) > 0:
        result = result[0]
    if isinstance(result, list) and len(result) > 0:
        if hasattr(result[0], 'text'):
            return result[0].text
    return str(result)


def make_response(status_code=200, payload=None, text=None):
    """Mock requests.Response. payload=None with text makes .json() fail."""
    response = Mock()
    response.status_code = status_code
    if payload is not None:
        response.json = Mock(return_value=payload)
        response.text = text if text is not None else json.dumps(payload)
    else:
        response.json = Mock(side_effect=ValueError("Expecting value"))
        response.text = text or ""
    return response


CATALOG = [
    {"id": "SQ01", "title": "Squat (Barbell)", "type": "weight_reps", "primary_muscle_group": "quadriceps", "is_custom": False},
    {"id": "BP01", "title": "Bench Press (Barbell)", "type": "weight_reps", "primary_muscle_group": "chest", "is_custom": False},
    {"id": "DL01", "title": "Deadlift (Barbell)", "type": "weight_reps", "primary_muscle_group": "hamstrings", "is_custom": False},
    {"id": "OHP01", "title": "Overhead Press (Barbell)", "type": "weight_reps", "primary_muscle_group": "shoulders", "is_custom": False},
    {"id": "LC01", "title": "Lying Leg Curl (Machine)", "type": "weight_reps", "primary_muscle_group": "hamstrings", "is_custom": False},
    {"id": "FP01", "title": "Face Pull", "type": "weight_reps", "primary_muscle_group": "shoulders", "is_custom": False},
]


TRAINING_MAXES = {
    "Squat": 300.0,
    "Bench Press": 200.0,
    "Deadlift": 350.0,
    "Overhead Press": 130.0,
}


@pytest.fixture
def catalog():
    return [dict(t) for t in CATALOG]


@pytest.fixture
def config():
    cfg = ProgramConfig.default(TRAINING_MAXES)
    cfg.accessories = {"Squat": "Leg Curl", "Overhead Press": "Face Pull"}
    return cfg


@pytest.fixture
def program(config):
    return generate_program(config)


@pytest.fixture
def mock_client():
    """Mock HevyClient; SDK functions are patched per test."""
    return Mock()


@pytest.fixture(autouse=True)
def mock_get_client(mock_client):
    """Auto-mock client_factory.get_client in the tool modules.

    Yields the mock function (not the client) so tests can set side_effect
    for error scenarios like "no API key".
    """
    get_client_fn = Mock(return_value=mock_client)

    patchers = [patch("hevy_bbb.sync_tools.get_client", get_client_fn)]
    for p in patchers:
        p.start()

    yield get_client_fn

    for p in patchers:
        p.stop()


@pytest.fixture
def mock_context():
    """Mock MCP context with state management."""
    context = Mock()
    state = {}

    def get_state(key):
        return state.get(key)

    def set_state(key, value):
        state[key] = value

    context.get_state = get_state
    context.set_state = set_state
    context._state = state

    return context
