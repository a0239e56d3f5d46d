"""
Client factory for the Hevy BBB MCP server.

Provides session-based client management using FastMCP Context.
The Hevy API key is kept in the session state once set with
set_hevy_api_key; otherwise HEVY_API_KEY from the environment is used.
"""

from fastmcp import Context

from hevy_bbb.sdk.client import HevyClient
from hevy_bbb.utils import get_api_key, get_api_url


HEVY_API_KEY_STATE = "hevy_api_key"


def create_client(api_key: str) -> HevyClient:
    """
    Create a Hevy client for an API key.

    Args:
        api_key: Hevy developer API key (Hevy Pro → Settings → Developer)

    Returns:
        HevyClient pointed at HEVY_API_URL or the public API
    """
    return HevyClient(api_key, base_url=get_api_url())


def _get_session_api_key(ctx: Context) -> str | None:
    try:
        return ctx.get_state(HEVY_API_KEY_STATE)
    except RuntimeError:
        # no request context
        return None


def get_client(ctx: Context) -> HevyClient:
    """
    Get a Hevy client for the current MCP session.

    Usage in tools:
        @app.tool()
        async def list_hevy_routines(ctx: Context) -> str:
            client = get_client(ctx)
            ...

    Raises:
        ValueError: If neither a session key nor HEVY_API_KEY is available
    """
    api_key = _get_session_api_key(ctx) or get_api_key()
    if not api_key:
        raise ValueError("No Hevy API key. Call set_hevy_api_key() or set HEVY_API_KEY.")
    return create_client(api_key)


def set_session_api_key(ctx: Context, api_key: str) -> None:
    ctx.set_state(HEVY_API_KEY_STATE, api_key)


def clear_session_api_key(ctx: Context) -> None:
    ctx.set_state(HEVY_API_KEY_STATE, None)
