"""
Hevy sync tools for the Hevy BBB MCP server.

Set the API key, preview the routines a program turns into, and push the
whole cycle to Hevy as one folder per week.
"""

import json
import logging

from fastmcp import Context

from hevy_bbb.api.exercises import ExerciseResolver, build_alias_table
from hevy_bbb.api.memory import MemoryFileError, load_snapshot
from hevy_bbb.api.program import generate_program
from hevy_bbb.api.routines import ResolutionError, convert_program
from hevy_bbb.api.sync import SyncError, sync_program
from hevy_bbb.client_factory import (
    get_client,
    set_session_api_key,
    clear_session_api_key,
)
from hevy_bbb.sdk import folders as sdk_folders
from hevy_bbb.sdk import routines as sdk_routines
from hevy_bbb.sdk import templates as sdk_templates
from hevy_bbb.sdk.client import HevyError
from hevy_bbb.utils import build_config, get_alias_file, get_memory_file, summarize_routine

logger = logging.getLogger(__name__)


def _error(message: str) -> str:
    return json.dumps({"error": message}, indent=2)


def _resolve_config(
    training_maxes, lift_order, bbb_percentage, bbb_pairing, accessories, use_memory,
):
    """Config from the saved snapshot or from tool arguments."""
    if use_memory:
        snapshot = load_snapshot(get_memory_file())
        if snapshot is None:
            raise ValueError("No saved configuration. Call save_program_memory() first.")
        return snapshot.config
    if not training_maxes:
        raise ValueError("training_maxes is required unless use_memory is true")
    return build_config(training_maxes, lift_order, bbb_percentage, bbb_pairing, accessories)


def register_tools(app):
    """Register Hevy key management and sync tools with the MCP app."""

    @app.tool()
    async def set_hevy_api_key(api_key: str, ctx: Context) -> dict:
        """
        Store the Hevy API key for this session.

        The key is found in the Hevy app under Settings → Developer (Hevy Pro).

        Args:
            api_key: Hevy developer API key

        Returns:
            Confirmation
        """
        set_session_api_key(ctx, api_key)
        return {"success": True, "message": "Hevy API key set"}

    @app.tool()
    async def clear_hevy_api_key(ctx: Context) -> dict:
        """
        Forget the Hevy API key for this session.

        Returns:
            Confirmation
        """
        clear_session_api_key(ctx)
        return {"success": True, "message": "Hevy API key cleared"}

    @app.tool()
    async def preview_hevy_routines(
        ctx: Context,
        training_maxes: dict[str, float] = None,
        lift_order: list[str] = None,
        bbb_percentage: float = 50.0,
        bbb_pairing: dict[str, str] = None,
        accessories: dict[str, str] = None,
        use_memory: bool = False,
    ) -> str:
        """
        Show the Hevy routines a program would become, without syncing.

        Fetches the exercise catalog to check every exercise resolves.

        Args:
            training_maxes: Lift -> training max in lb (unless use_memory)
            lift_order: Main lift for days 1-4 (optional)
            bbb_percentage: BBB percentage (default 50)
            bbb_pairing: Main lift -> BBB lift (optional)
            accessories: Main lift -> accessory (optional)
            use_memory: Use the remembered configuration instead of arguments

        Returns:
            JSON list of routine titles with set counts per exercise
        """
        try:
            config = _resolve_config(
                training_maxes, lift_order, bbb_percentage, bbb_pairing, accessories, use_memory,
            )
            client = get_client(ctx)
            templates = sdk_templates.get_exercise_templates(client)
            resolver = ExerciseResolver(templates, build_alias_table(get_alias_file()))
            payloads = convert_program(generate_program(config), resolver)
        except (ValueError, MemoryFileError, ResolutionError, HevyError) as e:
            return _error(str(e))

        return json.dumps({
            "template_count": len(resolver),
            "routines": [summarize_routine(p) for p in payloads],
        }, indent=2)

    @app.tool()
    async def sync_program_to_hevy(
        ctx: Context,
        training_maxes: dict[str, float] = None,
        lift_order: list[str] = None,
        bbb_percentage: float = 50.0,
        bbb_pairing: dict[str, str] = None,
        accessories: dict[str, str] = None,
        use_memory: bool = False,
    ) -> str:
        """
        Generate the program and sync it to Hevy.

        Creates folders "531 BBB Week 1".."4" when missing. Routines are matched
        by title ("531 BBB W1D1 - Squat"): existing ones are updated in place,
        new ones are created in their week folder. Rate-limited requests are
        retried with backoff, so a full sync can take a few minutes.

        Args:
            training_maxes: Lift -> training max in lb (unless use_memory)
            lift_order: Main lift for days 1-4 (optional)
            bbb_percentage: BBB percentage (default 50)
            bbb_pairing: Main lift -> BBB lift (optional)
            accessories: Main lift -> accessory (optional)
            use_memory: Use the remembered configuration instead of arguments

        Returns:
            JSON with created and updated counts
        """
        try:
            config = _resolve_config(
                training_maxes, lift_order, bbb_percentage, bbb_pairing, accessories, use_memory,
            )
            client = get_client(ctx)
            result = sync_program(
                client, generate_program(config), build_alias_table(get_alias_file()),
            )
        except (ValueError, MemoryFileError, ResolutionError, SyncError, HevyError) as e:
            logger.error(f"Hevy sync failed: {e}")
            return _error(str(e))

        return json.dumps({"success": True, **result.to_dict()}, indent=2)

    @app.tool()
    async def list_hevy_routines(ctx: Context) -> str:
        """
        List routines in the Hevy account.

        Returns:
            JSON list of {id, title, folder_id}
        """
        try:
            client = get_client(ctx)
            routines = sdk_routines.get_routines(client)
        except (ValueError, HevyError) as e:
            return _error(str(e))
        return json.dumps([
            {"id": r.get("id"), "title": r.get("title"), "folder_id": r.get("folder_id")}
            for r in routines
        ], indent=2)

    @app.tool()
    async def list_hevy_folders(ctx: Context) -> str:
        """
        List routine folders in the Hevy account.

        Returns:
            JSON list of {id, title}
        """
        try:
            client = get_client(ctx)
            folders = sdk_folders.get_folders(client)
        except (ValueError, HevyError) as e:
            return _error(str(e))
        return json.dumps([{"id": f.get("id"), "title": f.get("title")} for f in folders], indent=2)

    return app
