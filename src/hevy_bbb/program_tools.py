"""
Program tools for the Hevy BBB MCP server.

Generate a 5/3/1 BBB cycle, export it as CSV, and remember the
configuration between cycles.
"""

import json
import logging

from hevy_bbb.api.export import program_to_csv, write_csv
from hevy_bbb.api.memory import (
    MemoryFileError,
    load_snapshot,
    next_cycle_config,
    save_snapshot,
)
from hevy_bbb.api.program import ACCESSORY_PRESETS, generate_program
from hevy_bbb.utils import build_config, get_memory_file, summarize_program

logger = logging.getLogger(__name__)


def register_tools(app):
    """Register program generation, export, and memory tools with the MCP app."""

    @app.tool()
    async def generate_bbb_program(
        training_maxes: dict[str, float],
        lift_order: list[str] = None,
        bbb_percentage: float = 50.0,
        bbb_pairing: dict[str, str] = None,
        accessories: dict[str, str] = None,
        one_rep_maxes: bool = False,
    ) -> str:
        """
        Generate a 4-week 5/3/1 Boring But Big program.

        Args:
            training_maxes: Lift -> weight in lb, for "Squat", "Bench Press",
                "Deadlift", "Overhead Press"
            lift_order: Main lift for days 1-4 (default: Squat, Bench Press,
                Deadlift, Overhead Press)
            bbb_percentage: BBB 5x10 percentage of training max (default 50)
            bbb_pairing: Main lift -> lift used for its BBB sets (default: same lift)
            accessories: Main lift -> accessory done 5x10 that day (optional)
            one_rep_maxes: Treat the given numbers as true 1RMs and derive
                training maxes at 90%

        Returns:
            JSON with the training maxes used and all 16 training days
        """
        try:
            config = build_config(
                training_maxes, lift_order, bbb_percentage, bbb_pairing, accessories, one_rep_maxes,
            )
        except ValueError as e:
            return json.dumps({"error": str(e)}, indent=2)

        program = generate_program(config)
        return json.dumps({
            "training_maxes": config.training_maxes,
            "days": summarize_program(program),
        }, indent=2)

    @app.tool()
    async def export_program_csv(
        training_maxes: dict[str, float],
        lift_order: list[str] = None,
        bbb_percentage: float = 50.0,
        bbb_pairing: dict[str, str] = None,
        accessories: dict[str, str] = None,
        one_rep_maxes: bool = False,
        output_path: str = None,
    ) -> str:
        """
        Generate the program and export it as CSV.

        Columns: Week, Day, Exercise, Sets, Reps, Weight, Percentage.

        Args:
            training_maxes: Lift -> weight in lb
            lift_order: Main lift for days 1-4 (optional)
            bbb_percentage: BBB percentage (default 50)
            bbb_pairing: Main lift -> BBB lift (optional)
            accessories: Main lift -> accessory (optional)
            one_rep_maxes: Treat the numbers as true 1RMs
            output_path: Write the CSV here; when omitted the CSV text is returned

        Returns:
            JSON with the written path or the CSV content
        """
        try:
            config = build_config(
                training_maxes, lift_order, bbb_percentage, bbb_pairing, accessories, one_rep_maxes,
            )
        except ValueError as e:
            return json.dumps({"error": str(e)}, indent=2)

        program = generate_program(config)
        if output_path:
            path = write_csv(program, output_path)
            logger.info(f"Program exported to {path}")
            return json.dumps({"success": True, "path": str(path)}, indent=2)
        return json.dumps({"csv": program_to_csv(program)}, indent=2)

    @app.tool()
    async def save_program_memory(
        training_maxes: dict[str, float],
        lift_order: list[str] = None,
        bbb_percentage: float = 50.0,
        bbb_pairing: dict[str, str] = None,
        accessories: dict[str, str] = None,
    ) -> str:
        """
        Remember a program configuration for the next cycle.

        Args:
            training_maxes: Lift -> training max in lb
            lift_order: Main lift for days 1-4 (optional)
            bbb_percentage: BBB percentage (default 50)
            bbb_pairing: Main lift -> BBB lift (optional)
            accessories: Main lift -> accessory (optional)

        Returns:
            JSON with the memory file path and save time
        """
        try:
            config = build_config(training_maxes, lift_order, bbb_percentage, bbb_pairing, accessories)
        except ValueError as e:
            return json.dumps({"error": str(e)}, indent=2)

        path = get_memory_file()
        snapshot = save_snapshot(config, path)
        return json.dumps({
            "success": True,
            "path": path,
            "saved_at": snapshot.saved_at.isoformat(),
        }, indent=2)

    @app.tool()
    async def load_program_memory() -> str:
        """
        Show the remembered program configuration, if any.

        Returns:
            JSON with saved_at and config, or a message when nothing is saved
        """
        try:
            snapshot = load_snapshot(get_memory_file())
        except MemoryFileError as e:
            return json.dumps({"error": str(e)}, indent=2)
        if snapshot is None:
            return json.dumps({"message": "No saved configuration"}, indent=2)
        return json.dumps(snapshot.to_dict(), indent=2)

    @app.tool()
    async def next_cycle_program(save: bool = False) -> str:
        """
        Start the next cycle from the remembered configuration.

        Applies the standard increases (+10 lb squat/deadlift, +5 lb bench/press)
        and generates the new program.

        Args:
            save: Also remember the increased configuration

        Returns:
            JSON with the new training maxes and all 16 training days
        """
        try:
            snapshot = load_snapshot(get_memory_file())
        except MemoryFileError as e:
            return json.dumps({"error": str(e)}, indent=2)
        if snapshot is None:
            return json.dumps({"error": "No saved configuration. Call save_program_memory() first."}, indent=2)

        config = next_cycle_config(snapshot.config)
        try:
            program = generate_program(config)
        except ValueError as e:
            return json.dumps({"error": f"Saved configuration is invalid: {e}"}, indent=2)
        if save:
            save_snapshot(config, get_memory_file())
        return json.dumps({
            "training_maxes": config.training_maxes,
            "saved": save,
            "days": summarize_program(program),
        }, indent=2)

    @app.tool()
    async def get_accessory_presets() -> str:
        """
        List the suggested accessory exercises for each main lift.

        Returns:
            JSON mapping main lift -> accessory names
        """
        return json.dumps({lift: list(names) for lift, names in ACCESSORY_PRESETS.items()}, indent=2)

    return app
