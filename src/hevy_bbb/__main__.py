"""
Entry point for running hevy_bbb as a module.

Usage:
    python -m hevy_bbb                          # MCP server, stdio transport
    python -m hevy_bbb serve --http --port 9000 # MCP server over HTTP
    python -m hevy_bbb export -o program.csv    # CSV from the saved config
    python -m hevy_bbb sync                     # Sync the saved config to Hevy
"""

import argparse
import logging
import os
import sys

from hevy_bbb import create_app
from hevy_bbb.api.exercises import build_alias_table
from hevy_bbb.api.export import write_csv
from hevy_bbb.api.memory import MemoryFileError, load_snapshot, next_cycle_config, save_snapshot
from hevy_bbb.api.program import ALL_LIFTS, generate_program
from hevy_bbb.api.routines import ResolutionError
from hevy_bbb.api.sync import SyncError, sync_program
from hevy_bbb.client_factory import create_client
from hevy_bbb.sdk.client import HevyError
from hevy_bbb.utils import get_alias_file, get_api_key, get_memory_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="5/3/1 BBB program generator with Hevy sync (MCP server and CLI)"
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the MCP server (default)")
    serve.add_argument(
        "--http",
        action="store_true",
        help="Use http transport instead of stdio"
    )
    serve.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )
    serve.add_argument(
        "--port",
        type=int,
        default=8081,
        help="Port for HTTP transport (default: 8081)"
    )

    for name, help_text in (
        ("export", "Export the saved configuration's program as CSV"),
        ("sync", "Sync the saved configuration's program to Hevy"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument(
            "--memory",
            default=None,
            help="Saved configuration file (default: HEVY_BBB_MEMORY_FILE or .531bbb_memory.json)"
        )
        cmd.add_argument(
            "--next-cycle",
            action="store_true",
            help="Apply next-cycle training max increases and save them"
        )

    sub.choices["export"].add_argument(
        "-o", "--output",
        default="531_bbb_program.csv",
        help="CSV output path (default: 531_bbb_program.csv)"
    )
    sub.choices["sync"].add_argument(
        "--api-key",
        default=None,
        help="Hevy API key (default: HEVY_API_KEY)"
    )
    return parser


def _load_config(args):
    """Saved config, its path, and whether next-cycle increases were applied.

    Increases are not written back here; callers save them once the run succeeds.
    """
    path = args.memory or get_memory_file()
    snapshot = load_snapshot(path)
    if snapshot is None:
        raise MemoryFileError(f"No saved configuration at {path}")

    print(f"Found saved configuration from {snapshot.saved_at:%a, %d %b %Y %H:%M:%S %Z}")
    config = snapshot.config
    if args.next_cycle:
        print("Applying standard 5/3/1 training max increases for next cycle...")
        config = next_cycle_config(config)
    print("Training maxes:")
    for lift in ALL_LIFTS:
        print(f"  {lift}: {config.training_maxes.get(lift, 0):.0f} lbs")
    return config, path, args.next_cycle


def _save_advanced(config, path, advanced):
    if advanced:
        save_snapshot(config, path)
        print(f"Saved next-cycle training maxes to {path}")


def run_export(args) -> int:
    try:
        config, memory_path, advanced = _load_config(args)
        program = generate_program(config)
    except (ValueError, MemoryFileError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    path = write_csv(program, args.output)
    print(f"\nProgram exported to {path}")
    _save_advanced(config, memory_path, advanced)
    return 0


def run_sync(args) -> int:
    api_key = args.api_key or get_api_key()
    if not api_key:
        print("Error: no Hevy API key (use --api-key or HEVY_API_KEY)", file=sys.stderr)
        return 1
    try:
        config, memory_path, advanced = _load_config(args)
        program = generate_program(config)
        print("\nSyncing program to Hevy...")
        result = sync_program(
            create_client(api_key), program, build_alias_table(get_alias_file()),
        )
    except (ValueError, MemoryFileError, ResolutionError, SyncError, HevyError) as e:
        print(f"Error uploading to Hevy: {e}", file=sys.stderr)
        return 1
    print(f"\nSync complete! Created: {result.created}, Updated: {result.updated}")
    _save_advanced(config, memory_path, advanced)
    return 0


def run_server(args) -> None:
    http = getattr(args, "http", False)
    host = getattr(args, "host", "0.0.0.0")
    port = getattr(args, "port", 8081)

    # Set environment variables for the app
    if http:
        os.environ["MCP_TRANSPORT"] = "http"
        os.environ["MCP_HOST"] = host
        os.environ["MCP_PORT"] = str(port)
    else:
        os.environ["MCP_TRANSPORT"] = "stdio"

    app = create_app()

    if http:
        print(f"Starting Hevy BBB MCP server on http://{host}:{port}/mcp")
        app.run(transport="http", host=host, port=port)
    else:
        app.run()


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    if args.command == "export":
        sys.exit(run_export(args))
    if args.command == "sync":
        sys.exit(run_sync(args))
    run_server(args)


if __name__ == "__main__":
    main()
