"""CLI entry point for aeon_dashboard.

Usage:
    python -m aeon_dashboard serve               # Run the HTTP API
    python -m aeon_dashboard bootstrap           # Create missing tables
    python -m aeon_dashboard discover            # List guilds found in the database
    python -m aeon_dashboard serve --verbose     # Show more details
    python -m aeon_dashboard serve --debug       # Show SQL and access logs
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from rich.table import Table

from aeon_dashboard.config.settings import AppSettings, load_config
from aeon_dashboard.core import DashboardService
from aeon_dashboard.db.bootstrap import bootstrap_schema
from aeon_dashboard.db.repositories import discover_guilds
from aeon_dashboard.utils.logging import console, setup_logging

logger = logging.getLogger("aeon_dashboard")


def serve(settings: AppSettings) -> None:
    import uvicorn

    from aeon_dashboard.api import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


async def run_bootstrap(settings: AppSettings) -> None:
    service = DashboardService(settings)
    try:
        await bootstrap_schema(service.engine)
    finally:
        await service.close()


async def run_discover(settings: AppSettings) -> None:
    service = DashboardService(settings)
    try:
        async with service.session() as session:
            guilds = await discover_guilds(session)
    finally:
        await service.close()

    if not guilds:
        console.print("[yellow]No guild ids found in any table[/yellow]")
        return

    table = Table(title="Guilds")
    table.add_column("Guild ID", style="cyan")
    table.add_column("First seen in")
    table.add_column("Rows", justify="right")
    for guild in guilds:
        table.add_row(guild["guild_id"], guild["source"], f"{guild['count']:,}")
    console.print(table)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Aeon dashboard backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m aeon_dashboard serve
      Serve /api/neon-query and /api/health on HOST:PORT

  python -m aeon_dashboard bootstrap --config /path/to/config.json
      Create missing tables using a custom config file

  python -m aeon_dashboard discover
      Print every guild id present in the database, most rows first
        """,
    )
    parser.add_argument(
        "command",
        choices=("serve", "bootstrap", "discover"),
        help="What to run",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config.json",
        help="Path to config.json (default: config.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with SQL and access logs",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Optional file to write logs to",
    )

    args = parser.parse_args()

    setup_logging(
        level=logging.DEBUG if (args.debug or args.verbose) else logging.INFO,
        log_file=args.log_file,
        debug_third_party=args.debug,
    )

    settings = load_config(args.config)

    try:
        if args.command == "serve":
            serve(settings)
        elif args.command == "bootstrap":
            asyncio.run(run_bootstrap(settings))
        else:
            asyncio.run(run_discover(settings))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise


if __name__ == "__main__":
    main()
