#!/usr/bin/env python3
"""
todoist-blocks - Todoist queries as Logseq blocks

Main entry point. Runs one retrieval command against an in-memory note host
and prints the resulting outline, the way it would be inserted into a graph.
"""

import asyncio
import logging
import sys
import argparse
from pathlib import Path

from todoist_blocks import config as config_module
from todoist_blocks.client import TodoistClient
from todoist_blocks.commands import retrieve_custom_query, retrieve_default_tasks, retrieve_today_tasks
from todoist_blocks.config import ConfigManager
from todoist_blocks.exceptions import AuthenticationError
from todoist_blocks.hosts import MemoryHost


def setup_logging(settings: ConfigManager):
    """Configure logging for the application."""
    logging_config = settings.get_section("logging")
    level = getattr(logging, str(logging_config.get("level", "INFO")).upper(), logging.INFO)
    format_str = logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handlers = [logging.StreamHandler(sys.stdout)]

    log_file = settings.log_filename
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=handlers
    )


async def run_command(args, settings: ConfigManager) -> MemoryHost:
    """
    Run the selected retrieval command.

    Args:
        args: Parsed command line arguments
        settings: Loaded configuration

    Returns:
        The host holding the inserted outline and shown messages
    """
    host = MemoryHost(preferred_date_format=settings.preferred_date_format)

    query_text = args.query
    if args.query_file:
        query_text = Path(args.query_file).read_text(encoding="utf-8")

    async with TodoistClient(api_token=settings.api_token, base_url=settings.base_url,
                             timeout=settings.timeout) as client:
        if query_text is not None or args.mode == "custom":
            anchor = host.add_block(query_text or "")
            await retrieve_custom_query(host, anchor, query_text or "", client=client, settings=settings)
        elif args.mode == "today":
            anchor = host.add_block("")
            await retrieve_today_tasks(host, anchor, client=client, settings=settings)
        else:
            anchor = host.add_block("")
            await retrieve_default_tasks(host, anchor, client=client, settings=settings)

    return host


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="todoist-blocks - Todoist queries as Logseq blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                   # Tasks of the configured default project
  python main.py --mode today                      # Tasks due today
  python main.py --query "overdue"                 # Bare Todoist filter
  python main.py --query-file query.yaml           # Structured query (YAML or JSON)
        """
    )

    parser.add_argument(
        "--mode",
        choices=["default", "today", "custom"],
        default="default",
        help="Retrieval mode (default: default)"
    )

    parser.add_argument(
        "--query",
        type=str,
        help="Query text: a Todoist filter or a YAML/JSON query (implies --mode custom)"
    )

    parser.add_argument(
        "--query-file",
        type=str,
        help="Read the query text from a file (implies --mode custom)"
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to the configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="todoist-blocks 0.1.0"
    )

    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_arguments()
    settings = ConfigManager(args.config)
    config_module.config = settings
    setup_logging(settings)

    logging.info("todoist-blocks - Todoist queries as Logseq blocks")

    try:
        host = asyncio.run(run_command(args, settings))

    except AuthenticationError as e:
        logging.error(f"Authentication failed: {e}")
        print(f"\nAuthentication failed: {e}")
        sys.exit(1)

    except KeyboardInterrupt:
        logging.info("Retrieval interrupted by user")
        print("\nRetrieval interrupted.")
        return

    for message, level in host.messages:
        print(f"[{level}] {message}")

    print()
    print(host.render_outline())


if __name__ == "__main__":
    main()
