"""Main entry point for the listing monitor."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import AppConfig, enabled_source_names, load_config, load_db_path
from .db import NoveltyStore
from .engine import ReconciliationEngine
from .errors import ChannelError, StoreAccessError
from .models import SourceDefinition
from .notifier import notify
from .openai_client import create_llm_client
from .sources import select_sources

# Configure logging
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def print_history(store: NoveltyStore, limit: int, source_name: Optional[str] = None) -> None:
    """Print the most recently detected records."""
    entries = store.history(source_name=source_name, limit=limit)
    total = store.count(source_name)
    print(f"{total} record(s) seen; showing the latest {len(entries)}")
    for entry in entries:
        deadline = entry.deadline or "-"
        print(f"{entry.first_seen_at}  [{entry.source_name}]  {entry.title}  ({deadline})")


def run_pass(
    config: AppConfig,
    store: NoveltyStore,
    sources: List[SourceDefinition],
    send: bool = True,
) -> int:
    """
    Run one monitoring pass and notify about new records.

    Returns:
        Number of new records found.
    """
    engine = ReconciliationEngine(
        store=store,
        llm_client=create_llm_client(config.agent),
        agent_config=config.agent,
    )
    report = engine.run(sources)

    if report.total_new == 0:
        logger.info("No changes detected.")
        return 0

    if not send:
        logger.info(f"Seed mode: {report.total_new} new record(s) marked as seen without notification.")
        return report.total_new

    try:
        notify(report.new_records, sources, config)
    except ChannelError as e:
        # Records stay marked as seen; a resend would duplicate them
        logger.error(f"Notification failed: {e}", exc_info=True)
    return report.total_new


def show_history(args) -> int:
    """Handle ``--history``; needs only the database location."""
    source_name = None
    if args.source:
        try:
            selected = select_sources(args.source)
        except ValueError as e:
            logger.error(str(e))
            return 1
        if len(selected) == 1:
            source_name = selected[0].name

    try:
        store = NoveltyStore.open(load_db_path())
    except StoreAccessError as e:
        logger.error(f"Fatal: {e}")
        return 1
    with store:
        print_history(store, args.history, source_name)
    return 0


def run_once(args=None) -> int:
    """
    Run the monitor once.

    Returns:
        Process exit status: 0 for a completed pass, 1 for configuration
        errors, an unusable store or any unexpected failure.
    """
    try:
        return _run_once(args)
    except Exception as e:
        logger.error(f"Fatal error in run_once: {e}", exc_info=True)
        return 1


def _run_once(args) -> int:
    if args is not None and args.history is not None:
        return show_history(args)

    try:
        logger.info("Loading configuration...")
        config = load_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args is not None and args.method:
        config.notification.method = args.method
    if args is not None and args.email:
        config.notification.to_email = args.email

    names = (args.source if args is not None and args.source else None) or enabled_source_names()
    try:
        sources = select_sources(names)
    except ValueError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Opening database at {config.db_path}...")
    try:
        store = NoveltyStore.open(config.db_path)
    except StoreAccessError as e:
        logger.error(f"Fatal: {e}")
        return 1

    with store:
        send = not (args is not None and args.seed)
        run_pass(config, store, sources, send=send)

    logger.info("Run completed successfully.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Monitor grant, tender and job listings and notify about new entries"
    )
    parser.add_argument(
        "--method",
        choices=["email", "sms"],
        default=None,
        help="Notification method (default: from NOTIFICATION_METHOD env var or 'email')"
    )
    parser.add_argument(
        "--email",
        type=str,
        default=None,
        help="Recipient address (overrides EMAIL_TO env var)"
    )
    parser.add_argument(
        "--source",
        action="append",
        default=None,
        metavar="NAME",
        help="Only check this source; repeat for several (default: MONITOR_SOURCES or all)"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Mark current listings as seen without sending a notification"
    )
    parser.add_argument(
        "--history",
        type=int,
        nargs="?",
        const=20,
        default=None,
        metavar="N",
        help="Print the N most recently detected records and exit (default N: 20)"
    )
    return parser


def main():
    """Main entry point with command-line argument parsing."""
    args = build_parser().parse_args()
    sys.exit(run_once(args))


if __name__ == "__main__":
    main()
