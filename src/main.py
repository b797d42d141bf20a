"""RosterWatch — alerts Slack when teams drop off RobotEvents event rosters.

Command-line entry point. Checks every configured event once, then exits.
Only a configuration error makes the process exit non-zero; per-event
failures are logged and recorded in the run history. ``--history`` prints
recent outcomes from the run history instead of running a check.
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from src.config import ConfigError, load_settings
from src.pipeline.roster_check import load_history, run_checks, summarize

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("rosterwatch")


def format_history_row(row: dict) -> str:
    line = f"{row['completed_at']}  {row['event_id']}  {row['status']}"
    if row["stage"]:
        line += f" at {row['stage']}: {row['error']}"
    if row["missing_count"]:
        line += f"  missing {row['missing_count']}: {', '.join(row['missing_numbers'])}"
        if row["notified"]:
            line += " (notified)"
    return line


def main(argv=None):
    parser = argparse.ArgumentParser(description="Alert Slack when teams leave RobotEvents rosters")
    parser.add_argument("--history", action="store_true",
                        help="Print recent check outcomes instead of running a check")
    parser.add_argument("--event", default=None, help="Limit --history to one event id")
    parser.add_argument("--limit", type=int, default=20, help="Number of --history rows")
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)

    if args.history:
        rows = asyncio.run(load_history(settings.db_path, event_id=args.event, limit=args.limit))
        if not rows:
            print("No roster checks recorded.")
        for row in rows:
            print(format_history_row(row))
        return

    logger.info("Starting roster check for events: %s", settings.event_ids)
    outcomes = asyncio.run(run_checks(settings))
    logger.info("Roster check complete: %s", summarize(outcomes))

    failed = [o.event_id for o in outcomes if o.status == "failed"]
    if failed:
        logger.warning("Events with errors: %s", failed)


if __name__ == "__main__":
    main()
