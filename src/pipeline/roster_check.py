"""Roster check orchestration.

Runs the per-event pipeline (fetch → load previous → save current → diff →
resolve name → notify) for every configured event, one after another. A
failure ends processing of that event only; the run always moves on to the
next event and reports a tagged outcome for each.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

import aiosqlite
import httpx

from src.api.schemas import EventOutcome
from src.config import Settings
from src.db.database import get_db, init_db, record_check, recent_checks
from src.notify.slack import NotificationError, SlackNotifier, compose_message
from src.pipeline.change_detector import build_change_summary, find_missing_teams
from src.pipeline.validator import roster_issues
from src.scraper.base_strategy import BaseRosterSource, RosterFetchError
from src.scraper.robotevents_strategy import RobotEventsStrategy
from src.storage.snapshot_store import SnapshotError, SnapshotStore

logger = logging.getLogger(__name__)

STAGE_FETCH = "fetch"
STAGE_LOAD = "load_previous"
STAGE_PERSIST = "persist"
STAGE_RESOLVE_NAME = "resolve_name"
STAGE_NOTIFY = "notify"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _failed(event_id: str, stage: str, error: Exception, **counts) -> EventOutcome:
    logger.error("Event %s: %s failed: %s", event_id, stage, error)
    return EventOutcome(event_id=event_id, status="failed", stage=stage, error=str(error), **counts)


async def check_event(
    event_id: str,
    source: BaseRosterSource,
    store: SnapshotStore,
    notifier: SlackNotifier,
) -> EventOutcome:
    """Check one event's roster against its saved snapshot."""
    logger.info("Processing event ID: %s", event_id)

    try:
        current = await source.fetch_roster(event_id)
    except RosterFetchError as e:
        return _failed(event_id, STAGE_FETCH, e)

    for issue in roster_issues(current):
        logger.warning("Event %s roster issue: %s", event_id, issue)

    try:
        previous = store.load(event_id)
    except SnapshotError as e:
        return _failed(event_id, STAGE_LOAD, e, current_count=len(current.data))

    # The fresh roster is saved before it is compared, whatever the diff says.
    try:
        store.save(event_id, current)
    except SnapshotError as e:
        return _failed(event_id, STAGE_PERSIST, e, current_count=len(current.data))

    if previous is None:
        logger.info("No previous team data to compare for event %s", event_id)
        return EventOutcome(event_id=event_id, status="skipped", current_count=len(current.data))

    missing = find_missing_teams(previous.data, current.data)
    summary = build_change_summary(previous.data, current.data, missing)
    outcome = EventOutcome(
        event_id=event_id,
        status="completed",
        missing_numbers=[t.number for t in missing],
        **summary,
    )
    if not missing:
        logger.info("Event %s: no teams are missing", event_id)
        return outcome

    logger.info("Event %s: %d teams missing: %s",
                event_id, len(missing), outcome.missing_numbers)

    try:
        event_name = await source.fetch_event_name(event_id)
    except RosterFetchError as e:
        logger.error("Event %s: %d missing teams not reported, event name unavailable",
                     event_id, len(missing))
        return _failed(event_id, STAGE_RESOLVE_NAME, e, missing_numbers=outcome.missing_numbers, **summary)

    try:
        await notifier.send(compose_message(event_name, missing))
    except NotificationError as e:
        return _failed(event_id, STAGE_NOTIFY, e, missing_numbers=outcome.missing_numbers, **summary)

    return outcome.model_copy(update={"notified": True})


async def _open_history(db_path: Optional[str]) -> Optional[aiosqlite.Connection]:
    if not db_path:
        return None
    try:
        db = await get_db(db_path)
        await init_db(db)
        return db
    except (aiosqlite.Error, OSError) as e:
        logger.warning("Run history disabled, could not open %s: %s", db_path, e)
        return None


async def _record(db, outcome: EventOutcome, started_at: str):
    try:
        await record_check(db, outcome, started_at, _now())
    except aiosqlite.Error as e:
        logger.warning("Event %s: could not record run history: %s", outcome.event_id, e)


async def run_checks(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[EventOutcome]:
    """Check every configured event in order and return their outcomes."""
    outcomes = []
    store = SnapshotStore(settings.snapshot_dir)
    db = await _open_history(settings.db_path)

    try:
        async with httpx.AsyncClient(timeout=settings.request_timeout, transport=transport) as client:
            source = RobotEventsStrategy(client, settings.api_token, settings.base_url)
            notifier = SlackNotifier(client, settings.slack_webhook_url)

            for event_id in settings.event_ids:
                started_at = _now()
                outcome = await check_event(event_id, source, store, notifier)
                logger.info("Event %s: %s", event_id, outcome.status)
                outcomes.append(outcome)
                if db is not None:
                    await _record(db, outcome, started_at)
    finally:
        if db is not None:
            await db.close()

    return outcomes


def summarize(outcomes: List[EventOutcome]) -> dict:
    """Count outcomes by status for the end-of-run log line."""
    counts = {"completed": 0, "skipped": 0, "failed": 0, "notified": 0}
    for outcome in outcomes:
        counts[outcome.status] = counts.get(outcome.status, 0) + 1
        if outcome.notified:
            counts["notified"] += 1
    return counts


async def load_history(db_path: Optional[str], event_id: Optional[str] = None, limit: int = 20) -> List[dict]:
    """Read recent check outcomes back from the run history."""
    db = await _open_history(db_path)
    if db is None:
        return []
    try:
        return await recent_checks(db, event_id=event_id, limit=limit)
    finally:
        await db.close()
