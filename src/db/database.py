"""SQLite run history for roster checks."""

import json
import aiosqlite
from typing import List, Optional

from src.api.schemas import EventOutcome


async def get_db(db_path: str) -> aiosqlite.Connection:
    db = await aiosqlite.connect(db_path)
    db.row_factory = aiosqlite.Row
    await db.execute("PRAGMA journal_mode=WAL")
    return db


async def init_db(db: aiosqlite.Connection):
    """Create tables if they don't exist."""
    await db.executescript("""
        CREATE TABLE IF NOT EXISTS roster_checks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            event_id TEXT NOT NULL,
            started_at TEXT NOT NULL,
            completed_at TEXT NOT NULL,
            status TEXT NOT NULL,
            stage TEXT,
            error TEXT,
            previous_count INTEGER,
            current_count INTEGER,
            missing_count INTEGER DEFAULT 0,
            missing_numbers TEXT DEFAULT '[]',
            notified INTEGER DEFAULT 0
        );

        CREATE INDEX IF NOT EXISTS idx_checks_event ON roster_checks(event_id);
    """)
    await db.commit()


async def record_check(
    db: aiosqlite.Connection,
    outcome: EventOutcome,
    started_at: str,
    completed_at: str,
) -> int:
    """Store one event outcome. Returns the new row id."""
    cursor = await db.execute(
        """INSERT INTO roster_checks (event_id, started_at, completed_at, status, stage, error,
                                      previous_count, current_count, missing_count,
                                      missing_numbers, notified)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            outcome.event_id, started_at, completed_at, outcome.status, outcome.stage,
            outcome.error, outcome.previous_count, outcome.current_count,
            outcome.missing_count, json.dumps(outcome.missing_numbers), int(outcome.notified),
        ),
    )
    await db.commit()
    return cursor.lastrowid


async def recent_checks(
    db: aiosqlite.Connection,
    event_id: Optional[str] = None,
    limit: int = 50,
) -> List[dict]:
    """List the most recent checks, optionally for a single event."""
    query = "SELECT * FROM roster_checks"
    params = []
    if event_id is not None:
        query += " WHERE event_id = ?"
        params.append(event_id)
    query += " ORDER BY id DESC LIMIT ?"
    params.append(limit)

    cursor = await db.execute(query, params)
    rows = await cursor.fetchall()

    checks = []
    for r in rows:
        row = dict(r)
        row["missing_numbers"] = json.loads(row["missing_numbers"]) if row["missing_numbers"] else []
        row["notified"] = bool(row["notified"])
        checks.append(row)
    return checks
