"""File-backed store for the last known roster of each event.

Each event gets one ``{event_id}_teams.json`` file holding the roster
response as indented JSON. Writes go through a temp file and ``os.replace``
so a reader never sees a half-written snapshot.
"""

import os
import uuid
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from src.api.schemas import RosterSnapshot

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a snapshot cannot be read, parsed, or written."""


class SnapshotStore:
    """Loads and saves per-event roster snapshots under one directory."""

    def __init__(self, directory="."):
        self.directory = Path(directory)

    def path_for(self, event_id: str) -> Path:
        if not event_id or Path(event_id).name != event_id or event_id in (".", ".."):
            raise SnapshotError(f"Invalid event id for snapshot file: {event_id!r}")
        return self.directory / f"{event_id}_teams.json"

    def load(self, event_id: str) -> Optional[RosterSnapshot]:
        """Return the saved snapshot, or None if this event was never saved."""
        path = self.path_for(event_id)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SnapshotError(f"Could not read {path}: {e}") from e

        try:
            return RosterSnapshot.model_validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as e:
            raise SnapshotError(f"Could not parse {path}: {e}") from e

    def save(self, event_id: str, snapshot: RosterSnapshot) -> Path:
        """Replace the saved snapshot for an event."""
        path = self.path_for(event_id)
        tmp = path.with_name(f"{path.name}.tmp.{uuid.uuid4().hex[:8]}")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            if tmp.exists():
                tmp.unlink()
            raise SnapshotError(f"Could not write {path}: {e}") from e

        logger.debug("Saved %d teams for event %s to %s", len(snapshot.data), event_id, path)
        return path
