"""Abstract base for roster sources.

A source knows how to fetch the current team roster of an event and the
event's display name. The RobotEvents strategy is the only production
implementation; tests plug in fakes through the same interface.
"""

from abc import ABC, abstractmethod
from src.api.schemas import RosterSnapshot


class RosterFetchError(Exception):
    """Raised when a roster or event name cannot be fetched or parsed."""


class BaseRosterSource(ABC):
    """Abstract base class for event roster sources."""

    @abstractmethod
    async def fetch_roster(self, event_id: str) -> RosterSnapshot:
        """Fetch the current team roster for an event.

        Raises RosterFetchError on transport failures, non-success
        responses, or payloads that do not match the roster shape.
        """
        ...

    @abstractmethod
    async def fetch_event_name(self, event_id: str) -> str:
        """Fetch the human-readable name of an event."""
        ...
