"""RobotEvents roster strategy.

Fetches event team rosters and event names from the RobotEvents v2 API
using a bearer token. One request per call: no retries, and only the first
page of a roster is requested.
"""

import httpx
import logging
from pydantic import ValidationError
from src.scraper.base_strategy import BaseRosterSource, RosterFetchError
from src.api.schemas import RosterSnapshot, EventDetails

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.robotevents.com/api/v2"
PAGE_SIZE = 250


class RobotEventsStrategy(BaseRosterSource):
    """Concrete source backed by the RobotEvents API."""

    def __init__(self, client: httpx.AsyncClient, token: str, base_url: str = DEFAULT_BASE_URL):
        self.client = client
        self.token = token
        self.base_url = base_url.rstrip("/")

    def get_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }

    async def _get_json(self, url: str, params: dict = None):
        try:
            response = await self.client.get(url, params=params, headers=self.get_headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RosterFetchError(
                f"RobotEvents returned status {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            raise RosterFetchError(f"Request to {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise RosterFetchError(f"Response from {url} is not valid JSON") from e

    async def fetch_roster(self, event_id: str) -> RosterSnapshot:
        url = f"{self.base_url}/events/{event_id}/teams"
        logger.info("Fetching roster for event %s", event_id)
        data = await self._get_json(url, params={"per_page": PAGE_SIZE, "page": 1})

        try:
            roster = RosterSnapshot.model_validate(data)
        except ValidationError as e:
            raise RosterFetchError(f"Malformed roster payload for event {event_id}: {e}") from e

        logger.info("Event %s: fetched %d teams (reported total %d)",
                    event_id, len(roster.data), roster.meta.total)
        return roster

    async def fetch_event_name(self, event_id: str) -> str:
        url = f"{self.base_url}/events/{event_id}"
        data = await self._get_json(url)

        try:
            return EventDetails.model_validate(data).name
        except ValidationError as e:
            raise RosterFetchError(f"Malformed event payload for event {event_id}: {e}") from e
