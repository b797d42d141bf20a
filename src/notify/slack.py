"""Slack webhook notifications for teams that left an event roster."""

import httpx
import logging
from typing import Sequence

from src.api.schemas import Team

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a composed message could not be delivered."""


def compose_message(event_name: str, missing: Sequence[Team]) -> str:
    """Build the Slack text for an event's missing teams."""
    if not missing:
        return f"No teams are missing for event {event_name}."

    message = f"*Missing teams for* `{event_name}`:\n\n"
    for team in missing:
        message += f"`{team.number}` - `{team.organization or ''}`\n"
    return message


class SlackNotifier:
    """Posts messages to a Slack incoming webhook."""

    def __init__(self, client: httpx.AsyncClient, webhook_url: str):
        self.client = client
        self.webhook_url = webhook_url

    async def send(self, message: str):
        try:
            response = await self.client.post(self.webhook_url, json={"text": message})
        except httpx.HTTPError as e:
            raise NotificationError(f"Failed to send Slack message: {e}") from e

        if response.status_code != 200:
            raise NotificationError(
                f"Failed to send Slack message, status code: {response.status_code}"
            )
        logger.info("Slack message sent (%d chars)", len(message))
