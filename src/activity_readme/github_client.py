"""
GitHub API client for public activity.
"""

import logging
from typing import List, Optional

from github import Auth, Github, GithubException

from .models import ActivityEvent

logger = logging.getLogger(__name__)


class GitHubClient:
    """Fetch a user's public events."""

    def __init__(self, token: Optional[str] = None, api_url: str = "https://api.github.com", per_page: int = 100):
        """Initialize GitHub client. Without a token the API is used anonymously."""
        auth = Auth.Token(token) if token else None
        self.github = Github(auth=auth, base_url=api_url, per_page=per_page)

    def get_public_events(self, username: str) -> List[ActivityEvent]:
        """
        Get the first page of the user's public events, newest first.

        Events that can never be rendered are dropped here; the order of the rest is kept.
        """
        logger.debug(f"Getting activity for {username}")
        try:
            user = self.github.get_user(username)
            raw_events = user.get_public_events().get_page(0)
        except GithubException as e:
            logger.error(f"Failed to get events for {username}: {e}")
            raise

        events = []
        for raw_event in raw_events:
            try:
                event = ActivityEvent.from_payload(raw_event.raw_data)
            except ValueError as e:
                logger.warning(f"Failed to convert event {raw_event.id}: {e}")
                continue
            if event is not None:
                events.append(event)

        logger.debug(f"{len(raw_events)} events found for {username}, {len(events)} of them renderable")
        return events

    def close(self):
        """Close GitHub client connection."""
        if hasattr(self.github, "close"):
            self.github.close()
