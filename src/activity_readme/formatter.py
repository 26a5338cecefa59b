"""
Formatting of GitHub events into markdown lines.
"""

import logging
from typing import Iterable, List, Optional, Set

from .config import TemplatesConfig
from .models import ActivityEvent, EventCategory

logger = logging.getLogger(__name__)


class ActivityFormatter:
    """Turn events into display lines using per-category templates."""

    def __init__(self, templates: Optional[TemplatesConfig] = None, disabled_events: Iterable[str] = ()):
        """Initialize formatter."""
        self.templates = templates or TemplatesConfig()
        self.disabled_events: Set[str] = {name.strip().lower() for name in disabled_events}

    def is_disabled(self, event: ActivityEvent) -> bool:
        """Check if the event's group is disabled."""
        return event.group in self.disabled_events

    def is_category_disabled(self, category: EventCategory) -> bool:
        return category.value in self.disabled_events

    def template_for(self, category: EventCategory) -> str:
        return getattr(self.templates, category.value)

    def format_event(self, event: ActivityEvent) -> str:
        """
        Format a single event.

        Returns an empty string when the event should be skipped, either because its
        category is disabled or because its action is not rendered.
        """
        if self.is_disabled(event):
            return ""

        category = event.category
        if category is None or self.is_category_disabled(category):
            return ""

        return self.render(self.template_for(category), event)

    def render(self, template: str, event: ActivityEvent) -> str:
        """Substitute `{ID}`, `{REPO}` and `{URL}` in the template."""
        id_link = f"[#{event.number}]({event.target_url})"
        repo_link = f"[{event.repo_name}]({event.repo_url})"

        url_text = self.templates.url_text.replace("{ID}", f"#{event.number}").replace("{REPO}", event.repo_name)
        custom_link = f"[{url_text}]({event.target_url})"

        return template.replace("{ID}", id_link).replace("{REPO}", repo_link).replace("{URL}", custom_link)

    def select_lines(self, events: Iterable[ActivityEvent], max_lines: int) -> List[str]:
        """
        Format events in order and return the first `max_lines` non-empty lines.

        Stops formatting as soon as enough lines are collected.
        """
        lines: List[str] = []
        if max_lines < 1:
            return lines

        for event in events:
            line = self.format_event(event)
            if not line:
                logger.debug(f"Skipping {event.type} ({event.action or 'no action'}) in {event.repo_name}")
                continue

            lines.append(line)
            if len(lines) == max_lines:
                break

        if len(lines) < max_lines:
            logger.info(f"Found less than {max_lines} activities")

        return lines
