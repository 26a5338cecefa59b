"""
Reconciliation of recent activity into a document.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from .config import ActivityConfig, TimestampConfig
from .document import locate_activity_region, splice_activity, update_timestamp_region
from .formatter import ActivityFormatter
from .models import ActivityEvent, ReconcileResult
from .timestamp import format_timestamp, shifted_now

logger = logging.getLogger(__name__)


class ActivityReconciler:
    """Format a feed of events and merge it into the marked regions of a document."""

    def __init__(
        self,
        formatter: ActivityFormatter,
        max_lines: int = 5,
        timestamp: Optional[TimestampConfig] = None,
    ):
        """Initialize reconciler."""
        self.formatter = formatter
        self.max_lines = max_lines
        self.timestamp = timestamp or TimestampConfig()

    @classmethod
    def from_config(cls, config: ActivityConfig) -> "ActivityReconciler":
        formatter = ActivityFormatter(templates=config.templates, disabled_events=config.disabled_events)
        return cls(formatter, max_lines=config.max_lines, timestamp=config.timestamp)

    def render_timestamp(self, now: Optional[datetime] = None) -> str:
        moment = shifted_now(self.timestamp.timezone_offset, now)
        return format_timestamp(moment, self.timestamp.date_format)

    def reconcile_lines(
        self,
        lines: List[str],
        events: Iterable[ActivityEvent],
        now: Optional[datetime] = None,
    ) -> ReconcileResult:
        """
        Merge the formatted events into a copy of `lines`.

        The timestamp region is only refreshed when the activity region changed.
        Raises `DocumentError` when the activity markers are unusable.
        """
        locate_activity_region(lines)

        new_lines = list(lines)
        content = self.formatter.select_lines(events, self.max_lines)

        if not content:
            return ReconcileResult(
                lines=list(lines),
                content=content,
                changed=False,
                message="No PullRequest/Issue/IssueComment events found. Leaving document unchanged.",
            )

        if not splice_activity(new_lines, content) or new_lines == lines:
            return ReconcileResult(lines=list(lines), content=content, changed=False, message="No changes detected.")

        if update_timestamp_region(new_lines, self.render_timestamp(now)):
            logger.debug("Updated the last update timestamp")

        return ReconcileResult(
            lines=new_lines,
            content=content,
            changed=True,
            message="Updated document with the recent activity",
        )
