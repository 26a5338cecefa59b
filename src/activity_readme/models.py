"""
Data models for recent GitHub activity rendering.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

GITHUB_URL = "https://github.com"


class EventCategory(str, Enum):
    """Kinds of activity that can be rendered into the document."""

    COMMENT = "comment"
    ISSUE_OPENED = "issue_opened"
    ISSUE_CLOSED = "issue_closed"
    PR_OPENED = "pr_opened"
    PR_CLOSED = "pr_closed"
    PR_MERGED = "pr_merged"

    @property
    def group(self) -> str:
        """Name of the event group this category belongs to (`comments`, `issues` or `pr`)."""
        if self is EventCategory.COMMENT:
            return "comments"
        if self in (EventCategory.ISSUE_OPENED, EventCategory.ISSUE_CLOSED):
            return "issues"
        return "pr"


# Raw GitHub event type -> group name used by `disabled_events`
EVENT_TYPE_GROUPS = {
    "IssueCommentEvent": "comments",
    "IssuesEvent": "issues",
    "PullRequestEvent": "pr",
}


class ActivityEvent(BaseModel):
    """A public GitHub event reduced to the fields needed for rendering."""

    type: str = Field(..., description="Raw event type, e.g. 'IssuesEvent'")
    action: str = Field(default="", description="Payload action, e.g. 'opened'")
    repo_name: str = Field(..., description="Repository in format 'owner/name'")
    number: int = Field(..., description="Issue or pull request number")
    is_issue: bool = Field(..., description="True if the target is an issue, False for a pull request")
    merged: bool = Field(default=False, description="Merge flag of a pull request")

    @field_validator("repo_name")
    @classmethod
    def validate_repo_name(cls, v):
        """Validate repository format."""
        if "/" not in v:
            raise ValueError("Repository must be in format 'owner/name'")
        return v

    @classmethod
    def from_payload(cls, raw: Dict[str, Any]) -> Optional["ActivityEvent"]:
        """
        Build an event from a raw record of the public events API.

        Returns `None` for event types that are never rendered, or when the payload
        lacks an issue or pull request to point at.
        """
        event_type = raw.get("type", "")
        if event_type not in EVENT_TYPE_GROUPS:
            return None

        payload = raw.get("payload") or {}
        repo_name = (raw.get("repo") or {}).get("name", "")

        # Comments carry an `issue` even when they were made on a pull request
        if "issue" in payload:
            target = payload["issue"] or {}
            is_issue = True
        elif "pull_request" in payload:
            target = payload["pull_request"] or {}
            is_issue = False
        else:
            return None

        number = target.get("number", payload.get("number"))
        if number is None:
            return None

        return cls(
            type=event_type,
            action=payload.get("action") or "",
            repo_name=repo_name,
            number=number,
            is_issue=is_issue,
            merged=bool(target.get("merged", False)),
        )

    @property
    def group(self) -> str:
        return EVENT_TYPE_GROUPS[self.type]

    @property
    def category(self) -> Optional[EventCategory]:
        """
        Category of this event, or `None` if the action is not rendered.

        Pull requests are checked in the order opened, merged, closed-not-merged,
        so a merged pull request never reads as closed.
        """
        if self.type == "IssueCommentEvent":
            return EventCategory.COMMENT if self.action == "created" else None

        if self.type == "IssuesEvent":
            if self.action == "opened":
                return EventCategory.ISSUE_OPENED
            if self.action == "closed":
                return EventCategory.ISSUE_CLOSED
            return None

        if self.type == "PullRequestEvent":
            if self.action == "opened":
                return EventCategory.PR_OPENED
            if self.merged:
                return EventCategory.PR_MERGED
            if self.action == "closed":
                return EventCategory.PR_CLOSED
            return None

        return None

    @property
    def repo_url(self) -> str:
        return f"{GITHUB_URL}/{self.repo_name}"

    @property
    def target_url(self) -> str:
        """URL of the issue or pull request."""
        kind = "issues" if self.is_issue else "pull"
        return f"{self.repo_url}/{kind}/{self.number}"


class Outcome(str, Enum):
    """Outcome classes of a single run."""

    WRITTEN = "written"
    NOOP = "noop"
    FAILED = "failed"


class ReconcileResult(BaseModel):
    """Result of merging formatted activity into a document."""

    lines: List[str] = Field(..., description="Document lines after reconciliation")
    content: List[str] = Field(default=[], description="Formatted activity lines, without numbering")
    changed: bool = False
    message: str = ""


class RunResult(BaseModel):
    """Result of a full read-modify-write-commit run."""

    outcome: Outcome
    message: str
    content: List[str] = []

    @property
    def exit_code(self) -> int:
        return 1 if self.outcome == Outcome.FAILED else 0
