"""
Recent GitHub Activity

Keeps a numbered list of a user's recent public GitHub activity (issues, pull
requests, comments) between marker comments of a README, and commits the change.
"""

__version__ = "1.0.0"

from .committer import CommitError, GitCommitter
from .config import ActivityConfig
from .document import DocumentError, MarkerNotFoundError
from .formatter import ActivityFormatter
from .github_client import GitHubClient
from .models import ActivityEvent, EventCategory, Outcome, ReconcileResult, RunResult
from .orchestrator import ActivityReadmeUpdater
from .reconciler import ActivityReconciler

__all__ = [
    "ActivityConfig",
    "ActivityEvent",
    "ActivityFormatter",
    "ActivityReadmeUpdater",
    "ActivityReconciler",
    "CommitError",
    "DocumentError",
    "EventCategory",
    "GitCommitter",
    "GitHubClient",
    "MarkerNotFoundError",
    "Outcome",
    "ReconcileResult",
    "RunResult",
]
