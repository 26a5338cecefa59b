"""
Main orchestrator for the recent activity workflow.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from github import GithubException

from .committer import CommitError, GitCommitter
from .config import ActivityConfig
from .document import DocumentError, locate_activity_region, read_lines, write_lines
from .github_client import GitHubClient
from .models import ActivityEvent, Outcome, RunResult
from .reconciler import ActivityReconciler

logger = logging.getLogger(__name__)


class ActivityReadmeUpdater:
    """Run read -> fetch -> reconcile -> write -> commit once."""

    def __init__(
        self,
        config: ActivityConfig,
        github_client: Optional[GitHubClient] = None,
        committer: Optional[GitCommitter] = None,
    ):
        """Initialize the updater with configuration."""
        self.config = config
        self.github_client = github_client or GitHubClient(
            token=config.get_github_token(),
            api_url=config.github.api_url,
            per_page=config.github.per_page,
        )
        self.committer = committer or GitCommitter(config.commit)
        self.reconciler = ActivityReconciler.from_config(config)

    @classmethod
    def from_file(cls, config_path: str = "config/settings.yaml") -> "ActivityReadmeUpdater":
        return cls(ActivityConfig.from_file(config_path))

    def setup_logging(self):
        """Setup logging configuration."""
        level = getattr(logging, self.config.logging.level.upper())

        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if self.config.logging.file:
            handlers.append(logging.FileHandler(self.config.logging.file))

        logging.basicConfig(level=level, format=self.config.logging.format, handlers=handlers)

    @property
    def document_path(self) -> Path:
        return Path(self.config.document.path)

    def read_document(self) -> List[str]:
        """Read the document, failing early when it or its start marker is missing."""
        try:
            lines = read_lines(self.document_path)
        except FileNotFoundError:
            raise FileNotFoundError(f"Couldn't find the file named {self.config.document.path}")
        locate_activity_region(lines)
        return lines

    def fetch_events(self) -> List[ActivityEvent]:
        return self.github_client.get_public_events(self.config.username)

    def preview(self) -> List[str]:
        """Formatted lines for the current feed, without touching the document."""
        events = self.fetch_events()
        return self.reconciler.formatter.select_lines(events, self.config.max_lines)

    def run(self, dry_run: bool = False, commit: bool = True, now: Optional[datetime] = None) -> RunResult:
        """
        Run the full workflow and report its outcome.

        Failures are logged and reported as `Outcome.FAILED`, never raised. A failed
        commit leaves the locally written document in place.
        """
        path = self.document_path
        try:
            lines = self.read_document()
            events = self.fetch_events()
            result = self.reconciler.reconcile_lines(lines, events, now=now)
            if result.changed and not dry_run:
                write_lines(path, result.lines)
                logger.info(f"Wrote {len(result.content)} activity lines to {path}")
        except FileNotFoundError as e:
            logger.error(str(e))
            return RunResult(outcome=Outcome.FAILED, message=str(e))
        except DocumentError as e:
            logger.error(f"{e}. Exiting!")
            return RunResult(outcome=Outcome.FAILED, message=f"{e}. Exiting!")
        except GithubException as e:
            logger.error(f"Failed to fetch activity for {self.config.username}: {e}")
            return RunResult(outcome=Outcome.FAILED, message=f"Failed to fetch activity: {e}")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to update {path}: {e}")
            return RunResult(outcome=Outcome.FAILED, message=f"Failed to update {path}: {e}")
        finally:
            self.github_client.close()

        if not result.changed:
            logger.info(result.message)
            return RunResult(outcome=Outcome.NOOP, message=result.message, content=result.content)

        if dry_run:
            message = f"Dry run, {path} would be updated"
            logger.info(message)
            return RunResult(outcome=Outcome.WRITTEN, message=message, content=result.content)

        if not commit:
            return RunResult(outcome=Outcome.WRITTEN, message=f"Wrote to {path}", content=result.content)

        try:
            self.committer.commit_file(path)
        except (CommitError, OSError) as e:
            logger.debug("Something went wrong")
            logger.error(f"Failed to commit {path}: {e}")
            return RunResult(outcome=Outcome.FAILED, message=str(e), content=result.content)

        message = "Pushed to remote repository" if self.config.commit.push else f"Committed {path}"
        return RunResult(outcome=Outcome.WRITTEN, message=message, content=result.content)
