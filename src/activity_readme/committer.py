"""
Committing the updated document through git.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .config import CommitConfig

logger = logging.getLogger(__name__)

NOTHING_TO_COMMIT = "nothing to commit"


class CommitError(Exception):
    """A git command failed."""

    def __init__(self, command: List[str], returncode: int, output: str = ""):
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(f"'{' '.join(command)}' failed with status code {returncode}")


class GitCommitter:
    """Stage, commit and push a single file."""

    def __init__(self, config: Optional[CommitConfig] = None, cwd: Optional[Union[str, Path]] = None):
        self.config = config or CommitConfig()
        self.cwd = cwd

    def _run(self, args: List[str]) -> str:
        """Run a git command. A non-zero status only passes when git reports nothing to commit."""
        command = ["git"] + args
        logger.debug(f"Running: {' '.join(command)}")

        proc = subprocess.run(command, cwd=self.cwd, capture_output=True, text=True)
        output = proc.stdout or ""
        if proc.returncode != 0 and NOTHING_TO_COMMIT not in output:
            logger.error(f"{' '.join(command)} exited with {proc.returncode}: {proc.stderr or output}")
            raise CommitError(command, proc.returncode, proc.stderr or output)
        return output

    def configure_identity(self):
        self._run(["config", "--global", "user.email", self.config.user_email])
        self._run(["config", "--global", "user.name", self.config.user_name])

    def commit_file(self, path: Union[str, Path], message: Optional[str] = None):
        """Commit `path` and push it, unless pushing is disabled."""
        self.configure_identity()
        self._run(["add", str(path)])
        output = self._run(["commit", "-m", message or self.config.message])
        if NOTHING_TO_COMMIT in output:
            logger.info("Nothing to commit")

        if self.config.push:
            self._run(["push"])
            logger.info("Pushed to remote repository")
