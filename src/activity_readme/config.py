"""
Configuration models for the recent activity workflow.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .models import EventCategory
from .timestamp import parse_timezone_offset

EVENT_GROUPS = ("comments", "issues", "pr")
DISABLEABLE_EVENTS = EVENT_GROUPS + tuple(category.value for category in EventCategory)

BOT_EMAIL = "41898282+github-actions[bot]@users.noreply.github.com"


class TemplatesConfig(BaseModel):
    """Templates per event category. Placeholders: `{ID}`, `{REPO}`, `{URL}`."""

    comment: str = Field(default="🗣 Commented on {ID} in {REPO}", description="Issue or PR comment created")
    issue_opened: str = Field(default="❗️ Opened issue {ID} in {REPO}", description="Issue opened")
    issue_closed: str = Field(default="✔️ Closed issue {ID} in {REPO}", description="Issue closed")
    pr_opened: str = Field(default="💪 Opened PR {ID} in {REPO}", description="Pull request opened")
    pr_closed: str = Field(default="❌ Closed PR {ID} in {REPO}", description="Pull request closed without merge")
    pr_merged: str = Field(default="🎉 Merged PR {ID} in {REPO}", description="Pull request merged")
    url_text: str = Field(default="{REPO}{ID}", description="Link text of the `{URL}` placeholder")


class DocumentConfig(BaseModel):
    """Target document configuration."""

    path: str = Field(default="./README.md", description="Document holding the activity markers")


class CommitConfig(BaseModel):
    """Commit configuration."""

    message: str = Field(default="⚡ Update README with the recent activity", description="Commit message")
    user_name: str = Field(default="readme-bot", description="Committer name")
    user_email: str = Field(default=BOT_EMAIL, description="Committer email")
    push: bool = Field(default=True, description="Push after committing")


class TimestampConfig(BaseModel):
    """Last-update timestamp configuration."""

    timezone_offset: str = Field(default="+00:00", description="Offset in ±HH:MM format")
    date_format: str = Field(default="DD/MM/YYYY HH:mm:ss", description="Format with DD MM YYYY YY HH hh mm ss AA aa")

    @field_validator("timezone_offset")
    @classmethod
    def validate_timezone_offset(cls, v):
        """Validate offset format."""
        parse_timezone_offset(v)
        return v.strip()


class GitHubConfig(BaseModel):
    """GitHub API configuration."""

    token: Optional[str] = Field(default=None, description="GitHub token, falls back to GITHUB_TOKEN")
    api_url: str = Field(default="https://api.github.com", description="Base URL for GitHub API")
    per_page: int = Field(default=100, description="Events requested from the feed")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    file: Optional[str] = Field(default=None, description="Optional log file path")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log format string"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v):
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"level must be one of: {', '.join(valid_levels)}")
        return v.upper()


# Action input name -> (section, field). `None` section means a top level field.
ACTION_INPUTS = {
    "GH_USERNAME": (None, "username"),
    "MAX_LINES": (None, "max_lines"),
    "DISABLE_EVENTS": (None, "disabled_events"),
    "COMMENTS_ACTIVITY": ("templates", "comment"),
    "ISSUE_OPENED": ("templates", "issue_opened"),
    "ISSUE_CLOSED": ("templates", "issue_closed"),
    "PR_OPENED": ("templates", "pr_opened"),
    "PR_CLOSED": ("templates", "pr_closed"),
    "PR_MERGED": ("templates", "pr_merged"),
    "URL_TEXT": ("templates", "url_text"),
    "README_FILE": ("document", "path"),
    "COMMIT_MSG": ("commit", "message"),
    "TIMEZONE_OFFSET": ("timestamp", "timezone_offset"),
    "DATE_STRING": ("timestamp", "date_format"),
}


def get_action_input(environ: Mapping[str, str], name: str) -> str:
    """Read an action input the way the runner exposes it, as `INPUT_<NAME>`."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return environ.get(key, "").strip()


class ActivityConfig(BaseModel):
    """Main configuration model."""

    username: str = Field(..., description="GitHub user whose public activity is shown")
    max_lines: int = Field(default=5, description="Maximum number of activity lines")
    disabled_events: List[str] = Field(default=[], description="Event groups or categories to leave out")
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    document: DocumentConfig = Field(default_factory=DocumentConfig)
    commit: CommitConfig = Field(default_factory=CommitConfig)
    timestamp: TimestampConfig = Field(default_factory=TimestampConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        """Ensure username is not empty."""
        if not v or not v.strip():
            raise ValueError("username cannot be empty")
        return v.strip()

    @field_validator("max_lines")
    @classmethod
    def validate_max_lines(cls, v):
        """Validate line count."""
        if v < 1:
            raise ValueError("max_lines must be at least 1")
        return v

    @field_validator("disabled_events", mode="before")
    @classmethod
    def validate_disabled_events(cls, v):
        """Normalize disabled events, accepting a comma separated string."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")

        names = [str(name).strip().lower() for name in v]
        names = [name for name in names if name]
        unknown = [name for name in names if name not in DISABLEABLE_EVENTS]
        if unknown:
            raise ValueError(
                f"Unknown disabled events: {', '.join(unknown)}. Valid: {', '.join(DISABLEABLE_EVENTS)}"
            )
        return names

    @classmethod
    def from_file(cls, config_path: str) -> "ActivityConfig":
        """Load configuration from YAML file."""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

    @classmethod
    def from_action_inputs(cls, environ: Optional[Mapping[str, str]] = None) -> "ActivityConfig":
        """Load configuration from GitHub Actions inputs. Empty inputs keep their defaults."""
        if environ is None:
            environ = os.environ

        config_data: Dict[str, Any] = {}
        for name, (section, field) in ACTION_INPUTS.items():
            value = get_action_input(environ, name)
            if not value:
                continue
            if section is None:
                config_data[field] = value
            else:
                config_data.setdefault(section, {})[field] = value

        return cls(**config_data)

    def to_file(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False, indent=2, allow_unicode=True)

    def get_github_token(self) -> Optional[str]:
        """Token from configuration or the GITHUB_TOKEN environment variable."""
        return self.github.token or os.getenv("GITHUB_TOKEN") or None
