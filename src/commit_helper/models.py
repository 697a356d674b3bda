"""Data models for the commit helper tools."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .errors import ErrorCategory

DEFAULT_LOG_LIMIT = 10
MIN_LOG_LIMIT = 1
MAX_LOG_LIMIT = 50


class Operation(str, Enum):
    """Tools exposed by the server."""

    status = "git_status"
    diff_staged = "git_diff_staged"
    diff_all = "git_diff_all"
    log = "git_log"


class GitStatusInput(BaseModel):
    """Validated input for git_status."""

    repo_path: Optional[str] = Field(
        default=None,
        description="Path to the git repository (optional, defaults to current directory)",
    )


class GitDiffStagedInput(GitStatusInput):
    """Validated input for git_diff_staged."""


class GitDiffAllInput(GitStatusInput):
    """Validated input for git_diff_all."""

    include_untracked: bool = Field(default=False, description="Include untracked files in the output")

    @field_validator("include_untracked", mode="before")
    @classmethod
    def _default_untracked(cls, value: Optional[bool]) -> bool:
        return False if value is None else value


class GitLogInput(GitStatusInput):
    """Validated input for git_log."""

    limit: int = Field(
        default=DEFAULT_LOG_LIMIT,
        description="Maximum number of commits to show (default: 10, max: 50)",
    )

    @field_validator("limit", mode="before")
    @classmethod
    def _default_limit(cls, value: Optional[int]) -> int:
        return DEFAULT_LOG_LIMIT if value is None else value

    @field_validator("limit")
    @classmethod
    def _clamp_limit(cls, value: int) -> int:
        """Clamp into [MIN_LOG_LIMIT, MAX_LOG_LIMIT]."""
        return max(MIN_LOG_LIMIT, min(MAX_LOG_LIMIT, value))


class GitResult(BaseModel):
    """Outcome of a tool call, flattened to text."""

    ok: bool
    text: str
    category: Optional[ErrorCategory] = None

    @classmethod
    def success(cls, text: str) -> "GitResult":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, category: ErrorCategory, text: str) -> "GitResult":
        return cls(ok=False, text=text, category=category)
