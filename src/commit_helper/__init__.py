"""Git Commit Helper - read-only git context over the Model Context Protocol."""

__version__ = "1.0.0"

from .errors import ErrorCategory
from .git_commands import run_git
from .models import (
    GitDiffAllInput,
    GitDiffStagedInput,
    GitLogInput,
    GitResult,
    GitStatusInput,
    Operation,
)
from .server import git_diff_all, git_diff_staged, git_log, git_status, health, main

__all__ = [
    "__version__",
    "main",
    "run_git",
    "git_status",
    "git_diff_staged",
    "git_diff_all",
    "git_log",
    "health",
    "GitStatusInput",
    "GitDiffStagedInput",
    "GitDiffAllInput",
    "GitLogInput",
    "GitResult",
    "ErrorCategory",
    "Operation",
]
