"""Failure classification for git invocations.

A failed git run is mapped to a user-facing message by walking ``FAILURE_RULES``
in order; the first rule whose predicate matches stderr wins. Anything that no
rule claims is passed through verbatim. Rules with no message of their own
(``no_commits``) keep stderr and leave the decision to the call site.
"""
from enum import Enum
from typing import Callable, List, NamedTuple, Optional


class ErrorCategory(str, Enum):
    """Kinds of failure a git call can end in."""

    not_a_repository = "not_a_repository"
    no_commits = "no_commits"
    empty_failure = "empty_failure"
    tool_missing = "tool_missing"
    spawn_failed = "spawn_failed"
    verbatim = "verbatim"


NOT_A_REPOSITORY_MESSAGE = "Not a git repository. Make sure you're in a git repository directory."
EMPTY_FAILURE_MESSAGE = "Git command failed with no error message"
TOOL_MISSING_MESSAGE = "Git is not installed or not found in PATH. Please install git first."
SPAWN_FAILED_TEMPLATE = "Failed to execute git command: {error}"

# git log on an unborn branch: current wording, then the pre-2.20 one
_NO_COMMITS_MARKERS = ("does not have any commits yet", "bad default revision 'HEAD'")

# outside a repository, older git runs `diff` in --no-index mode and answers --cached with its usage
_NO_INDEX_USAGE = "usage: git diff --no-index"


class FailureRule(NamedTuple):
    category: ErrorCategory
    matches: Callable[[str], bool]
    message: Optional[str]  # None keeps stderr as-is


FAILURE_RULES: List[FailureRule] = [
    FailureRule(
        ErrorCategory.not_a_repository,
        lambda stderr: "not a git repository" in stderr.lower(),
        NOT_A_REPOSITORY_MESSAGE,
    ),
    FailureRule(
        ErrorCategory.not_a_repository,
        lambda stderr: _NO_INDEX_USAGE in stderr,
        NOT_A_REPOSITORY_MESSAGE,
    ),
    FailureRule(
        ErrorCategory.no_commits,
        lambda stderr: any(marker in stderr for marker in _NO_COMMITS_MARKERS),
        None,
    ),
    FailureRule(
        ErrorCategory.empty_failure,
        lambda stderr: not stderr.strip(),
        EMPTY_FAILURE_MESSAGE,
    ),
]


def classify_failure(stderr: str) -> tuple[ErrorCategory, str]:
    """Return the category and caller-facing message for a non-zero git exit."""
    for rule in FAILURE_RULES:
        if rule.matches(stderr):
            return rule.category, stderr if rule.message is None else rule.message
    return ErrorCategory.verbatim, stderr


def classify_spawn_error(error: OSError) -> tuple[ErrorCategory, str]:
    """Return the category and message for a git process that never started."""
    if isinstance(error, FileNotFoundError):
        return ErrorCategory.tool_missing, TOOL_MISSING_MESSAGE
    return ErrorCategory.spawn_failed, SPAWN_FAILED_TEMPLATE.format(error=error)
