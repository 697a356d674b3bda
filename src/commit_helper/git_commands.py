"""Implementation of git command execution."""
import logging
import os
import subprocess
from typing import List, Optional

from .config import get_settings
from .errors import NOT_A_REPOSITORY_MESSAGE, ErrorCategory, classify_failure, classify_spawn_error
from .models import GitDiffAllInput, GitDiffStagedInput, GitLogInput, GitResult, GitStatusInput

logger = logging.getLogger(__name__)

NO_STAGED_CHANGES = "No staged changes found. Use 'git add' to stage changes first."
NO_CHANGES = "No changes found in the repository."
NO_COMMITS = "No commits found in this repository."
UNTRACKED_HEADER = "\n\n--- Untracked files ---\n"
LOG_FORMAT = "--pretty=format:%h - %an, %ar : %s"


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def run_git(argv: List[str], repo_path: Optional[str] = None) -> GitResult:
    """Execute git once and normalize the outcome.

    Args:
        argv: Git command arguments, without the executable
        repo_path: Working directory for the child process; the server's own
            working directory when omitted

    Returns:
        GitResult carrying stdout on success, or the classified error message
    """
    if repo_path is not None and not os.path.isdir(repo_path):
        logger.info("git %s: %r is not a directory", " ".join(argv), repo_path)
        return GitResult.failure(ErrorCategory.not_a_repository, NOT_A_REPOSITORY_MESSAGE)

    executable = get_settings().git_executable
    logger.debug("running %s %s (cwd=%s)", executable, " ".join(argv), repo_path or os.getcwd())
    try:
        proc = subprocess.run(
            [executable, *argv],
            cwd=repo_path,
            capture_output=True,
            check=False,
        )
    except OSError as e:
        category, message = classify_spawn_error(e)
        logger.info("git %s could not start: %s", " ".join(argv), category.value)
        return GitResult.failure(category, message)

    logger.debug("git %s exited with %d", " ".join(argv), proc.returncode)
    if proc.returncode == 0:
        return GitResult.success(_decode(proc.stdout))

    category, message = classify_failure(_decode(proc.stderr))
    logger.info("git %s failed: %s", " ".join(argv), category.value)
    return GitResult.failure(category, message)


def _or_placeholder(result: GitResult, placeholder: str) -> GitResult:
    if result.ok and not result.text.strip():
        return GitResult.success(placeholder)
    return result


def git_status(payload: GitStatusInput) -> GitResult:
    """Working tree status, returned as git prints it."""
    return run_git(["status"], payload.repo_path)


def git_diff_staged(payload: GitDiffStagedInput) -> GitResult:
    """Diff of the index against HEAD, i.e. what the next commit contains."""
    return _or_placeholder(run_git(["diff", "--cached"], payload.repo_path), NO_STAGED_CHANGES)


def git_diff_all(payload: GitDiffAllInput) -> GitResult:
    """Staged and unstaged changes against HEAD, optionally listing untracked files.

    The untracked listing is best-effort: if ``git ls-files`` fails the section
    is left out and the tracked diff is still returned.
    """
    result = run_git(["diff", "HEAD"], payload.repo_path)
    if not result.ok:
        return result

    text = result.text
    if payload.include_untracked:
        untracked = run_git(["ls-files", "--others", "--exclude-standard"], payload.repo_path)
        if not untracked.ok:
            logger.warning("skipping untracked files: %s", untracked.text.strip())
        elif untracked.text.strip():
            text += UNTRACKED_HEADER + untracked.text

    return _or_placeholder(GitResult.success(text), NO_CHANGES)


def git_log(payload: GitLogInput) -> GitResult:
    """The last ``payload.limit`` commits as ``hash - author, time : subject`` lines."""
    argv = ["log", f"-{payload.limit}", LOG_FORMAT]
    result = run_git(argv, payload.repo_path)
    if result.category is ErrorCategory.no_commits:
        return GitResult.success(NO_COMMITS)
    return _or_placeholder(result, NO_COMMITS)


def git_version() -> GitResult:
    """Output of ``git --version``, used for health reporting."""
    result = run_git(["--version"])
    if result.ok:
        return GitResult.success(result.text.strip())
    return result
