"""MCP server exposing read-only git context for commit message drafting.

Four tools (``git_status``, ``git_diff_staged``, ``git_diff_all``, ``git_log``)
wrap single git invocations. Failures come back as error-flagged tool results,
never as protocol errors, so the assistant can react per call.

The tools are coroutines that hand the blocking git call to a worker thread, so
a slow repository never stalls other requests on the event loop.
"""
import argparse
import json
import sys
from typing import Annotated, Any, Dict, List, Optional

import anyio.to_thread
from fastapi import APIRouter, FastAPI
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent
from pydantic import Field

from . import __version__
from .config import get_settings
from .git_commands import git_diff_all as run_diff_all
from .git_commands import git_diff_staged as run_diff_staged
from .git_commands import git_log as run_log
from .git_commands import git_status as run_status
from .git_commands import git_version
from .logging_utils import configure_logging
from .models import (
    GitDiffAllInput,
    GitDiffStagedInput,
    GitLogInput,
    GitResult,
    GitStatusInput,
    Operation,
)

STARTUP_LINE = f"Git Commit Helper MCP Server v{__version__} starting..."

RepoPath = Annotated[
    Optional[str],
    Field(description="Path to the git repository (optional, defaults to current directory)"),
]


def _to_tool_result(result: GitResult) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=result.text)], isError=not result.ok)


async def git_status(repo_path: RepoPath = None) -> CallToolResult:
    """Get git status."""
    result = await anyio.to_thread.run_sync(run_status, GitStatusInput(repo_path=repo_path))
    return _to_tool_result(result)


async def git_diff_staged(repo_path: RepoPath = None) -> CallToolResult:
    """Get staged changes (what will be committed)."""
    result = await anyio.to_thread.run_sync(run_diff_staged, GitDiffStagedInput(repo_path=repo_path))
    return _to_tool_result(result)


async def git_diff_all(
    repo_path: RepoPath = None,
    include_untracked: Annotated[
        Optional[bool],
        Field(description="Include untracked files in the output (default: false)"),
    ] = None,
) -> CallToolResult:
    """Get all changes (both staged and unstaged)."""
    payload = GitDiffAllInput(repo_path=repo_path, include_untracked=include_untracked)
    result = await anyio.to_thread.run_sync(run_diff_all, payload)
    return _to_tool_result(result)


async def git_log(
    repo_path: RepoPath = None,
    limit: Annotated[
        Optional[int],
        Field(description="Maximum number of commits to show (default: 10, max: 50)"),
    ] = None,
) -> CallToolResult:
    """Get recent commit history."""
    result = await anyio.to_thread.run_sync(run_log, GitLogInput(repo_path=repo_path, limit=limit))
    return _to_tool_result(result)


async def health() -> str:
    """Report the server version and whether the configured git executable works."""
    s = get_settings()
    version = await anyio.to_thread.run_sync(git_version)
    return json.dumps({
        "status": "ok" if version.ok else "degraded",
        "server_version": __version__,
        "git": {
            "executable": s.git_executable,
            "ready": version.ok,
            "version": version.text if version.ok else None,
            "error": None if version.ok else version.text,
        },
        "log_level": s.log_level,
        "tools_available": [op.value for op in Operation],
    })


TOOL_DESCRIPTIONS = {
    Operation.status: (
        "Shows the current state of a git repository including modified files, staged files, "
        "and untracked files. Use this when you need to see what files have changed or when asked "
        "questions like 'Show me what files I've changed' or 'What's the current status of my repo?'"
    ),
    Operation.diff_staged: (
        "Shows the line-by-line changes for files that have been staged with 'git add'. This is what "
        "will be included in the next commit. Particularly useful when generating commit messages. "
        "Use this when asked 'Show me what I'm about to commit' or 'Generate a commit message for my "
        "staged changes'."
    ),
    Operation.diff_all: (
        "Shows all changes in the repository, including both staged and unstaged modifications. "
        "Optionally includes a list of untracked files. Use this when you need to see everything "
        "that's changed, not just what's staged. Users might ask 'Show me all my changes' or "
        "'What have I modified in this repository?'"
    ),
    Operation.log: (
        "Shows recent commit history so you can understand the project's commit message style and "
        "conventions. Formatted as: 'hash - author, time : message'. Use this when asked 'Show me "
        "recent commits for context' or 'What's the commit message style in this project?'"
    ),
}

_TOOLS = {
    Operation.status: git_status,
    Operation.diff_staged: git_diff_staged,
    Operation.diff_all: git_diff_all,
    Operation.log: git_log,
}


def build_server(host: str = "127.0.0.1", port: int = 8000) -> FastMCP:
    """Create the FastMCP server with every tool registered.

    ``host`` also decides DNS-rebinding protection on the HTTP transport:
    FastMCP only accepts localhost Host headers when bound to a loopback address.
    """
    mcp = FastMCP(
        "git-commit-helper",
        instructions="Read-only git context (status, diffs, recent history) for writing commit messages.",
        host=host,
        port=port,
    )
    for op, fn in _TOOLS.items():
        mcp.add_tool(fn, name=op.value, description=TOOL_DESCRIPTIONS[op])
    mcp.add_tool(health)
    return mcp


# stdio server; http mode builds its own from the configured bind address
server = build_server()


# REST mirror of the tools (no MCP session needed), mounted under /api in http mode
rest_router = APIRouter(tags=["REST API"])


def _rest_payload(result: GitResult) -> Dict[str, Any]:
    return {"ok": result.ok, "text": result.text}


@rest_router.post("/git_status")
def rest_git_status(payload: GitStatusInput) -> Dict[str, Any]:
    return _rest_payload(run_status(payload))


@rest_router.post("/git_diff_staged")
def rest_git_diff_staged(payload: GitDiffStagedInput) -> Dict[str, Any]:
    return _rest_payload(run_diff_staged(payload))


@rest_router.post("/git_diff_all")
def rest_git_diff_all(payload: GitDiffAllInput) -> Dict[str, Any]:
    return _rest_payload(run_diff_all(payload))


@rest_router.post("/git_log")
def rest_git_log(payload: GitLogInput) -> Dict[str, Any]:
    return _rest_payload(run_log(payload))


@rest_router.get("/tools")
def rest_list_tools() -> Dict[str, Any]:
    """List the tools reachable over REST."""
    return {"tools": [{"name": op.value, "endpoint": f"/api/{op.value}"} for op in Operation]}


rest_api_app = FastAPI(title="Git Commit Helper REST API", version=__version__)
rest_api_app.include_router(rest_router)


def create_http_app():
    """Streamable-HTTP MCP app (serving /mcp) with the REST mirror mounted at /api."""
    settings = get_settings()
    app = build_server(settings.http_host, settings.http_port).streamable_http_app()
    app.mount("/api", rest_api_app)
    return app


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="git-commit-helper", description="Git commit helper MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default=None,
        help="MCP transport (default: MCP_TRANSPORT or stdio)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Console entry point."""
    args = _parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)
    transport = args.transport or settings.transport

    print(STARTUP_LINE, file=sys.stderr)
    try:
        if transport == "http":
            import uvicorn

            app = create_http_app()
            print(f"Server ready and listening on http://{settings.http_host}:{settings.http_port}", file=sys.stderr)
            uvicorn.run(app, host=settings.http_host, port=settings.http_port, log_level=settings.log_level.lower())
        else:
            print("Server ready and listening on stdio", file=sys.stderr)
            server.run("stdio")
    except Exception as e:  # noqa: BLE001 - transport failure is fatal
        print(f"Failed to start MCP server: {e}", file=sys.stderr)
        sys.exit(1)


__all__ = [
    "server",
    "build_server",
    "rest_api_app",
    "create_http_app",
    "git_status",
    "git_diff_staged",
    "git_diff_all",
    "git_log",
    "health",
    "main",
]
