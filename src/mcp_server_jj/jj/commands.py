"""Argument vector builders for jj commands.

Every builder is a pure function of its parameter model. Optional values are
appended only when present, booleans become bare flags, integers become
decimal strings, and paths or revision expressions are passed through as-is.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from ..error_handling import MalformedParameters, UnknownTool
from .models import (
    JjCommit,
    JjDiff,
    JjGitClone,
    JjLog,
    JjNew,
    JjParams,
    JjRebase,
    JjStatus,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandInvocation:
    """Arguments for one jj run plus the directory to run it in."""

    args: Tuple[str, ...]
    cwd: Optional[str] = None


def add_repo_args(args: List[str], params: JjParams) -> None:
    """Target repoPath explicitly when an explicit cwd takes its place as working directory."""
    if params.repo_path and params.cwd:
        args.extend(["--repository", params.repo_path])


def add_option(args: List[str], flag: str, value) -> None:
    if value is not None:
        args.extend([flag, str(value)])


def add_flag(args: List[str], flag: str, enabled: Optional[bool]) -> None:
    if enabled:
        args.append(flag)


def build_status(params: JjStatus) -> List[str]:
    args = ["status"]
    add_repo_args(args, params)
    return args


def build_rebase(params: JjRebase) -> List[str]:
    missing = [
        name
        for name, value in (("source", params.source), ("destination", params.destination))
        if not value
    ]
    if missing:
        raise MalformedParameters(
            f"Invalid parameters for 'rebase': {', '.join(missing)} required"
        )

    args = ["rebase", "--source", params.source, "--destination", params.destination]
    add_repo_args(args, params)
    return args


def build_commit(params: JjCommit) -> List[str]:
    args = ["commit", "--message", params.message]
    add_repo_args(args, params)
    return args


def build_new(params: JjNew) -> List[str]:
    args = ["new"]
    if isinstance(params.parents, str):
        args.append(params.parents)
    elif params.parents:
        args.extend(params.parents)
    add_repo_args(args, params)
    return args


def build_log(params: JjLog) -> List[str]:
    args = ["log"]
    add_option(args, "--limit", params.limit)
    add_option(args, "--template", params.template)
    add_option(args, "--revisions", params.revisions)
    add_repo_args(args, params)
    return args


def build_diff(params: JjDiff) -> List[str]:
    args = ["diff"]
    add_option(args, "--from", params.from_)
    add_option(args, "--to", params.to)
    add_option(args, "--context", params.context)
    add_flag(args, "--summary", params.summary)
    add_flag(args, "--stat", params.stat)
    if params.paths:
        args.extend(params.paths)
    add_repo_args(args, params)
    return args


def build_git_clone(params: JjGitClone) -> List[str]:
    # --repository makes no sense for a repository that does not exist yet
    args = ["git", "clone", params.source]
    if params.destination is not None:
        args.append(params.destination)
    add_flag(args, "--colocate", params.colocate)
    add_option(args, "--remote", params.remote)
    add_option(args, "--depth", params.depth)
    return args


COMMAND_BUILDERS: Dict[str, Callable[..., List[str]]] = {
    "status": build_status,
    "rebase": build_rebase,
    "commit": build_commit,
    "new": build_new,
    "log": build_log,
    "diff": build_diff,
    "git-clone": build_git_clone,
}


def resolve_working_directory(
    params: JjParams, default_cwd: Optional[Path] = None
) -> Optional[str]:
    """Pick the directory jj runs in: cwd, then repoPath, then the server default.

    None means the server process's own working directory.
    """
    if params.cwd:
        return params.cwd
    if params.repo_path:
        return params.repo_path
    if default_cwd is not None:
        return str(default_cwd)
    return None


def build_invocation(
    tool: str, params: JjParams, default_cwd: Optional[Path] = None
) -> CommandInvocation:
    builder = COMMAND_BUILDERS.get(tool)
    if builder is None:
        raise UnknownTool(f"Unknown tool: {tool}")

    invocation = CommandInvocation(
        args=tuple(builder(params)),
        cwd=resolve_working_directory(params, default_cwd),
    )
    logger.debug(f"Built invocation for {tool}: {invocation}")
    return invocation
