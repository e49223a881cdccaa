"""jj command layer for MCP jj Server"""

from .commands import *
from .executor import *
from .models import *

__all__ = [
    # Parameter models
    "JjParams",
    "JjStatus",
    "JjRebase",
    "JjCommit",
    "JjNew",
    "JjLog",
    "JjDiff",
    "JjGitClone",
    "validate_params",
    # Command builders
    "CommandInvocation",
    "COMMAND_BUILDERS",
    "build_status",
    "build_rebase",
    "build_commit",
    "build_new",
    "build_log",
    "build_diff",
    "build_git_clone",
    "build_invocation",
    "resolve_working_directory",
    # Execution
    "ExecutionResult",
    "run_jj",
]
