"""Run the jj executable for MCP jj Server"""

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from ..error_handling import ExecutionFailed, ToolNotFound

logger = logging.getLogger(__name__)

JJ_COMMAND = "jj"


@dataclass(frozen=True)
class ExecutionResult:
    returncode: int
    stdout: str
    stderr: str


def run_jj(
    args: Sequence[str],
    cwd: Optional[str] = None,
    binary: str = JJ_COMMAND,
    timeout: Optional[float] = None,
) -> ExecutionResult:
    """Run jj with an explicit argument vector and wait for it to finish.

    Args:
        args: Arguments after the executable name, passed without a shell
        cwd: Working directory for the child, or None to inherit ours
        binary: Executable name (looked up on PATH) or path
        timeout: Seconds to wait before giving up, or None to wait forever

    Returns:
        ExecutionResult with stripped stdout and stderr

    Raises:
        ToolNotFound: jj is not installed or could not be started
        ExecutionFailed: cwd is missing, or jj exited non-zero or timed out
    """
    executable = shutil.which(binary)
    if executable is None:
        raise ToolNotFound(
            f"'{binary}' executable not found on PATH. Is Jujutsu (jj) installed?"
        )

    if cwd is not None and not os.path.isdir(cwd):
        raise ExecutionFailed(
            f"Working directory does not exist or is not a directory: {cwd} (check repoPath/cwd)"
        )

    cmd = [executable, *args]
    logger.debug(f"Running {cmd} in {cwd or '.'}")

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ExecutionFailed(
            f"'{binary} {' '.join(args)}' timed out after {e.timeout}s"
        ) from e
    except OSError as e:
        raise ToolNotFound(f"Failed to start '{binary}': {e}") from e

    stdout = result.stdout.strip()
    stderr = result.stderr.strip()

    if result.returncode != 0:
        message = stderr or stdout or f"'{binary}' exited with status {result.returncode}"
        raise ExecutionFailed(message, returncode=result.returncode, stderr=stderr)

    return ExecutionResult(returncode=result.returncode, stdout=stdout, stderr=stderr)
