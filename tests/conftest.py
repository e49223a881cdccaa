"""
Shared pytest fixtures for the MCP jj Server test suite.

Most tests run against ``fake_jj``, a tiny executable that echoes the
argument vector and working directory it was started with as JSON. Tests
that need a real Jujutsu install use ``jj_repo`` and are skipped when ``jj``
is not on PATH.
"""

import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from mcp_server_jj.config import ServerConfig

FAKE_JJ_SOURCE = """\
#!{python}
import json, os, sys

if os.environ.get("FAKE_JJ_FAIL"):
    sys.stderr.write(os.environ["FAKE_JJ_FAIL"] + "\\n")
    sys.exit(int(os.environ.get("FAKE_JJ_EXIT", "1")))

if os.environ.get("FAKE_JJ_QUIET"):
    sys.stderr.write("Working copy now at: qpvuntsm 230dd059 (empty)\\n")
    sys.exit(0)

json.dump({{"args": sys.argv[1:], "cwd": os.getcwd()}}, sys.stdout)
"""


@pytest.fixture
def fake_jj(tmp_path: Path) -> Path:
    """Create an executable that records how it was called."""
    script = tmp_path / "bin" / "jj"
    script.parent.mkdir()
    script.write_text(FAKE_JJ_SOURCE.format(python=sys.executable))
    script.chmod(0o755)
    return script


@pytest.fixture
def fake_config(fake_jj: Path) -> ServerConfig:
    return ServerConfig(jj_binary=str(fake_jj))


@pytest.fixture
def missing_jj_config(tmp_path: Path) -> ServerConfig:
    return ServerConfig(jj_binary=str(tmp_path / "no-such-jj"))


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    path = tmp_path / "repoA"
    path.mkdir()
    return path


@pytest.fixture
def jj_repo(tmp_path: Path, monkeypatch) -> Path:
    """Initialize a real jj repository, skipping when jj is unavailable."""
    if shutil.which("jj") is None:
        pytest.skip("jj not available")

    repo_path = tmp_path / "jj_repo"
    repo_path.mkdir()
    monkeypatch.setenv("JJ_USER", "Test User")
    monkeypatch.setenv("JJ_EMAIL", "test@example.com")
    result = subprocess.run(
        ["jj", "git", "init"],
        cwd=repo_path,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        pytest.skip(f"Failed to init jj repo: {result.stderr}")
    return repo_path
