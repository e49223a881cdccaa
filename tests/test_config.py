import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from mcp_server_jj.config import (
    ServerConfig,
    is_jj_workspace,
    load_environment_variables,
)


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("MCP_JJ_REPOSITORY", "MCP_JJ_BINARY", "MCP_JJ_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


def test_defaults(clean_env):
    config = ServerConfig.from_env()
    assert config.repository is None
    assert config.jj_binary == "jj"
    assert config.timeout_seconds is None
    assert config.log_level == "WARNING"


def test_environment_binding(clean_env, monkeypatch, tmp_path: Path):
    monkeypatch.setenv("MCP_JJ_REPOSITORY", str(tmp_path))
    monkeypatch.setenv("MCP_JJ_BINARY", "/opt/jj")
    monkeypatch.setenv("MCP_JJ_TIMEOUT", "30")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = ServerConfig.from_env()
    assert config.repository == tmp_path
    assert config.jj_binary == "/opt/jj"
    assert config.timeout_seconds == 30.0
    assert config.log_level == "DEBUG"


def test_overrides_win_over_environment(clean_env, monkeypatch):
    monkeypatch.setenv("MCP_JJ_BINARY", "/opt/jj")
    config = ServerConfig.from_env(jj_binary="/usr/local/bin/jj", timeout_seconds=None)
    assert config.jj_binary == "/usr/local/bin/jj"
    assert config.timeout_seconds is None


@pytest.mark.parametrize("timeout", [0, -5])
def test_timeout_must_be_positive(timeout):
    with pytest.raises(ValidationError):
        ServerConfig(timeout_seconds=timeout)


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        ServerConfig(log_level="LOUD")


def test_config_is_immutable():
    config = ServerConfig()
    with pytest.raises(ValidationError):
        config.jj_binary = "other"


def test_load_environment_variables_from_repository(
    tmp_path: Path, monkeypatch
):
    monkeypatch.chdir(tmp_path)
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".env").write_text("MCP_JJ_TEST_VALUE=from-repo\n")
    monkeypatch.delenv("MCP_JJ_TEST_VALUE", raising=False)

    loaded = load_environment_variables(repo)

    assert loaded == [str(repo / ".env")]
    assert os.environ["MCP_JJ_TEST_VALUE"] == "from-repo"
    monkeypatch.delenv("MCP_JJ_TEST_VALUE")


def test_load_environment_variables_does_not_override(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("MCP_JJ_TEST_VALUE=from-file\n")
    monkeypatch.setenv("MCP_JJ_TEST_VALUE", "from-env")

    load_environment_variables()

    assert os.environ["MCP_JJ_TEST_VALUE"] == "from-env"


def test_is_jj_workspace(tmp_path: Path):
    assert not is_jj_workspace(tmp_path)
    (tmp_path / ".jj").mkdir()
    assert is_jj_workspace(tmp_path)
